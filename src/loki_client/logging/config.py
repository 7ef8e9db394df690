"""Structured logging for loki_client.

Every module in the package logs through :func:`get_logger`, which names its
stdlib logger under ``loki_client``. Applications can send those events to
stdout with :func:`configure_logging`, or attach their own handlers to the
``loki_client`` logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

LOGGER_NAME = "loki_client"

_handler: logging.Handler | None = None


def _renderer(json_output: bool, debug: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=debug),
    )


def configure_logging(
    verbose: bool = False,
    debug: bool = False,
    json_output: bool = False,
) -> logging.Handler:
    """Send loki_client log events to stdout.

    Levels are taken from the stdlib ``loki_client`` logger, so other
    loggers in the application keep their own levels and handlers. Calling
    this again replaces the handler installed by the previous call.

    Args:
        verbose: Emit INFO events (request outcomes, flush and shutdown).
        debug: Emit DEBUG events (every request, skipped status lines).
        json_output: Render events as JSON instead of the rich console format.

    Returns:
        The handler attached to the ``loki_client`` logger.
    """
    global _handler

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(json_output, debug),
            foreign_pre_chain=pre_chain,
        )
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    _handler = handler
    return handler


def get_logger(name: str | None = None, **initial_context: Any) -> Any:
    """Get a structlog logger inside the ``loki_client`` namespace.

    Args:
        name: Dotted module name. Names outside the package are nested under it.
        **initial_context: Context variables to bind to the logger.
    """
    if name is None:
        name = LOGGER_NAME
    elif name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"

    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
