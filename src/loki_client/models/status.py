"""Service status models for the Loki ``/services`` endpoint.

The endpoint answers with plain text, one component per line::

    ingester => Running
    querier => Starting
"""

from __future__ import annotations

from enum import StrEnum

from loki_client.exceptions import ServiceStatusParseError
from loki_client.logging import get_logger

logger = get_logger(__name__)

SERVICE_SEPARATOR = " => "


class ServiceStatus(StrEnum):
    """Lifecycle state of one internal Loki service component."""

    NEW = "New"
    STARTING = "Starting"
    RUNNING = "Running"
    STOPPING = "Stopping"
    TERMINATED = "Terminated"
    FAILED = "Failed"

    @classmethod
    def parse(cls, value: str) -> ServiceStatus:
        """Parse a status literal.

        Args:
            value: One of the six status literals, matched exactly.

        Returns:
            The matching ServiceStatus.

        Raises:
            ServiceStatusParseError: If the literal is not recognised.
        """
        try:
            return cls(value)
        except ValueError:
            raise ServiceStatusParseError(value) from None


def parse_services(text: str) -> dict[str, ServiceStatus]:
    """Parse the ``/services`` response body.

    Lines that do not have the ``name => Status`` shape, or whose status is
    unknown, are skipped.

    Args:
        text: Raw response body.

    Returns:
        Mapping of service name to status.
    """
    services: dict[str, ServiceStatus] = {}

    for line in text.splitlines():
        parts = line.split(SERVICE_SEPARATOR)
        if len(parts) != 2:
            continue

        name, literal = parts
        try:
            services[name] = ServiceStatus.parse(literal)
        except ServiceStatusParseError:
            logger.debug("Skipping unknown service status", service=name, status=literal)

    return services
