"""Async client library for the Grafana Loki HTTP API.

Provides log stream models with a chainable builder, and a client for the
readiness, services, flush, ingester shutdown, build info and push
endpoints.
"""

from loki_client.__version__ import __version__
from loki_client.client import LokiClient
from loki_client.config import LokiConfig
from loki_client.exceptions import (
    ClockError,
    LokiAuthError,
    LokiConnectionError,
    LokiError,
    LokiNotFoundError,
    LokiResponseError,
    LokiTransportError,
    SerializationError,
    ServiceStatusParseError,
    StreamBuilderError,
)
from loki_client.models import (
    BuildInfo,
    Clock,
    Entry,
    ServiceStatus,
    Stream,
    StreamBuilder,
    Streams,
    parse_services,
)

__all__ = [
    "BuildInfo",
    "Clock",
    "ClockError",
    "Entry",
    "LokiAuthError",
    "LokiClient",
    "LokiConfig",
    "LokiConnectionError",
    "LokiError",
    "LokiNotFoundError",
    "LokiResponseError",
    "LokiTransportError",
    "SerializationError",
    "ServiceStatus",
    "ServiceStatusParseError",
    "Stream",
    "StreamBuilder",
    "StreamBuilderError",
    "Streams",
    "__version__",
    "parse_services",
]
