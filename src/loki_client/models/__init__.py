"""Loki data models.

This module exports the models exchanged with the Loki HTTP API.
"""

from loki_client.models.build_info import BuildInfo
from loki_client.models.status import ServiceStatus, parse_services
from loki_client.models.stream import Clock, Entry, Stream, StreamBuilder, Streams

__all__ = [
    "BuildInfo",
    "Clock",
    "Entry",
    "ServiceStatus",
    "Stream",
    "StreamBuilder",
    "Streams",
    "parse_services",
]
