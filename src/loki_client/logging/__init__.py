"""Logging configuration for loki_client."""

from loki_client.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
