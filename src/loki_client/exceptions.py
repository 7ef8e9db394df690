"""Loki client custom exceptions."""

from __future__ import annotations


class LokiError(Exception):
    """Base exception for everything raised by loki_client."""


class LokiTransportError(LokiError):
    """Base exception for failures talking to the Loki HTTP API.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code returned by Loki (if applicable).
        response_body: Raw response text (if available).
        endpoint: The API endpoint that was called.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize LokiTransportError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code returned by Loki.
            response_body: Raw response text returned by Loki.
            endpoint: The API endpoint that was called.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.endpoint:
            parts.append(f"[endpoint: {self.endpoint}]")
        return " ".join(parts)


class LokiConnectionError(LokiTransportError):
    """Exception raised when the Loki server cannot be reached.

    This includes network errors, timeouts, and DNS resolution failures.
    """

    def __init__(
        self,
        message: str = "Failed to connect to Loki",
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize LokiConnectionError.

        Args:
            message: Human-readable error message.
            endpoint: The API endpoint that was attempted.
            original_error: The original exception that caused this error.
        """
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error


class LokiAuthError(LokiTransportError):
    """Exception raised when Loki rejects the request (401 or 403)."""

    def __init__(
        self,
        message: str = "Loki authentication failed",
        status_code: int | None = 401,
        response_body: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
        )


class LokiNotFoundError(LokiTransportError):
    """Exception raised when a Loki endpoint returns 404."""

    def __init__(
        self,
        message: str = "Loki resource not found",
        response_body: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            response_body=response_body,
            endpoint=endpoint,
        )


class LokiResponseError(LokiTransportError):
    """Exception raised for non-success responses or undecodable bodies."""


class ClockError(LokiError):
    """Exception raised when the wall clock reports a time before the Unix epoch.

    Attributes:
        reading: The raw clock reading in nanoseconds.
    """

    def __init__(self, reading: int) -> None:
        super().__init__(f"Clock reported a time before the Unix epoch: {reading}ns")
        self.reading = reading


class SerializationError(LokiError):
    """Exception raised when a push payload cannot be encoded as JSON."""


class StreamBuilderError(LokiError):
    """Exception raised when a StreamBuilder is used after build()."""


class ServiceStatusParseError(LokiError, ValueError):
    """Exception raised for a status literal outside the known vocabulary.

    Attributes:
        value: The unrecognised status text.
    """

    def __init__(self, value: str) -> None:
        super().__init__(f"Could not parse service status: {value!r}")
        self.value = value
