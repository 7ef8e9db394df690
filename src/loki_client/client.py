"""Grafana Loki HTTP API client."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx
from pydantic import ValidationError

from loki_client.config import LokiConfig
from loki_client.exceptions import (
    LokiAuthError,
    LokiConnectionError,
    LokiNotFoundError,
    LokiResponseError,
    SerializationError,
)
from loki_client.logging import get_logger
from loki_client.models.build_info import BuildInfo
from loki_client.models.status import ServiceStatus, parse_services
from loki_client.models.stream import Stream, Streams

logger = get_logger(__name__)

READY_PATH = "/ready"
SERVICES_PATH = "/services"
FLUSH_PATH = "/flush"
INGESTER_SHUTDOWN_PATH = "/ingester/shutdown"
BUILD_INFO_PATH = "/loki/api/v1/status/buildinfo"
PUSH_PATH = "/loki/api/v1/push"

TENANT_HEADER = "X-ScopeOrgID"


class LokiClient:
    """Async client for the Grafana Loki HTTP API.

    Requests are sent once; failures are raised as
    :class:`~loki_client.exceptions.LokiTransportError` subclasses and never
    retried.

    Example:
        ```python
        from loki_client import LokiClient, StreamBuilder

        stream = StreamBuilder().label("app", "checkout").log("order accepted").build()

        async with LokiClient("http://localhost:3100") as client:
            if await client.ready():
                await client.push([stream], tenant="team-a")
        ```
    """

    def __init__(self, config: LokiConfig | str | None = None) -> None:
        """Initialize Loki client.

        Args:
            config: Loki configuration, or just the server URL.
        """
        if config is None:
            config = LokiConfig()
        elif isinstance(config, str):
            config = LokiConfig(url=config)

        self.config = config
        self.base_url = config.url
        self.timeout = config.timeout
        self._client: httpx.AsyncClient | None = None

    def _build_client(self, **kwargs: Any) -> httpx.AsyncClient:
        """Build an httpx async client for the configured server."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            verify=self.config.verify_ssl,
            **kwargs,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def __aenter__(self) -> LokiClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - close client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Loki client closed")

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a single HTTP request.

        Args:
            method: HTTP method (GET, POST).
            path: URL path relative to the server URL.
            **kwargs: Additional arguments for the request.

        Returns:
            httpx.Response object.

        Raises:
            LokiConnectionError: If the request could not be completed.
            LokiResponseError: If the response body could not be decoded.
        """
        logger.debug("Loki request", method=method, path=path)
        try:
            return await self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("Loki request timed out", error=str(e), url=f"{self.base_url}{path}")
            raise LokiConnectionError(
                f"Request to Loki timed out: {e}", endpoint=path, original_error=e
            ) from e
        except httpx.TransportError as e:
            logger.error("Loki connection failed", error=str(e), url=f"{self.base_url}{path}")
            raise LokiConnectionError(
                f"Failed to connect to Loki: {e}", endpoint=path, original_error=e
            ) from e
        except httpx.DecodingError as e:
            logger.error("Loki response could not be decoded", error=str(e), path=path)
            raise LokiResponseError(
                f"Failed to decode Loki response: {e}", endpoint=path
            ) from e
        except httpx.RequestError as e:
            logger.error("Loki request failed", error=str(e), url=f"{self.base_url}{path}")
            raise LokiConnectionError(
                f"Loki request failed: {e}", endpoint=path, original_error=e
            ) from e

    def _check_response(self, response: httpx.Response, path: str) -> None:
        """Raise the matching exception for a non-success response.

        Raises:
            LokiAuthError: If authentication fails.
            LokiNotFoundError: If the endpoint is not found.
            LokiResponseError: For any other non-success status.
        """
        if response.is_success:
            return

        status = response.status_code
        logger.warning("Loki request failed", path=path, status_code=status)

        if status in (401, 403):
            raise LokiAuthError(
                "Loki authentication failed" if status == 401 else "Loki access forbidden",
                status_code=status,
                response_body=response.text,
                endpoint=path,
            )

        if status == 404:
            raise LokiNotFoundError(response_body=response.text, endpoint=path)

        raise LokiResponseError(
            f"Loki request failed: {response.text}",
            status_code=status,
            response_body=response.text,
            endpoint=path,
        )

    async def ready(self) -> bool:
        """Check whether Loki is ready to accept traffic.

        Returns:
            True if ``/ready`` answered with a success status.
        """
        response = await self._request("GET", READY_PATH)
        return response.is_success

    async def services(self) -> dict[str, ServiceStatus]:
        """Get the status of each internal Loki service.

        Returns:
            Mapping of service name to status. Unparseable lines are dropped.
        """
        response = await self._request("GET", SERVICES_PATH)
        self._check_response(response, SERVICES_PATH)
        return parse_services(response.text)

    async def flush(self) -> None:
        """Flush in-memory chunks to the backing store."""
        response = await self._request("POST", FLUSH_PATH)
        self._check_response(response, FLUSH_PATH)
        logger.info("Loki flush requested")

    async def ingester_shutdown(self) -> None:
        """Flush in-memory chunks and shut the ingester down."""
        response = await self._request("POST", INGESTER_SHUTDOWN_PATH)
        self._check_response(response, INGESTER_SHUTDOWN_PATH)
        logger.info("Loki ingester shutdown requested")

    async def build_info(self) -> BuildInfo:
        """Get build information of the Loki server.

        Raises:
            LokiResponseError: If the body is not a valid build info document.
        """
        response = await self._request("GET", BUILD_INFO_PATH)
        self._check_response(response, BUILD_INFO_PATH)

        try:
            return BuildInfo.model_validate_json(response.text)
        except ValidationError as e:
            raise LokiResponseError(
                f"Invalid build info response: {e}",
                status_code=response.status_code,
                response_body=response.text,
                endpoint=BUILD_INFO_PATH,
            ) from e

    async def push(self, streams: Iterable[Stream], tenant: str | None = None) -> None:
        """Push log streams to Loki.

        Args:
            streams: Streams to submit in a single request.
            tenant: Tenant sent as ``X-ScopeOrgID``. Falls back to the
                configured tenant only when None; the header is omitted when the
                resulting tenant is empty.

        Raises:
            SerializationError: If the streams cannot be encoded.
            LokiTransportError: If the request fails.
        """
        try:
            envelope = Streams(streams=tuple(streams))
        except ValidationError as e:
            raise SerializationError(f"Invalid push payload: {e}") from e
        body = envelope.to_json()

        headers = {"Content-Type": "application/json"}
        if tenant is None:
            tenant = self.config.tenant
        if tenant:
            headers[TENANT_HEADER] = tenant

        response = await self._request("POST", PUSH_PATH, content=body, headers=headers)
        self._check_response(response, PUSH_PATH)
        logger.debug(
            "Pushed streams to Loki",
            streams=len(envelope.streams),
            entries=sum(len(stream.entries) for stream in envelope.streams),
            tenant=tenant,
        )
