"""Unit tests for LokiClient with a mocked httpx transport."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from loki_client.client import LokiClient
from loki_client.config import LokiConfig
from loki_client.exceptions import LokiConnectionError, LokiResponseError, SerializationError


@pytest.fixture
def mock_httpx_client(mocker: Any) -> MagicMock:
    """Create a mock httpx async client."""
    mock_client = MagicMock(spec=httpx.AsyncClient)
    mocker.patch("httpx.AsyncClient", return_value=mock_client)
    return mock_client


class TestLokiClientInit:
    """Tests for client construction."""

    @pytest.mark.unit
    def test_accepts_url_string(self) -> None:
        """A bare URL should be turned into a config."""
        client = LokiClient("http://loki.example.com:3100/")

        assert client.base_url == "http://loki.example.com:3100"
        assert client.config.tenant is None

    @pytest.mark.unit
    def test_accepts_config(self, loki_config: LokiConfig) -> None:
        """A config object should be used as-is."""
        client = LokiClient(loki_config)

        assert client.config is loki_config
        assert client.timeout == 5

    @pytest.mark.unit
    def test_defaults_without_config(self) -> None:
        """No argument should fall back to the default config."""
        assert LokiClient().base_url == "http://localhost:3100"

    @pytest.mark.unit
    def test_client_is_lazy(self, mocker: Any, loki_config: LokiConfig) -> None:
        """The httpx client should only be built on first use."""
        factory = mocker.patch("httpx.AsyncClient")
        client = LokiClient(loki_config)

        factory.assert_not_called()
        assert client.client is client.client
        factory.assert_called_once()
        assert factory.call_args.kwargs["base_url"] == loki_config.url
        assert factory.call_args.kwargs["verify"] is True


class TestLokiClientLifecycle:
    """Tests for closing the client."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_aclose_closes_transport(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """aclose should close and drop the httpx client."""
        client = LokiClient(loki_config)
        _ = client.client

        await client.aclose()

        mock_httpx_client.aclose.assert_awaited_once()
        assert client._client is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_aclose_without_transport(self, loki_config: LokiConfig) -> None:
        """aclose should be a no-op before any request."""
        client = LokiClient(loki_config)

        await client.aclose()

        assert client._client is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_context_manager_closes(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """Leaving the async context should close the transport."""
        async with LokiClient(loki_config) as client:
            _ = client.client

        mock_httpx_client.aclose.assert_awaited_once()


class TestLokiClientErrors:
    """Tests for transport error mapping."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_connect_error(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """Connection failures should raise LokiConnectionError."""
        original = httpx.ConnectError("Connection refused")
        mock_httpx_client.request.side_effect = original

        with pytest.raises(LokiConnectionError) as exc_info:
            await LokiClient(loki_config).ready()

        assert exc_info.value.original_error is original
        assert exc_info.value.endpoint == "/ready"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self, loki_config: LokiConfig, mock_httpx_client: MagicMock) -> None:
        """Timeouts should raise LokiConnectionError."""
        mock_httpx_client.request.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(LokiConnectionError, match="timed out"):
            await LokiClient(loki_config).flush()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_retry_on_failure(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """A failing request should be attempted exactly once."""
        mock_httpx_client.request.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(LokiConnectionError):
            await LokiClient(loki_config).push([])

        assert mock_httpx_client.request.await_count == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_too_many_redirects(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """Request errors outside the transport family should still be wrapped."""
        original = httpx.TooManyRedirects("Exceeded maximum allowed redirects.")
        mock_httpx_client.request.side_effect = original

        with pytest.raises(LokiConnectionError) as exc_info:
            await LokiClient(loki_config).services()

        assert exc_info.value.original_error is original

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_decoding_error(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """Body decoding failures should raise LokiResponseError."""
        mock_httpx_client.request.side_effect = httpx.DecodingError("invalid gzip")

        with pytest.raises(LokiResponseError, match="decode"):
            await LokiClient(loki_config).build_info()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_push_rejects_stream_shaped_dicts(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """Dicts shaped like streams should not be coerced into Stream values."""
        payload = {"labels": {"a": "b"}, "entries": [{"timestamp": 1, "line": "x"}]}

        with pytest.raises(SerializationError):
            await LokiClient(loki_config).push([payload])  # type: ignore[list-item]

        mock_httpx_client.request.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_push_rejects_non_streams(
        self, loki_config: LokiConfig, mock_httpx_client: MagicMock
    ) -> None:
        """Invalid push payloads should fail before any request is sent."""
        with pytest.raises(SerializationError):
            await LokiClient(loki_config).push(["not a stream"])  # type: ignore[list-item]

        mock_httpx_client.request.assert_not_called()
