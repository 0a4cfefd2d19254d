"""Precise unit tests for HTTPClient.

Tests focus on session management and on how responses and failures are
translated into the library's error types.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from booru.e621.core import DecodeError, RateLimitError, ServerError, TransportError
from booru.e621.runtime.rest import HTTPClient


def _mock_session(status: int = 200, body: str = "{}", url: str = "https://e621.net/posts.json"):
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=body)
    mock_response.url = url
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = MagicMock()
    mock_session.closed = False  # session property checks this
    mock_session.get = MagicMock(return_value=mock_response)
    return mock_session


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        client = HTTPClient(timeout=10.0)
        assert client.timeout.total == 10.0
        assert client._session is None
        assert client.proxy is None

    def test_init_strips_trailing_slash(self):
        client = HTTPClient(base_url="https://e621.net/", timeout=30.0)
        assert client.base_url == "https://e621.net"

    def test_build_url(self):
        client = HTTPClient(base_url="https://e621.net")
        assert client.build_url("/posts.json") == "https://e621.net/posts.json"
        assert client.build_url("https://e926.net/tags.json") == "https://e926.net/tags.json"

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        client = HTTPClient(headers={"User-Agent": "booru-e621/unit_test"})
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_session_property_recreates_closed_session(self):
        client = HTTPClient()
        session1 = client.session
        await session1.close()

        session2 = client.session
        assert session1 is not session2
        assert not session2.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        _ = client.session
        await client.close()
        await client.close()  # Should not raise

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HTTPClient() as client:
            assert client.session is not None

        assert client._session is None or client._session.closed


class TestHTTPClientGet:
    """Test HTTPClient.get() response handling."""

    @pytest.mark.asyncio
    async def test_get_returns_decoded_json(self):
        client = HTTPClient(base_url="https://e621.net", proxy="http://proxy:3128")
        client._session = _mock_session(body='{"posts": []}')

        result = await client.get("/posts.json", params={"tags": "fox", "limit": 5})

        assert result == {"posts": []}
        client._session.get.assert_called_once_with(
            "https://e621.net/posts.json",
            params={"tags": "fox", "limit": 5},
            headers=None,
            proxy="http://proxy:3128",
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [421, 429, 503])
    async def test_get_rate_limit_statuses(self, status):
        client = HTTPClient()
        client._session = _mock_session(status=status, body="slow down")

        with pytest.raises(RateLimitError) as exc_info:
            await client.get("https://e621.net/posts.json")

        assert exc_info.value.status_code == status
        assert exc_info.value.rate_limited

    @pytest.mark.asyncio
    async def test_get_server_error_with_reason(self):
        client = HTTPClient()
        client._session = _mock_session(
            status=500, body='{"success": false, "reason": "foo"}'
        )

        with pytest.raises(ServerError) as exc_info:
            await client.get("https://e621.net/posts.json")

        error = exc_info.value
        assert not isinstance(error, RateLimitError)
        assert error.status_code == 500
        assert str(error) == "HTTP error 500: foo"
        assert error.url == "https://e621.net/posts.json"

    @pytest.mark.asyncio
    async def test_get_not_found(self):
        client = HTTPClient()
        client._session = _mock_session(status=404, body="<html>not here</html>")

        with pytest.raises(ServerError) as exc_info:
            await client.get("https://e621.net/pools/1.json")

        assert exc_info.value.not_found

    @pytest.mark.asyncio
    async def test_get_invalid_json(self):
        client = HTTPClient()
        client._session = _mock_session(body="<html>maintenance</html>")

        with pytest.raises(DecodeError):
            await client.get("https://e621.net/posts.json")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [aiohttp.ClientConnectionError("connection reset"), asyncio.TimeoutError()],
    )
    async def test_get_transport_failures(self, failure):
        client = HTTPClient()
        mock_session = MagicMock()
        mock_session.closed = False
        mock_session.get = MagicMock(side_effect=failure)
        client._session = mock_session

        with pytest.raises(TransportError) as exc_info:
            await client.get("https://e621.net/posts.json")

        assert str(exc_info.value).startswith("Couldn't send request")
        assert exc_info.value.__cause__ is failure
