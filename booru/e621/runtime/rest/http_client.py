"""Async HTTP client wrapper."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

from ...core.exceptions import DecodeError, TransportError, server_error_for

logger = logging.getLogger(__name__)


class HTTPClient:
    """Async HTTP client wrapper.

    Translates aiohttp failures into the library's error types:
    connection, TLS and timeout failures become TransportError, non-2xx
    statuses become ServerError (or RateLimitError) and bodies that are not
    JSON become DecodeError. Requests are never retried here.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        *,
        headers: dict[str, str] | None = None,
        proxy: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self.proxy = proxy
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def build_url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}/{url.lstrip('/')}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body.

        Raises:
            TransportError: If the request could not be completed
            ServerError: If the server answered with a non-2xx status
            DecodeError: If the body is not valid JSON
        """
        full_url = self.build_url(url)
        logger.debug("http_get", extra={"url": full_url, "params": params})
        try:
            async with self.session.get(
                full_url, params=params, headers=headers, proxy=self.proxy
            ) as response:
                body = await response.text()
                status = response.status
                response_url = str(response.url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Couldn't send request: {e}") from e

        if not 200 <= status < 300:
            raise server_error_for(status, _extract_reason(body), response_url)

        try:
            return json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Deserialization error: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def _extract_reason(body: str) -> str | None:
    """Pull the ``reason`` field out of a JSON error body, if any."""
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict):
        reason = payload.get("reason")
        if isinstance(reason, str):
            return reason
    return None
