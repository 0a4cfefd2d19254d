"""REST request issuer using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from pydantic import ValidationError

from ...core.cursor import Cursor, CursorKind
from ...core.exceptions import DecodeError
from ...models import Page

if TYPE_CHECKING:
    from ..chunking import ChunkPolicy
    from .http_client import HTTPClient


class Limiter(Protocol):
    async def acquire(self) -> None: ...


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # Given the page just fetched, the cursor used for it and the request
    # params, returns the cursor of the following page (None = cannot continue)
    next_cursor: Callable[[Page[Any], Cursor | None, dict[str, Any]], Cursor | None] | None = None
    # Cursor kind the listing walks with when it starts without a cursor
    cursor_kind: Callable[[dict[str, Any]], CursorKind] | None = None
    chunk_policy: ChunkPolicy | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Page[Any]:
        return Page(records=tuple(response))


class RequestIssuer:
    """Issues one rate-limited request and decodes its response.

    Every call takes a token from the limiter before touching the network,
    including calls that go on to fail. No retries are performed here.
    """

    def __init__(
        self,
        transport: HTTPClient,
        rate_limiter: Limiter,
        *,
        default_params: dict[str, str] | None = None,
    ) -> None:
        self._t = transport
        self._limiter = rate_limiter
        # Appended to every query (credentials, client identification)
        self.default_params: dict[str, str] = dict(default_params or {})
        self.requests_issued = 0

    @property
    def rate_limiter(self) -> Limiter:
        return self._limiter

    async def issue(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Page[Any]:
        """Issue one request for an endpoint.

        Raises:
            TransportError: If the request could not be completed
            ServerError: If the server rejected the request
            DecodeError: If the response does not match the endpoint's schema
        """
        path = spec.build_path(params)
        query = dict(spec.build_query(params)) if spec.build_query else {}
        query.update(self.default_params)
        headers = spec.build_headers(params) if spec.build_headers else None

        await self._limiter.acquire()
        self.requests_issued += 1
        data = await self._t.get(path, params=query or None, headers=headers)

        try:
            return adapter.parse(data, params)
        except ValidationError as e:
            raise DecodeError(f"Deserialization error for {spec.id}: {e}") from e
