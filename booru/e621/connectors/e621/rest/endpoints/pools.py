"""e621 pool endpoints: pool search and lookup by id."""

from __future__ import annotations

from typing import Any

from booru.e621.connectors.e621.config import MAX_PAGE_SIZE
from booru.e621.core import Cursor, CursorKind, DecodeError
from booru.e621.models import Page, Pool
from booru.e621.runtime.chunking import ChunkPolicy, advance_cursor
from booru.e621.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for a pool search.

    ``params["search"]`` holds the ``search[...]`` fields already rendered
    by PoolQuery.
    """
    q: dict[str, Any] = dict(params.get("search") or {})
    q["limit"] = min(int(params["limit"]), MAX_PAGE_SIZE)
    if params.get("page"):
        q["page"] = params["page"]
    return q


def build_ids_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for a pool lookup by id."""
    return {
        "search[id]": ",".join(str(record_id) for record_id in params["ids"]),
        "limit": min(int(params["limit"]), MAX_PAGE_SIZE),
    }


def _cursor_kind(params: dict[str, Any]) -> CursorKind:
    # Pool listings are sorted by name, date or count, never walkable by id
    return CursorKind.PAGE


def _next_cursor(page: Page[Any], cursor: Cursor | None, params: dict[str, Any]) -> Cursor | None:
    return advance_cursor(page, cursor, _cursor_kind(params))


CHUNK_POLICY = ChunkPolicy(max_points=MAX_PAGE_SIZE)

SEARCH_SPEC = RestEndpointSpec(
    id="pools",
    build_path=lambda _params: "/pools.json",
    build_query=build_query,
    next_cursor=_next_cursor,
    cursor_kind=_cursor_kind,
    chunk_policy=CHUNK_POLICY,
)

BY_ID_SPEC = RestEndpointSpec(
    id="pools_by_id",
    build_path=lambda _params: "/pools.json",
    build_query=build_ids_query,
    chunk_policy=CHUNK_POLICY,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing pool list responses."""

    def parse(self, response: Any, params: dict[str, Any]) -> Page[Pool]:
        if not isinstance(response, list):
            raise DecodeError("Deserialization error: expected a list of pools")
        return Page(records=tuple(Pool.model_validate(item) for item in response))
