"""e621 tag search endpoint."""

from __future__ import annotations

from typing import Any

from booru.e621.connectors.e621.config import MAX_PAGE_SIZE
from booru.e621.core import Cursor, CursorKind, DecodeError, TagOrder
from booru.e621.models import Page, Tag
from booru.e621.runtime.chunking import ChunkPolicy, advance_cursor
from booru.e621.runtime.rest import ResponseAdapter, RestEndpointSpec


def cursor_kind_for_order(order: TagOrder | str | None) -> CursorKind:
    """Pick how to paginate a tag search from its ordering.

    DATE is sorted by id on the server, so it walks like ID_DESC.
    """
    if order is None:
        return CursorKind.BEFORE
    order = TagOrder(order)
    if order in (TagOrder.ID_DESC, TagOrder.DATE):
        return CursorKind.BEFORE
    if order is TagOrder.ID_ASC:
        return CursorKind.AFTER
    return CursorKind.PAGE


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for a tag search."""
    q: dict[str, Any] = dict(params.get("search") or {})
    q["limit"] = min(int(params["limit"]), MAX_PAGE_SIZE)
    if params.get("page"):
        q["page"] = params["page"]
    return q


def _cursor_kind(params: dict[str, Any]) -> CursorKind:
    return cursor_kind_for_order(params.get("order"))


def _next_cursor(page: Page[Any], cursor: Cursor | None, params: dict[str, Any]) -> Cursor | None:
    return advance_cursor(page, cursor, _cursor_kind(params))


SEARCH_SPEC = RestEndpointSpec(
    id="tags",
    build_path=lambda _params: "/tags.json",
    build_query=build_query,
    next_cursor=_next_cursor,
    cursor_kind=_cursor_kind,
    chunk_policy=ChunkPolicy(max_points=MAX_PAGE_SIZE),
)


class Adapter(ResponseAdapter):
    """Adapter for parsing tag search responses.

    The endpoint answers ``{"tags": []}`` instead of an empty list when
    nothing matches.
    """

    def parse(self, response: Any, params: dict[str, Any]) -> Page[Tag]:
        if isinstance(response, dict) and response.get("tags") == []:
            return Page(records=(), exhausted=True)
        if not isinstance(response, list):
            raise DecodeError("Deserialization error: expected a list of tags")
        return Page(records=tuple(Tag.model_validate(item) for item in response))
