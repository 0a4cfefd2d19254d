"""e621 post endpoints: tag search and lookup by id.

Both go through ``/posts.json``; an id lookup is a search for the ``id:``
metatag with a comma separated id list.
"""

from __future__ import annotations

from typing import Any

from booru.e621.connectors.e621.config import MAX_PAGE_SIZE
from booru.e621.core import Cursor, CursorKind, DecodeError
from booru.e621.models import Page, Post
from booru.e621.runtime.chunking import ChunkPolicy, advance_cursor
from booru.e621.runtime.rest import ResponseAdapter, RestEndpointSpec

# ``order:`` values the server can walk with before/after cursors
_ID_ORDERS = {
    "id": CursorKind.AFTER,
    "id_asc": CursorKind.AFTER,
    "id_desc": CursorKind.BEFORE,
}


def cursor_kind_for_tags(tags: str) -> CursorKind:
    """Pick how to paginate a post search from its ``order:`` metatag.

    Examples:
        >>> cursor_kind_for_tags("fox")
        <CursorKind.BEFORE: 'before'>
        >>> cursor_kind_for_tags("fox order:score")
        <CursorKind.PAGE: 'page'>
    """
    kind = CursorKind.BEFORE
    for term in tags.split():
        if term.lower().startswith("order:"):
            kind = _ID_ORDERS.get(term[len("order:") :].lower(), CursorKind.PAGE)
    return kind


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for a post search."""
    q: dict[str, Any] = {"limit": min(int(params["limit"]), MAX_PAGE_SIZE)}
    if params.get("tags"):
        q["tags"] = params["tags"]
    if params.get("page"):
        q["page"] = params["page"]
    return q


def build_ids_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for a post lookup by id."""
    ids = ",".join(str(record_id) for record_id in params["ids"])
    return {
        "tags": f"id:{ids}",
        "limit": min(int(params["limit"]), MAX_PAGE_SIZE),
    }


def _cursor_kind(params: dict[str, Any]) -> CursorKind:
    return cursor_kind_for_tags(params.get("tags", ""))


def _next_cursor(page: Page[Any], cursor: Cursor | None, params: dict[str, Any]) -> Cursor | None:
    return advance_cursor(page, cursor, _cursor_kind(params))


CHUNK_POLICY = ChunkPolicy(max_points=MAX_PAGE_SIZE)

SEARCH_SPEC = RestEndpointSpec(
    id="posts",
    build_path=lambda _params: "/posts.json",
    build_query=build_query,
    next_cursor=_next_cursor,
    cursor_kind=_cursor_kind,
    chunk_policy=CHUNK_POLICY,
)

BY_ID_SPEC = RestEndpointSpec(
    id="posts_by_id",
    build_path=lambda _params: "/posts.json",
    build_query=build_ids_query,
    chunk_policy=CHUNK_POLICY,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing ``{"posts": [...]}`` responses."""

    def parse(self, response: Any, params: dict[str, Any]) -> Page[Post]:
        if not isinstance(response, dict) or not isinstance(response.get("posts"), list):
            raise DecodeError("Deserialization error: expected an object with a 'posts' list")
        return Page(records=tuple(Post.model_validate(item) for item in response["posts"]))
