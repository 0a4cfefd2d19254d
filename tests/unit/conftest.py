"""Shared fixtures for unit tests: record payloads and a fake transport."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from booru.e621.api import Client
from booru.e621.runtime import NullRateLimiter


def post_payload(post_id: int, **overrides: Any) -> dict[str, Any]:
    """Minimal /posts.json entry."""
    payload: dict[str, Any] = {
        "id": post_id,
        "created_at": "2020-01-01T12:00:00.000-05:00",
        "updated_at": "2020-01-02T12:00:00.000-05:00",
        "file": {
            "width": 800,
            "height": 600,
            "ext": "png",
            "size": 12345,
            "md5": f"{post_id:032x}",
            "url": f"https://static1.e621.net/data/{post_id}.png",
        },
        "score": {"up": 10, "down": -2, "total": 8},
        "tags": {"general": ["solo"], "species": ["fox"]},
        "flags": {"deleted": False},
        "rating": "s",
        "fav_count": 3,
        "relationships": {"parent_id": None, "children": []},
    }
    payload.update(overrides)
    return payload


def pool_payload(pool_id: int, **overrides: Any) -> dict[str, Any]:
    """Minimal /pools.json entry."""
    payload: dict[str, Any] = {
        "id": pool_id,
        "name": f"pool_{pool_id}",
        "created_at": "2020-01-01T12:00:00.000-05:00",
        "updated_at": "2020-01-02T12:00:00.000-05:00",
        "creator_id": 1,
        "description": "",
        "is_active": True,
        "category": "series",
        "post_ids": [1, 2, 3],
        "creator_name": "someone",
        "post_count": 3,
    }
    payload.update(overrides)
    return payload


def tag_payload(tag_id: int, **overrides: Any) -> dict[str, Any]:
    """Minimal /tags.json entry."""
    payload: dict[str, Any] = {
        "id": tag_id,
        "name": f"tag_{tag_id}",
        "post_count": tag_id * 10,
        "related_tags": "",
        "category": 0,
        "is_locked": False,
        "created_at": "2020-01-01T12:00:00.000-05:00",
        "updated_at": "2020-01-02T12:00:00.000-05:00",
    }
    payload.update(overrides)
    return payload


class FakeTransport:
    """Stands in for HTTPClient; answers through a handler and records calls.

    The handler receives ``(url, params)`` and returns the decoded JSON body,
    or an exception instance to raise.
    """

    def __init__(self, handler: Callable[[str, dict[str, Any]], Any]) -> None:
        self.handler = handler
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        params = dict(params or {})
        self.calls.append((url, params))
        result = self.handler(url, params)
        if isinstance(result, BaseException):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


class PostServer:
    """Serves /posts.json from a fixed set of post ids.

    Searches are sorted newest (highest id) first, or oldest first with
    ``order:id``, and understand ``b<id>``, ``a<id>`` and numbered pages.
    ``id:`` lookups return the present ids in descending order, ignoring the
    requested order.
    """

    def __init__(self, ids: list[int]) -> None:
        self.ids = sorted(ids, reverse=True)

    def __call__(self, url: str, params: dict[str, Any]) -> Any:
        tags = params.get("tags", "")
        limit = int(params["limit"])
        if tags.startswith("id:"):
            wanted = {int(part) for part in tags[len("id:") :].split(",")}
            present = [i for i in self.ids if i in wanted]
            return {"posts": [post_payload(i) for i in present[:limit]]}

        page = params.get("page")
        ids = self.ids
        if "order:id" in tags.split():
            ids = sorted(ids)
        if page is None:
            selected = ids[:limit]
        elif page.startswith("b"):
            selected = [i for i in ids if i < int(page[1:])][:limit]
        elif page.startswith("a"):
            # After-cursors return the ids just above the marker
            selected = sorted(i for i in ids if i > int(page[1:]))[:limit]
        else:
            number = int(page)
            selected = ids[(number - 1) * limit : number * limit]
        return {"posts": [post_payload(i) for i in selected]}


@pytest.fixture
def make_post() -> Callable[..., dict[str, Any]]:
    return post_payload


@pytest.fixture
def make_pool() -> Callable[..., dict[str, Any]]:
    return pool_payload


@pytest.fixture
def make_tag() -> Callable[..., dict[str, Any]]:
    return tag_payload


@pytest.fixture
def fake_transport() -> Callable[..., FakeTransport]:
    """Factory building a FakeTransport from a handler."""
    return FakeTransport


@pytest.fixture
def post_server() -> Callable[[list[int]], PostServer]:
    return PostServer


@pytest.fixture
def make_client() -> Callable[..., tuple[Client, FakeTransport]]:
    """Factory for a Client wired to a fake transport and no rate limiting."""

    def factory(handler: Callable[[str, dict[str, Any]], Any], **kwargs: Any):
        transport = FakeTransport(handler)
        kwargs.setdefault("rate_limiter", NullRateLimiter())
        client = Client("booru-e621/unit_test", transport=transport, **kwargs)
        return client, transport

    return factory
