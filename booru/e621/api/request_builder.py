"""Immutable search queries for posts, pools and tags.

Architecture:
    Each query is a frozen dataclass built once per listing. Chainable
    methods return a modified copy, so a base query can be reused. Queries
    render themselves to the params dict the endpoint query builders read
    (``to_params``); page size and cursor are handled by the listing driver.

Design Decisions:
    - Validation at construction: a page size above the server cap raises
      AboveLimitError before any request is made
    - Post tags are split on whitespace and deduplicated, first occurrence
      kept, so the query string is stable
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from ..connectors.e621.config import MAX_PAGE_SIZE
from ..core.enums import PoolCategory, PoolOrder, TagCategory, TagOrder
from ..core.exceptions import AboveLimitError

__all__ = [
    "PoolQuery",
    "PostQuery",
    "TagQuery",
    "normalize_tags",
]


def normalize_tags(tags: str | Iterable[str]) -> tuple[str, ...]:
    """Split tags on whitespace and drop duplicates, keeping first occurrence.

    Examples:
        >>> normalize_tags("fox  wolf fox")
        ('fox', 'wolf')
        >>> normalize_tags(["fox solo", "rating:s"])
        ('fox', 'solo', 'rating:s')
    """
    if isinstance(tags, str):
        tags = [tags]
    terms = (term for chunk in tags for term in chunk.split())
    return tuple(dict.fromkeys(terms))


def _check_page_size(page_size: int | None) -> None:
    if page_size is None:
        return
    if page_size > MAX_PAGE_SIZE:
        raise AboveLimitError("limit", page_size, MAX_PAGE_SIZE)
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")


@dataclass(frozen=True)
class PostQuery:
    """Post search by tags.

    Example:
        >>> query = PostQuery.from_tags("fox rating:s", page_size=100)
        >>> query.to_params()
        {'tags': 'fox rating:s'}
    """

    tags: tuple[str, ...] = ()
    page_size: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", normalize_tags(self.tags))
        _check_page_size(self.page_size)

    @classmethod
    def from_tags(cls, tags: str | Iterable[str] = (), page_size: int | None = None) -> PostQuery:
        return cls(tags=normalize_tags(tags), page_size=page_size)

    def with_tags(self, *tags: str) -> PostQuery:
        return replace(self, tags=self.tags + normalize_tags(tags))

    def per_page(self, page_size: int | None) -> PostQuery:
        return replace(self, page_size=page_size)

    def to_params(self) -> dict[str, Any]:
        return {"tags": " ".join(self.tags)}


def _bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class PoolQuery:
    """Pool search.

    Example:
        >>> PoolQuery(name_matches="foo").to_params()
        {'search': {'search[name_matches]': 'foo'}}
    """

    name_matches: str | None = None
    ids: tuple[int, ...] | None = None
    description_matches: str | None = None
    creator_name: str | None = None
    creator_id: int | None = None
    is_active: bool | None = None
    is_deleted: bool | None = None
    category: PoolCategory | None = None
    order: PoolOrder | None = None
    page_size: int | None = None

    def __post_init__(self) -> None:
        _check_page_size(self.page_size)
        if self.ids is not None:
            object.__setattr__(self, "ids", tuple(self.ids))

    def per_page(self, page_size: int | None) -> PoolQuery:
        return replace(self, page_size=page_size)

    def to_params(self) -> dict[str, Any]:
        search: dict[str, str] = {}
        if self.name_matches is not None:
            search["search[name_matches]"] = self.name_matches
        if self.ids is not None:
            search["search[id]"] = ",".join(str(pool_id) for pool_id in self.ids)
        if self.description_matches is not None:
            search["search[description_matches]"] = self.description_matches
        if self.creator_name is not None:
            search["search[creator_name]"] = self.creator_name
        if self.creator_id is not None:
            search["search[creator_id]"] = str(self.creator_id)
        if self.is_active is not None:
            search["search[is_active]"] = _bool(self.is_active)
        if self.is_deleted is not None:
            search["search[is_deleted]"] = _bool(self.is_deleted)
        if self.category is not None:
            search["search[category]"] = PoolCategory(self.category).value
        if self.order is not None:
            search["search[order]"] = PoolOrder(self.order).value
        return {"search": search}


@dataclass(frozen=True)
class TagQuery:
    """Tag search.

    Filters left as None (or empty) are not sent. ``order`` also decides how
    the listing is paginated.
    """

    name_matches: str | None = None
    fuzzy_name_matches: str | None = None
    names: tuple[str, ...] = ()
    categories: tuple[TagCategory, ...] = ()
    hide_empty: bool | None = None
    has_wiki: bool | None = None
    has_artist: bool | None = None
    order: TagOrder | None = None
    page_size: int | None = None

    def __post_init__(self) -> None:
        _check_page_size(self.page_size)
        object.__setattr__(self, "names", tuple(dict.fromkeys(self.names)))
        object.__setattr__(
            self, "categories", tuple(TagCategory(c) for c in dict.fromkeys(self.categories))
        )
        if self.order is not None:
            object.__setattr__(self, "order", TagOrder(self.order))

    def per_page(self, page_size: int | None) -> TagQuery:
        return replace(self, page_size=page_size)

    def ordered_by(self, order: TagOrder | None) -> TagQuery:
        return replace(self, order=order)

    def to_params(self) -> dict[str, Any]:
        search: dict[str, str] = {}
        if self.name_matches is not None:
            search["search[name_matches]"] = self.name_matches
        if self.fuzzy_name_matches is not None:
            search["search[fuzzy_name_matches]"] = self.fuzzy_name_matches
        if self.names:
            search["search[name]"] = ",".join(self.names)
        if self.categories:
            search["search[category]"] = ",".join(str(int(c)) for c in self.categories)
        if self.hide_empty is not None:
            search["search[hide_empty]"] = _bool(self.hide_empty)
        if self.has_wiki is not None:
            search["search[has_wiki]"] = _bool(self.has_wiki)
        if self.has_artist is not None:
            search["search[has_artist]"] = _bool(self.has_artist)
        if self.order is not None:
            search["search[order]"] = self.order.value
        params: dict[str, Any] = {"search": search}
        if self.order is not None:
            params["order"] = self.order
        return params
