"""Client facade for searching and fetching e621 records.

The Client is the single entry point of the library. It owns the HTTP
transport and the rate limiter, and hands out lazy listings:

Architecture:
    - search / pool_search / tag_search return a PaginationCursor
    - fetch_by_ids / get_pools return a BulkChunker
    Every listing of one client issues its requests through the same
    RequestIssuer, so they all draw from the same token bucket.

Design Decisions:
    - No default User-Agent: the API blocks generic ones, so the caller
      must name their project
    - Rate limiter injection lets several clients share one budget, and
      transport injection allows testing without a network
    - Listings are single-use async iterators; call again to restart

See Also:
    - PaginationCursor / BulkChunker: the listing drivers
    - RateLimiter: the shared token bucket
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..connectors.e621.config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIMEOUT_S,
    RATE_LIMIT_CAPACITY,
    REQUEST_COOLDOWN_S,
    get_base_url,
)
from ..connectors.e621.rest import get_endpoint_adapter, get_endpoint_spec
from ..core.enums import Site
from ..core.exceptions import ClientConfigError
from ..runtime.chunking import BulkChunker, PaginationCursor
from ..runtime.rate_limit import RateLimiter
from ..runtime.rest import HTTPClient, RequestIssuer, ResponseAdapter, RestEndpointSpec
from .request_builder import PoolQuery, PostQuery, TagQuery

if TYPE_CHECKING:
    from ..core.cursor import Cursor
    from ..runtime.rest import Limiter

logger = logging.getLogger(__name__)


def _check_user_agent(user_agent: str) -> None:
    if not user_agent:
        raise ClientConfigError("Couldn't create client: User Agent mustn't be empty")
    if any(ch in user_agent for ch in "\r\n\0"):
        raise ClientConfigError(f"Invalid header value: {user_agent!r}")


class Client:
    """Rate-limited client for the e621/e926 API.

    Example:
        >>> async with Client("MyProject/1.0 (by username on e621)") as client:
        ...     async for post in client.search("fox rating:s", limit=10):
        ...         if isinstance(post, DataError):
        ...             print("failed:", post)
        ...         else:
        ...             print(post.id, post.score.total)
    """

    def __init__(
        self,
        user_agent: str,
        *,
        site: Site | str = Site.E621,
        base_url: str | None = None,
        proxy: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        rate_limiter: Limiter | None = None,
        transport: HTTPClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            user_agent: User-Agent header, ideally naming the project and its author
            site: Site to talk to, ignored when base_url is given
            base_url: Explicit API root (e.g. a mirror or a test server)
            proxy: Optional HTTPS proxy URL
            timeout: Total timeout per request, in seconds
            rate_limiter: Limiter to share with other clients (default: a new
                bucket allowing one request every 600 ms)
            transport: Pre-built HTTP client (user_agent, proxy and timeout
                are then the transport's business)

        Raises:
            ClientConfigError: If the User-Agent is empty or not a valid header value
        """
        _check_user_agent(user_agent)
        self.user_agent = user_agent
        self._owns_transport = transport is None
        self._transport = transport or HTTPClient(
            base_url or get_base_url(site),
            timeout,
            headers={"User-Agent": user_agent},
            proxy=proxy,
        )
        self.rate_limiter = rate_limiter or RateLimiter(
            capacity=RATE_LIMIT_CAPACITY, refill_interval=REQUEST_COOLDOWN_S
        )
        self._issuer = RequestIssuer(self._transport, self.rate_limiter)
        self._closed = False

    @property
    def issuer(self) -> RequestIssuer:
        return self._issuer

    def login(self, username: str, api_key: str) -> None:
        """Send the given credentials with every subsequent request."""
        self._issuer.default_params.update({"login": username, "api_key": api_key})

    def logout(self) -> None:
        """Remove credentials set with login()."""
        self._issuer.default_params.pop("login", None)
        self._issuer.default_params.pop("api_key", None)

    def _endpoint(self, endpoint_id: str) -> tuple[RestEndpointSpec, ResponseAdapter]:
        spec = get_endpoint_spec(endpoint_id)
        adapter_cls = get_endpoint_adapter(endpoint_id)
        if spec is None or adapter_cls is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")
        return spec, adapter_cls()

    def _paginate(
        self,
        endpoint_id: str,
        params: dict,
        page_size: int | None,
        limit: int | None,
        cursor: Cursor | None,
    ) -> PaginationCursor:
        spec, adapter = self._endpoint(endpoint_id)
        return PaginationCursor(
            self._issuer,
            spec=spec,
            adapter=adapter,
            params=params,
            page_size=page_size or DEFAULT_PAGE_SIZE,
            limit=limit,
            cursor=cursor,
        )

    def search(
        self,
        tags: str | Iterable[str] | PostQuery = (),
        page_size: int | None = None,
        *,
        limit: int | None = None,
        cursor: Cursor | None = None,
    ) -> PaginationCursor:
        """Search posts by tags.

        Args:
            tags: Space separated tags, an iterable of tags, or a PostQuery
            page_size: Posts per request (at most 320, default 75)
            limit: Total posts wanted (None = every match)
            cursor: Where to start (default: newest posts)

        Returns:
            Lazy listing of Post, ending with a DataError if a request fails

        Raises:
            AboveLimitError: If page_size exceeds 320
        """
        query = tags if isinstance(tags, PostQuery) else PostQuery.from_tags(tags)
        if page_size is not None:
            query = query.per_page(page_size)
        return self._paginate("posts", query.to_params(), query.page_size, limit, cursor)

    def fetch_by_ids(self, ids: Iterable[int]) -> BulkChunker:
        """Fetch posts by id.

        Args:
            ids: Post ids; duplicates allowed

        Returns:
            Lazy listing with one element per id, in input order: the Post,
            NotFoundError if the server did not return it, or the error of the
            request covering it

        Raises:
            ValueError: If an id is not a positive integer
        """
        spec, adapter = self._endpoint("posts_by_id")
        return BulkChunker(self._issuer, spec=spec, adapter=adapter, ids=ids)

    get_posts = fetch_by_ids

    def pool_search(
        self,
        query: PoolQuery | None = None,
        *,
        limit: int | None = None,
        cursor: Cursor | None = None,
    ) -> PaginationCursor:
        """Search pools. Walks numbered pages until an empty or short page."""
        query = query or PoolQuery()
        return self._paginate("pools", query.to_params(), query.page_size, limit, cursor)

    def get_pools(self, ids: Iterable[int]) -> BulkChunker:
        """Fetch pools by id, one element per id in input order."""
        spec, adapter = self._endpoint("pools_by_id")
        return BulkChunker(self._issuer, spec=spec, adapter=adapter, ids=ids)

    def tag_search(
        self,
        query: TagQuery | None = None,
        *,
        limit: int | None = None,
        cursor: Cursor | None = None,
    ) -> PaginationCursor:
        """Search tags. Pagination follows the query's order (see TagOrder)."""
        query = query or TagQuery()
        return self._paginate("tags", query.to_params(), query.page_size, limit, cursor)

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
