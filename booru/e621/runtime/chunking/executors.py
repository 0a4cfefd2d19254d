"""Listing drivers for paginated searches and bulk id lookups.

This module provides the two lazy listing drivers built on a RequestIssuer:

- PaginationCursor walks a search page by page, advancing a cursor until the
  server signals exhaustion or the caller's budget runs out.
- BulkChunker resolves an arbitrary id list batch by batch and re-emits one
  element per input id, in input order.

Both are async iterators. A request is only issued when the consumer asks
for an element that is not buffered yet, so abandoning iteration at any
point issues nothing further. Failures are yielded as elements (exception
instances, as with ``asyncio.gather(return_exceptions=True)``) rather than
raised.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from time import perf_counter
from typing import Any

from ...core.cursor import Cursor, CursorKind
from ...core.exceptions import AboveLimitError, DataError, NotFoundError
from ..rest.issuer import RequestIssuer, ResponseAdapter, RestEndpointSpec
from .definitions import ChunkPolicy, CursorState, ListingState, ListingStats
from .planners import BatchPlanner
from .telemetry import (
    log_batch_completed,
    log_listing_complete,
    log_listing_error,
    log_page_fetched,
)


class _Listing:
    """Shared buffering and end-of-listing reporting."""

    def __init__(self, spec: RestEndpointSpec) -> None:
        self._spec = spec
        self._policy = spec.chunk_policy or ChunkPolicy()
        self._buffer: deque[Any] = deque()
        self.stats = ListingStats()
        self._reported = False

    def __aiter__(self) -> _Listing:
        return self

    def _pop(self) -> Any:
        item = self._buffer.popleft()
        if isinstance(item, DataError):
            self.stats.errors += 1
        else:
            self.stats.records += 1
        return item

    def _finish(self, state: ListingState) -> None:
        if not self._reported:
            self._reported = True
            log_listing_complete(endpoint_id=self._spec.id, state=state.value, stats=self.stats)


class PaginationCursor(_Listing):
    """Lazily walks a paginated search.

    States go FRESH -> IN_PROGRESS -> EXHAUSTED, with FAILED reachable from
    any non-terminal state. The listing is exhausted by an empty page, a page
    the adapter flags as final, a page shorter than requested, the caller's
    budget reaching zero, or a next cursor that does not move.

    Example:
        >>> cursor = PaginationCursor(issuer, spec=POSTS, adapter=PostsAdapter(),
        ...                           params={"tags": "fox"}, page_size=75, limit=10)
        >>> async for item in cursor:
        ...     print(item)
    """

    def __init__(
        self,
        issuer: RequestIssuer,
        *,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        params: dict[str, Any] | None = None,
        page_size: int,
        limit: int | None = None,
        cursor: Cursor | None = None,
    ) -> None:
        """Initialize pagination cursor.

        Args:
            issuer: Request issuer (carries the shared rate limiter)
            spec: Endpoint specification, with a ``next_cursor`` hook
            adapter: Response adapter for the endpoint
            params: Query params shared by every page
            page_size: Records requested per page
            limit: Total records wanted (None = until exhaustion)
            cursor: Cursor of the first page (None = server default)

        Raises:
            AboveLimitError: If page_size exceeds the endpoint's cap
            ValueError: If page_size or limit is out of range
        """
        super().__init__(spec)
        if page_size > self._policy.max_points:
            raise AboveLimitError("limit", page_size, self._policy.max_points)
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        self._issuer = issuer
        self._adapter = adapter
        self._params = dict(params or {})
        self._page_size = page_size
        self._cursor_state = CursorState(cursor=cursor, remaining=limit)
        if limit == 0:
            self._cursor_state.exhaust()

    @property
    def state(self) -> ListingState:
        return self._cursor_state.state

    @property
    def cursor_state(self) -> CursorState:
        return self._cursor_state

    async def __anext__(self) -> Any:
        while True:
            if self._buffer:
                return self._pop()
            if self._cursor_state.state.is_terminal:
                self._finish(self._cursor_state.state)
                raise StopAsyncIteration
            await self._fetch_page()

    def _numbered_pages(self) -> bool:
        cursor = self._cursor_state.cursor
        if cursor is not None:
            return cursor.is_page
        if self._spec.cursor_kind is None:
            return False
        return self._spec.cursor_kind(self._params) is CursorKind.PAGE

    async def _fetch_page(self) -> None:
        state = self._cursor_state
        requested = self._page_size
        # Page numbers are offsets in units of the page size, which must not change
        if state.remaining is not None and not self._numbered_pages():
            requested = min(requested, state.remaining)

        params = {**self._params, "limit": requested}
        if state.cursor is not None:
            params["page"] = str(state.cursor)

        page_index = state.pages_fetched
        start = perf_counter()
        try:
            page = await self._issuer.issue(spec=self._spec, adapter=self._adapter, params=params)
        except DataError as e:
            state.pages_fetched += 1
            self.stats.requests += 1
            log_listing_error(
                endpoint_id=self._spec.id,
                chunk_index=page_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            state.fail()
            self._buffer.append(e)
            return

        state.pages_fetched += 1
        self.stats.requests += 1
        records = list(page.records)
        log_page_fetched(
            endpoint_id=self._spec.id,
            page_index=page_index,
            cursor=str(state.cursor) if state.cursor is not None else None,
            requested=requested,
            received=len(records),
            latency_ms=(perf_counter() - start) * 1000.0,
        )

        if not records:
            state.exhaust()
            return

        if state.remaining is not None:
            records = records[: state.remaining]
            state.remaining -= len(records)
        self._buffer.extend(records)
        state.state = ListingState.IN_PROGRESS

        next_cursor = (
            self._spec.next_cursor(page, state.cursor, params) if self._spec.next_cursor else None
        )
        max_chunks = self._policy.max_chunks
        if (
            page.exhausted
            or len(page.records) < requested
            or state.remaining == 0
            or next_cursor is None
            or next_cursor == state.cursor
            or (max_chunks is not None and state.pages_fetched >= max_chunks)
        ):
            state.exhaust()
        else:
            state.cursor = next_cursor


class BulkChunker(_Listing):
    """Lazily resolves a list of ids, one output element per input id.

    Ids are split into contiguous batches of at most the endpoint's cap and
    each batch is fetched with one request, only once the previous batch has
    been fully consumed. Ids missing from a successful response yield
    NotFoundError; a failed request yields its error for every id of the
    batch.
    """

    def __init__(
        self,
        issuer: RequestIssuer,
        *,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        ids: Iterable[int],
        params: dict[str, Any] | None = None,
    ) -> None:
        """Initialize bulk chunker.

        Args:
            issuer: Request issuer (carries the shared rate limiter)
            spec: Endpoint specification; its ``build_query`` reads ``ids``
            adapter: Response adapter for the endpoint
            ids: Record ids in the order results should be yielded
            params: Extra query params shared by every batch

        Raises:
            ValueError: If an id is not a positive integer
        """
        super().__init__(spec)
        self._issuer = issuer
        self._adapter = adapter
        self._params = dict(params or {})
        self._batches = deque(BatchPlanner(self._policy, spec.id).plan(ids))

    @property
    def batches_remaining(self) -> int:
        return len(self._batches)

    async def __anext__(self) -> Any:
        while True:
            if self._buffer:
                return self._pop()
            if not self._batches:
                self._finish(ListingState.EXHAUSTED)
                raise StopAsyncIteration
            await self._resolve_batch()

    async def _resolve_batch(self) -> None:
        batch = self._batches.popleft()
        unique_ids = batch.unique_ids()
        params = {**self._params, "ids": unique_ids, "limit": len(unique_ids)}

        start = perf_counter()
        self.stats.requests += 1
        try:
            page = await self._issuer.issue(spec=self._spec, adapter=self._adapter, params=params)
        except DataError as e:
            log_listing_error(
                endpoint_id=self._spec.id,
                chunk_index=batch.chunk_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            self._buffer.extend(e for _ in batch.ids)
            return

        found = {record.id: record for record in page.records}
        log_batch_completed(
            endpoint_id=self._spec.id,
            chunk_index=batch.chunk_index,
            requested=len(unique_ids),
            found=sum(1 for record_id in unique_ids if record_id in found),
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        for record_id in batch.ids:
            if record_id in found:
                self._buffer.append(found[record_id])
            else:
                self._buffer.append(NotFoundError(record_id))
