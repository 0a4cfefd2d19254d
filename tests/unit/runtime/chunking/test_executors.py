"""Unit tests for the PaginationCursor and BulkChunker listing drivers."""

from __future__ import annotations

from dataclasses import replace

import pytest

from booru.e621.connectors.e621.rest.endpoints import posts
from booru.e621.core import (
    AboveLimitError,
    Cursor,
    DataError,
    NotFoundError,
    ServerError,
    TransportError,
)
from booru.e621.models import Post
from booru.e621.runtime import NullRateLimiter
from booru.e621.runtime.chunking import BulkChunker, ChunkPolicy, ListingState, PaginationCursor
from booru.e621.runtime.rest import RequestIssuer


async def collect(listing):
    return [item async for item in listing]


def ids_of(items):
    return [item.id for item in items]


@pytest.fixture
def listing(fake_transport, post_server):
    """Factory for a post search listing over a fake server."""

    def factory(server_ids, *, handler=None, tags="", **kwargs):
        transport = fake_transport(handler or post_server(server_ids))
        issuer = RequestIssuer(transport, NullRateLimiter())
        cursor = PaginationCursor(
            issuer,
            spec=kwargs.pop("spec", posts.SEARCH_SPEC),
            adapter=posts.Adapter(),
            params={"tags": tags},
            **kwargs,
        )
        return cursor, transport

    return factory


@pytest.fixture
def chunker(fake_transport, post_server):
    """Factory for a post id lookup over a fake server."""

    def factory(server_ids, ids, *, handler=None, max_points=None):
        transport = fake_transport(handler or post_server(server_ids))
        spec = posts.BY_ID_SPEC
        if max_points is not None:
            spec = replace(spec, chunk_policy=ChunkPolicy(max_points=max_points))
        issuer = RequestIssuer(transport, NullRateLimiter())
        return BulkChunker(issuer, spec=spec, adapter=posts.Adapter(), ids=ids), transport

    return factory


class TestPaginationCursor:
    """Test PaginationCursor functionality."""

    @pytest.mark.asyncio
    async def test_bounded_listing_stops_at_limit(self, listing):
        cursor, transport = listing(range(1, 101), page_size=4, limit=10)

        items = await collect(cursor)

        assert ids_of(items) == list(range(100, 90, -1))
        assert [params["limit"] for _, params in transport.calls] == [4, 4, 2]
        assert [params.get("page") for _, params in transport.calls] == [None, "b97", "b93"]
        assert cursor.state is ListingState.EXHAUSTED

    @pytest.mark.asyncio
    async def test_short_page_exhausts(self, listing):
        cursor, transport = listing(range(1, 6), page_size=4)

        items = await collect(cursor)

        assert ids_of(items) == [5, 4, 3, 2, 1]
        assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_empty_page_exhausts(self, listing):
        cursor, transport = listing(range(1, 9), page_size=4)

        items = await collect(cursor)

        assert ids_of(items) == list(range(8, 0, -1))
        assert len(transport.calls) == 3
        assert transport.calls[-1][1]["page"] == "b1"

    @pytest.mark.asyncio
    async def test_no_results(self, listing):
        cursor, transport = listing([], page_size=10)

        assert await collect(cursor) == []
        assert len(transport.calls) == 1
        assert cursor.state is ListingState.EXHAUSTED

    @pytest.mark.asyncio
    async def test_abandoned_listing_issues_nothing_more(self, listing):
        cursor, transport = listing(range(1, 101), page_size=10)

        taken = []
        async for item in cursor:
            taken.append(item)
            if len(taken) == 15:
                break

        assert len(transport.calls) == 2
        assert ids_of(taken) == list(range(100, 85, -1))

    @pytest.mark.asyncio
    async def test_failure_yields_error_once_then_stops(self, listing, post_server):
        server = post_server(range(1, 11))

        def handler(url, params):
            if params.get("page"):
                return ServerError(status_code=500, reason="foo")
            return server(url, params)

        cursor, transport = listing([], handler=handler, page_size=2)

        items = await collect(cursor)

        assert ids_of(items[:2]) == [10, 9]
        assert len(items) == 3
        assert isinstance(items[2], ServerError)
        assert str(items[2]) == "HTTP error 500: foo"
        assert cursor.state is ListingState.FAILED
        assert len(transport.calls) == 2

        with pytest.raises(StopAsyncIteration):
            await cursor.__anext__()
        assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_first_request_failure(self, listing):
        cursor, _ = listing([], handler=lambda url, params: TransportError("boom"), page_size=5)

        items = await collect(cursor)

        assert len(items) == 1
        assert isinstance(items[0], TransportError)
        assert cursor.stats.errors == 1
        assert cursor.stats.records == 0

    @pytest.mark.asyncio
    async def test_zero_limit_issues_no_request(self, listing):
        cursor, transport = listing(range(1, 10), page_size=5, limit=0)

        assert await collect(cursor) == []
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_start_cursor(self, listing):
        cursor, transport = listing(range(1, 101), page_size=5, limit=5, cursor=Cursor.before(50))

        items = await collect(cursor)

        assert ids_of(items) == [49, 48, 47, 46, 45]
        assert transport.calls[0][1]["page"] == "b50"

    @pytest.mark.asyncio
    async def test_after_cursor_for_ascending_order(self, listing):
        cursor, transport = listing(range(1, 8), tags="order:id", page_size=3)

        items = await collect(cursor)

        # First page comes from the server default, later ones from a<max id>
        assert [params.get("page") for _, params in transport.calls] == [None, "a3", "a6"]
        assert ids_of(items) == list(range(1, 8))

    @pytest.mark.asyncio
    async def test_bounded_numbered_pages_keep_page_size(self, listing):
        cursor, transport = listing(range(1, 101), tags="order:score", page_size=4, limit=6)

        items = await collect(cursor)

        ids = ids_of(items)
        assert ids == [100, 99, 98, 97, 96, 95]
        assert len(set(ids)) == len(ids)
        assert [(params.get("page"), params["limit"]) for _, params in transport.calls] == [
            (None, 4),
            ("2", 4),
        ]
        assert cursor.state is ListingState.EXHAUSTED

    @pytest.mark.asyncio
    async def test_numbered_start_cursor_keeps_page_size(self, listing):
        cursor, transport = listing(range(1, 21), page_size=5, limit=3, cursor=Cursor.page(2))

        items = await collect(cursor)

        assert ids_of(items) == [15, 14, 13]
        assert transport.calls[0][1]["limit"] == 5

    @pytest.mark.asyncio
    async def test_short_numbered_page_is_measured_against_sent_size(self, listing):
        cursor, transport = listing(range(1, 7), tags="order:score", page_size=4, limit=10)

        items = await collect(cursor)

        assert ids_of(items) == [6, 5, 4, 3, 2, 1]
        assert [params["limit"] for _, params in transport.calls] == [4, 4]

    @pytest.mark.asyncio
    async def test_cursor_that_does_not_move_stops(self, listing):
        spec = replace(posts.SEARCH_SPEC, next_cursor=lambda page, cursor, params: cursor)
        cursor, transport = listing(range(1, 101), spec=spec, page_size=5, cursor=Cursor.page(1))

        items = await collect(cursor)

        assert len(items) == 5
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_max_chunks_bounds_requests(self, listing):
        spec = replace(posts.SEARCH_SPEC, chunk_policy=ChunkPolicy(max_points=320, max_chunks=2))
        cursor, transport = listing(range(1, 101), spec=spec, page_size=10)

        items = await collect(cursor)

        assert len(items) == 20
        assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_stats(self, listing):
        cursor, _ = listing(range(1, 8), page_size=3)
        await collect(cursor)
        assert cursor.stats.requests == 3
        assert cursor.stats.records == 7
        assert cursor.cursor_state.pages_fetched == 3

    def test_invalid_arguments(self, listing):
        with pytest.raises(AboveLimitError):
            listing([], page_size=321)
        with pytest.raises(ValueError):
            listing([], page_size=0)
        with pytest.raises(ValueError):
            listing([], page_size=10, limit=-1)


class TestBulkChunker:
    """Test BulkChunker functionality."""

    @pytest.mark.asyncio
    async def test_input_order_with_duplicates_and_missing(self, chunker):
        bulk, transport = chunker([3, 5, 7], [5, 3, 3, 9])

        items = await collect(bulk)

        assert [item.id for item in items[:3]] == [5, 3, 3]
        assert all(isinstance(item, Post) for item in items[:3])
        assert isinstance(items[3], NotFoundError)
        assert items[3].record_id == 9
        assert transport.calls == [("/posts.json", {"tags": "id:5,3,9", "limit": 3})]

    @pytest.mark.asyncio
    async def test_request_count_is_ceil_of_ids_over_cap(self, chunker):
        ids = list(range(1, 701))
        bulk, transport = chunker(ids, ids)

        items = await collect(bulk)

        assert ids_of(items) == ids
        assert len(transport.calls) == 3
        assert [params["limit"] for _, params in transport.calls] == [320, 320, 60]

    @pytest.mark.asyncio
    async def test_batches_are_fetched_lazily(self, chunker):
        ids = list(range(1, 701))
        bulk, transport = chunker(ids, ids)

        first = await bulk.__anext__()

        assert first.id == 1
        assert len(transport.calls) == 1
        assert bulk.batches_remaining == 2

    @pytest.mark.asyncio
    async def test_failed_batch_fills_every_slot(self, chunker, post_server):
        server = post_server(range(1, 6))

        def handler(url, params):
            if "3" in params["tags"]:
                return TransportError("Couldn't send request: reset")
            return server(url, params)

        bulk, transport = chunker([], [1, 2, 3, 4, 5], handler=handler, max_points=2)

        items = await collect(bulk)

        assert len(items) == 5
        assert ids_of(items[:2]) == [1, 2]
        assert isinstance(items[2], TransportError)
        assert items[2] is items[3]
        assert items[4].id == 5
        assert len(transport.calls) == 3
        assert bulk.stats.errors == 2

    @pytest.mark.asyncio
    async def test_empty_ids(self, chunker):
        bulk, transport = chunker([1], [])
        assert await collect(bulk) == []
        assert transport.calls == []

    def test_invalid_ids_rejected_before_any_request(self, chunker):
        with pytest.raises(ValueError):
            chunker([1], [1, -2])

    @pytest.mark.asyncio
    async def test_every_element_is_record_or_error(self, chunker):
        bulk, _ = chunker([2, 4], [1, 2, 3, 4])
        items = await collect(bulk)
        assert all(isinstance(item, (Post, DataError)) for item in items)
        assert [isinstance(item, Post) for item in items] == [False, True, False, True]
