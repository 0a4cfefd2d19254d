"""Chunking metadata definitions and listing state structures.

This module defines the data structures used to describe how endpoints are
paginated and chunked, and the mutable state of a listing in progress.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ...core.cursor import Cursor

# Hard cap on records per request documented by the server
MAX_POINTS_PER_REQUEST = 320


@dataclass(frozen=True)
class ChunkPolicy:
    """Chunking policy for an endpoint.

    Attributes:
        max_points: Maximum number of records (or ids) per request
        max_chunks: Maximum number of requests for one listing (None = unlimited)
    """

    max_points: int = MAX_POINTS_PER_REQUEST
    max_chunks: int | None = None

    def __post_init__(self) -> None:
        if self.max_points < 1:
            raise ValueError(f"max_points must be at least 1, got {self.max_points}")
        if self.max_chunks is not None and self.max_chunks < 1:
            raise ValueError(f"max_chunks must be at least 1, got {self.max_chunks}")


class ListingState(str, Enum):
    """Lifecycle of a paginated listing.

    EXHAUSTED and FAILED are terminal: no request is issued once reached.
    """

    FRESH = "fresh"
    IN_PROGRESS = "in_progress"
    EXHAUSTED = "exhausted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ListingState.EXHAUSTED, ListingState.FAILED)


@dataclass
class CursorState:
    """Position of one in-progress listing.

    Attributes:
        cursor: Marker for the next page (None = first page, server default)
        remaining: Records still wanted when the caller bounded the count
        state: Lifecycle state
        pages_fetched: Number of requests issued so far
    """

    cursor: Cursor | None = None
    remaining: int | None = None
    state: ListingState = ListingState.FRESH
    pages_fetched: int = 0

    def exhaust(self) -> None:
        self.state = ListingState.EXHAUSTED

    def fail(self) -> None:
        self.state = ListingState.FAILED


@dataclass(frozen=True)
class Batch:
    """Contiguous slice of a caller's id list, sent as one request.

    Attributes:
        ids: Ids in caller order (duplicates kept)
        chunk_index: Zero-based index of this batch in the overall plan
    """

    ids: tuple[int, ...]
    chunk_index: int = 0

    def __len__(self) -> int:
        return len(self.ids)

    def unique_ids(self) -> list[int]:
        """Ids in first-seen order, without duplicates."""
        return list(dict.fromkeys(self.ids))


@dataclass
class ListingStats:
    """Counters of a listing, reported when it ends.

    Attributes:
        requests: Requests issued
        records: Records yielded
        errors: Error elements yielded
    """

    requests: int = 0
    records: int = 0
    errors: int = 0
