"""Chunking layer for pagination and bulk id lookups.

This module provides the listing engine that turns a search or an id list
into a lazy sequence of rate-limited requests.

Architecture:
    The chunking layer consists of:
    - definitions.py: Policy and state structures (ChunkPolicy, CursorState, Batch)
    - planners.py: Batch planning and cursor advancement
    - executors.py: Listing drivers (PaginationCursor, BulkChunker)
    - telemetry.py: Structured logging

Usage:
    Endpoints declare their per-request cap through ``chunk_policy`` and
    their pagination scheme through ``next_cursor`` in their
    RestEndpointSpec; the drivers read both.
"""

from __future__ import annotations

from .definitions import (
    MAX_POINTS_PER_REQUEST,
    Batch,
    ChunkPolicy,
    CursorState,
    ListingState,
    ListingStats,
)
from .executors import BulkChunker, PaginationCursor
from .planners import BatchPlanner, advance_cursor

__all__ = [
    "MAX_POINTS_PER_REQUEST",
    "Batch",
    "BatchPlanner",
    "BulkChunker",
    "ChunkPolicy",
    "CursorState",
    "ListingState",
    "ListingStats",
    "PaginationCursor",
    "advance_cursor",
]
