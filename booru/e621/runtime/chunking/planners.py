"""Batch planning logic for bulk identifier lookups.

This module provides the BatchPlanner class that splits a caller's id list
into request-sized batches based on the endpoint's chunk policy.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ...core.cursor import Cursor, CursorKind
from ...models import Page
from .definitions import Batch, ChunkPolicy
from .telemetry import log_batch_plan


class BatchPlanner:
    """Plans batches for id lookups.

    Batches are contiguous fixed-size slices of the input, so planning
    never reorders anything.
    """

    def __init__(self, policy: ChunkPolicy, endpoint_id: str = "unknown") -> None:
        """Initialize batch planner.

        Args:
            policy: Chunking policy for the endpoint
            endpoint_id: Endpoint identifier used in telemetry
        """
        self._policy = policy
        self._endpoint_id = endpoint_id

    def plan(self, ids: Iterable[int]) -> list[Batch]:
        """Plan batches for a list of ids.

        Args:
            ids: Record ids in caller order; duplicates are kept

        Returns:
            List of batches, each at most ``max_points`` long (empty for no ids)

        Raises:
            ValueError: If an id is not a positive integer or the plan would
                exceed ``max_chunks``
        """
        id_list = list(ids)
        for record_id in id_list:
            if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id < 1:
                raise ValueError(f"ids must be positive integers, got {record_id!r}")

        size = self._policy.max_points
        batches = [
            Batch(ids=tuple(id_list[start : start + size]), chunk_index=index)
            for index, start in enumerate(range(0, len(id_list), size))
        ]

        max_chunks = self._policy.max_chunks
        if max_chunks is not None and len(batches) > max_chunks:
            raise ValueError(
                f"{len(id_list)} ids need {len(batches)} requests, "
                f"more than the allowed {max_chunks}"
            )

        log_batch_plan(
            endpoint_id=self._endpoint_id,
            total_batches=len(batches),
            total_ids=len(id_list),
            batch_size=size,
        )
        return batches


def advance_cursor(
    page: Page[Any], cursor: Cursor | None, default: CursorKind = CursorKind.BEFORE
) -> Cursor | None:
    """Compute the cursor of the page following ``page``.

    An explicit cursor keeps its kind: before-cursors move below the smallest
    id seen, after-cursors above the largest and page numbers increment. With
    no cursor yet (first page fetched with the server default), ``default``
    decides the kind.

    Args:
        page: Page just fetched
        cursor: Cursor the page was requested with
        default: Kind to use when ``cursor`` is None

    Returns:
        Next cursor, or None if the page is empty
    """
    if not page.records:
        return None

    kind = cursor.kind if cursor is not None else default
    if kind is CursorKind.PAGE:
        # The server's first page is page 1
        return Cursor.page(cursor.value + 1 if cursor is not None else 2)

    ids = page.ids()
    if kind is CursorKind.AFTER:
        return Cursor.after(max(ids))
    return Cursor.before(min(ids))
