"""Structured logging for listing operations.

This module provides telemetry hooks for pagination and batch lookups,
emitting structured logs for observability.
"""

from __future__ import annotations

import logging

from .definitions import ListingStats

logger = logging.getLogger(__name__)


def log_batch_plan(
    *,
    endpoint_id: str,
    total_batches: int,
    total_ids: int,
    batch_size: int,
) -> None:
    """Log batch plan creation.

    Args:
        endpoint_id: Endpoint identifier
        total_batches: Number of batches (and requests) planned
        total_ids: Number of ids requested, duplicates included
        batch_size: Maximum ids per batch
    """
    logger.info(
        "batch_plan_created",
        extra={
            "endpoint_id": endpoint_id,
            "total_batches": total_batches,
            "total_ids": total_ids,
            "batch_size": batch_size,
        },
    )


def log_page_fetched(
    *,
    endpoint_id: str,
    page_index: int,
    cursor: str | None,
    requested: int,
    received: int,
    latency_ms: float | None = None,
) -> None:
    """Log one fetched page of a paginated listing.

    Args:
        endpoint_id: Endpoint identifier
        page_index: Zero-based index of the page in the listing
        cursor: Cursor the page was requested with (None for the first page)
        requested: Page size requested
        received: Number of records received
        latency_ms: Latency in milliseconds, rate limit wait included (optional)
    """
    logger.info(
        "page_fetched",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "cursor": cursor,
            "requested": requested,
            "received": received,
            "latency_ms": latency_ms,
        },
    )


def log_batch_completed(
    *,
    endpoint_id: str,
    chunk_index: int,
    requested: int,
    found: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single id batch.

    Args:
        endpoint_id: Endpoint identifier
        chunk_index: Zero-based index of the batch
        requested: Number of distinct ids in the batch
        found: Number of those ids present in the response
        latency_ms: Latency in milliseconds, rate limit wait included (optional)
    """
    logger.info(
        "batch_completed",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "requested": requested,
            "found": found,
            "latency_ms": latency_ms,
        },
    )


def log_listing_complete(
    *,
    endpoint_id: str,
    state: str,
    stats: ListingStats,
) -> None:
    """Log the end of a listing.

    Args:
        endpoint_id: Endpoint identifier
        state: Final listing state
        stats: Counters accumulated over the listing
    """
    logger.info(
        "listing_complete",
        extra={
            "endpoint_id": endpoint_id,
            "state": state,
            "requests": stats.requests,
            "records": stats.records,
            "errors": stats.errors,
        },
    )


def log_listing_error(
    *,
    endpoint_id: str,
    chunk_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed request of a listing.

    Args:
        endpoint_id: Endpoint identifier
        chunk_index: Zero-based index of the page or batch that failed
        error_type: Type of error (e.g., "TransportError", "DecodeError")
        error_message: Error message
    """
    logger.error(
        "listing_error",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
