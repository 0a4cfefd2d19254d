"""booru.e621 - Rate-limited async client for the e621/e926 API."""

from .api import Client, PoolQuery, PostQuery, TagQuery
from .core import (
    AboveLimitError,
    ClientConfigError,
    Cursor,
    CursorKind,
    DataError,
    DecodeError,
    NotFoundError,
    PoolCategory,
    PoolOrder,
    RateLimitError,
    Rating,
    ServerError,
    Site,
    TagCategory,
    TagOrder,
    TransportError,
)
from .models import Page, Pool, Post, Tag
from .runtime import NullRateLimiter, RateLimiter
from .runtime.chunking import BulkChunker, ListingState, PaginationCursor

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "PostQuery",
    "PoolQuery",
    "TagQuery",
    # Rate limiting
    "RateLimiter",
    "NullRateLimiter",
    # Listings
    "PaginationCursor",
    "BulkChunker",
    "ListingState",
    "Cursor",
    "CursorKind",
    # Models
    "Page",
    "Post",
    "Pool",
    "Tag",
    # Enums
    "Site",
    "Rating",
    "PoolCategory",
    "PoolOrder",
    "TagCategory",
    "TagOrder",
    # Exceptions
    "DataError",
    "ClientConfigError",
    "AboveLimitError",
    "TransportError",
    "ServerError",
    "RateLimitError",
    "DecodeError",
    "NotFoundError",
]
