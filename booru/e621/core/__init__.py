"""Core components."""

from .cursor import Cursor, CursorKind
from .enums import PoolCategory, PoolOrder, Rating, Site, TagCategory, TagOrder
from .exceptions import (
    AboveLimitError,
    ClientConfigError,
    DataError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
)

__all__ = [
    "Cursor",
    "CursorKind",
    "Site",
    "Rating",
    "PoolCategory",
    "PoolOrder",
    "TagCategory",
    "TagOrder",
    "DataError",
    "ClientConfigError",
    "AboveLimitError",
    "TransportError",
    "ServerError",
    "RateLimitError",
    "DecodeError",
    "NotFoundError",
]
