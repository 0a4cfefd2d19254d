"""High-level API facade and query types."""

from .client import Client
from .request_builder import PoolQuery, PostQuery, TagQuery, normalize_tags

__all__ = [
    "Client",
    "PoolQuery",
    "PostQuery",
    "TagQuery",
    "normalize_tags",
]
