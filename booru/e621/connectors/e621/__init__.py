"""e621 connector: site configuration and REST endpoint definitions."""

from .config import (
    BASE_URLS,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    RATE_LIMIT_CAPACITY,
    REQUEST_COOLDOWN_S,
    get_base_url,
)

__all__ = [
    "BASE_URLS",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "RATE_LIMIT_CAPACITY",
    "REQUEST_COOLDOWN_S",
    "get_base_url",
]
