"""Core enumerations shared by records and queries.

Architecture:
    String enums map one-to-one to the values the server sends and accepts,
    so they serialize into query parameters and decode from JSON directly.

Key Types:
    - Site: Which deployment to talk to (e621 or the safe-only e926)
    - Rating: Post content rating
    - PoolCategory / PoolOrder: Pool classification and search ordering
    - TagCategory / TagOrder: Tag classification and search ordering
"""

from enum import Enum, IntEnum


class Site(str, Enum):
    """Known deployments of the API."""

    E621 = "e621"
    E926 = "e926"


class Rating(str, Enum):
    """Post rating."""

    SAFE = "s"
    QUESTIONABLE = "q"
    EXPLICIT = "e"

    def __str__(self) -> str:
        return {"s": "safe", "q": "questionable", "e": "explicit"}[self.value]


class PoolCategory(str, Enum):
    SERIES = "series"
    COLLECTION = "collection"


class PoolOrder(str, Enum):
    """How to sort pool search results."""

    NAME = "name"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    POST_COUNT = "post_count"


class TagCategory(IntEnum):
    """Kind of property a tag describes."""

    GENERAL = 0
    ARTIST = 1
    COPYRIGHT = 3
    CHARACTER = 4
    SPECIES = 5
    INVALID = 6
    META = 7
    LORE = 8


class TagOrder(str, Enum):
    """How to sort tag search results.

    Only the id-based orders (and DATE, which the server sorts by id) can be
    walked with before/after cursors; the others fall back to numbered pages.
    """

    ID_ASC = "id_asc"
    ID_DESC = "id_desc"
    NAME = "name"
    DATE = "date"
    COUNT = "count"
    SIMILARITY = "similarity"
