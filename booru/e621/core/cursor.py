"""Pagination cursor value type.

The server accepts three forms for its ``page`` parameter: a page number,
``b<id>`` for records ordered before an id and ``a<id>`` for records ordered
after an id. Before/after cursors are exclusive of the id itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CursorKind(str, Enum):
    PAGE = "page"
    BEFORE = "before"
    AFTER = "after"


_PREFIXES = {CursorKind.BEFORE: "b", CursorKind.AFTER: "a"}


@dataclass(frozen=True)
class Cursor:
    """Where to begin returning results from in a paginated request.

    Examples:
        >>> str(Cursor.before(123))
        'b123'
        >>> Cursor.parse("a9")
        Cursor(kind=<CursorKind.AFTER: 'after'>, value=9)
    """

    kind: CursorKind
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"Cursor value must be non-negative, got {self.value}")

    @classmethod
    def page(cls, number: int) -> Cursor:
        return cls(CursorKind.PAGE, number)

    @classmethod
    def before(cls, record_id: int) -> Cursor:
        return cls(CursorKind.BEFORE, record_id)

    @classmethod
    def after(cls, record_id: int) -> Cursor:
        return cls(CursorKind.AFTER, record_id)

    @classmethod
    def parse(cls, text: str) -> Cursor:
        """Parse the server's ``page`` parameter syntax.

        Raises:
            ValueError: If the text is not a valid cursor
        """
        if text.startswith("b"):
            return cls.before(int(text[1:]))
        if text.startswith("a"):
            return cls.after(int(text[1:]))
        return cls.page(int(text))

    @property
    def is_page(self) -> bool:
        return self.kind is CursorKind.PAGE

    def __str__(self) -> str:
        return f"{_PREFIXES.get(self.kind, '')}{self.value}"
