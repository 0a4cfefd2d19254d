"""Page of decoded records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One server response's worth of records.

    Attributes:
        records: Records in server order
        exhausted: True when the payload itself says there are no more results
    """

    records: Sequence[T] = field(default_factory=tuple)
    exhausted: bool = False

    def __len__(self) -> int:
        return len(self.records)

    def ids(self) -> list[int]:
        return [record.id for record in self.records]  # type: ignore[attr-defined]
