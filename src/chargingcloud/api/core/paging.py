# chargingcloud/api/core/paging.py
"""skip/take windows over ordered sequences."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


def window(items: Sequence[T], skip: int = 0, take: int | None = None) -> list[T]:
    """Return ``min(take, max(0, len(items) - skip))`` items starting at ``skip``.

    ``take=None`` means "all remaining". Negative values are treated as 0.
    """
    start = max(skip, 0)
    if take is None:
        return list(items[start:])
    return list(items[start:start + max(take, 0)])


@dataclass(frozen=True)
class Page(Generic[T]):
    """A window of a collection plus the size of the whole collection."""

    items: list[T]
    skip: int
    take: int | None
    total: int

    @classmethod
    def of(cls, items: Sequence[T], skip: int = 0, take: int | None = None) -> Page[T]:
        return cls(window(items, skip, take), max(skip, 0), take, len(items))

    def __len__(self) -> int:
        return len(self.items)
