"""Generic page-of-results container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, Tuple, TypeVar

T = TypeVar("T")


def total_pages_for(total: int, limit: int) -> int:
    """ceil(total / limit) without floats."""
    if limit < 1:
        raise ValueError(f"limit must be > 0, got {limit}")
    return (total + limit - 1) // limit


@dataclass(frozen=True, slots=True)
class PageWindow(Generic[T]):
    """A single page of records plus total-count meta-data."""

    data: Tuple[T, ...]
    page: int            # current page index (1-based)
    limit: int           # page size
    total: int           # records in the whole result set
    total_pages: int

    def __post_init__(self) -> None:
        if not isinstance(self.data, tuple):
            object.__setattr__(self, "data", tuple(self.data))
        if self.limit < 1:
            raise ValueError(f"limit must be > 0, got {self.limit}")
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.total < 0:
            raise ValueError(f"total must be >= 0, got {self.total}")
        if self.total_pages != total_pages_for(self.total, self.limit):
            raise ValueError(
                f"total_pages={self.total_pages} does not match total={self.total}, limit={self.limit}"
            )
        if len(self.data) > self.limit:
            raise ValueError(f"{len(self.data)} records exceed limit={self.limit}")
        if self.page > max(self.total_pages, 1):
            raise ValueError(f"page {self.page} is past the last page ({self.total_pages})")

    # ------------- constructors -------------
    @classmethod
    def from_total(cls, data: Sequence[T], *, page: int, limit: int, total: int) -> "PageWindow[T]":
        return cls(
            data=tuple(data),
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages_for(total, limit),
        )

    @classmethod
    def empty(cls, limit: int) -> "PageWindow[T]":
        return cls(data=(), page=1, limit=limit, total=0, total_pages=0)

    # ------------- helpers -------------
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def has_prev(self) -> bool:
        return self.page > 1
