"""Immutable query descriptor: pagination + search + filters + sort."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

FilterItems = Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True, slots=True)
class Pagination:
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class SearchSpec:
    fields: FrozenSet[str]
    query: str


@dataclass(frozen=True, slots=True)
class SortKey:
    field: str
    descending: bool = False


@dataclass(frozen=True, slots=True)
class QueryDescriptor:
    """
    Everything a repository needs to produce one PageWindow.

    `filters` is kept as key-sorted pairs so that two descriptors built from
    mappings with the same content compare (and hash) equal.
    """

    pagination: Pagination
    search: Optional[SearchSpec] = None
    filters: FilterItems = ()
    sort: Tuple[SortKey, ...] = field(default=())

    def filter_map(self) -> Dict[str, Any]:
        return dict(self.filters)

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def limit(self) -> int:
        return self.pagination.limit
