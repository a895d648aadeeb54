# northwind_admin/services/query_builder.py
"""
Composes pagination, free-text search, structured filters and sort keys into
one immutable `QueryDescriptor`.

The builder never resets the page; that policy belongs to the page
controller (see `EntityBrowser`).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from northwind_admin.errors import ValidationError
from northwind_admin.models.query import (
    FilterItems,
    Pagination,
    QueryDescriptor,
    SearchSpec,
    SortKey,
)


def _freeze(value: Any) -> Any:
    """Make a filter value hashable: lists become tuples, sets sorted tuples."""
    if isinstance(value, (set, frozenset)):
        return tuple(sorted(value, key=repr))
    if isinstance(value, list):
        return tuple(value)
    return value


def _freeze_filters(filters: Optional[Mapping[str, Any]]) -> FilterItems:
    if not filters:
        return ()
    return tuple(sorted((str(key), _freeze(value)) for key, value in filters.items()))


def _search_spec(query: str, fields: Iterable[str]) -> Optional[SearchSpec]:
    query = (query or "").strip()
    if not query:
        return None
    return SearchSpec(fields=frozenset(fields), query=query)


def _check_pagination(pagination: Pagination) -> Pagination:
    if not isinstance(pagination.page, int) or pagination.page < 1:
        raise ValidationError(f"Page must be a positive integer, got {pagination.page!r}", field="page")
    if not isinstance(pagination.limit, int) or pagination.limit < 1:
        raise ValidationError(f"Limit must be a positive integer, got {pagination.limit!r}", field="limit")
    return pagination


def build(
    pagination: Pagination,
    search_query: str = "",
    search_fields: Iterable[str] = (),
    filters: Optional[Mapping[str, Any]] = None,
    sort: Sequence[SortKey] = (),
) -> QueryDescriptor:
    """
    Build a descriptor. A blank `search_query` omits search entirely; filter
    mappings with the same pairs produce equal descriptors whatever their order.
    """
    return QueryDescriptor(
        pagination=_check_pagination(pagination),
        search=_search_spec(search_query, search_fields),
        filters=_freeze_filters(filters),
        sort=tuple(sort),
    )


# ---------- single-axis helpers -------------------------------------------


def with_page(descriptor: QueryDescriptor, page: int) -> QueryDescriptor:
    pagination = _check_pagination(replace(descriptor.pagination, page=page))
    return replace(descriptor, pagination=pagination)


def with_search(
    descriptor: QueryDescriptor, search_query: str, search_fields: Iterable[str]
) -> QueryDescriptor:
    return replace(descriptor, search=_search_spec(search_query, search_fields))


def with_filters(descriptor: QueryDescriptor, filters: Optional[Mapping[str, Any]]) -> QueryDescriptor:
    return replace(descriptor, filters=_freeze_filters(filters))
