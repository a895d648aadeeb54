# northwind_admin/services/entity_browser.py
"""
Page controller for one entity: owns the query axes, a FetchCoordinator, a
MutationCoordinator and a ViewStateMachine, and wires them together.

Changing the search, the filters or the sort resets the page to 1; changing
the page leaves the other axes alone.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Iterable, Mapping, Optional, Tuple, TypeVar

from northwind_admin.db.repos.base_repo import EntityRepository
from northwind_admin.errors import NotFoundError
from northwind_admin.models.query import Pagination, QueryDescriptor, SortKey
from northwind_admin.services import query_builder
from northwind_admin.services.fetch_coordinator import FetchCoordinator, QueryState
from northwind_admin.services.mutation_coordinator import MutationCoordinator
from northwind_admin.services.view_state import (
    CreateView,
    DetailView,
    EditView,
    ViewState,
    ViewStateMachine,
)
from northwind_admin.utils.pagination import PaginationMeta, compute_meta
from simple_logger import Slogger

R = TypeVar("R")


class EntityBrowser(Generic[R]):
    """List / detail / create / edit flow for one record type."""

    def __init__(
        self,
        name: str,
        repository: EntityRepository[R],
        *,
        id_of: Callable[[R], Any],
        search_fields: Iterable[str],
        per_page: int = 20,
        max_visible: int = 5,
        stale_after: float = 300.0,
    ) -> None:
        self.name = name
        self.repository = repository
        self.id_of = id_of
        self.search_fields: Tuple[str, ...] = tuple(search_fields)
        self.max_visible = max_visible

        self.fetcher = FetchCoordinator(repository, stale_after=stale_after, name=name)
        self.mutations = MutationCoordinator(repository, name=name)
        self.view = ViewStateMachine(id_of)

        self._page = 1
        self._per_page = per_page
        self._search = ""
        self._filters: Dict[str, Any] = {}
        self._sort: Tuple[SortKey, ...] = ()

    # ---------- derived state -----------------------------------------------

    @property
    def descriptor(self) -> QueryDescriptor:
        return query_builder.build(
            Pagination(page=self._page, limit=self._per_page),
            search_query=self._search,
            search_fields=self.search_fields,
            filters=self._filters,
            sort=self._sort,
        )

    @property
    def state(self) -> QueryState:
        return self.fetcher.state

    @property
    def view_state(self) -> ViewState:
        return self.view.state

    @property
    def page(self) -> int:
        return self._page

    @property
    def search(self) -> str:
        return self._search

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    @property
    def sort(self) -> Tuple[SortKey, ...]:
        return self._sort

    def pagination_meta(self) -> PaginationMeta:
        window = self.fetcher.state.window
        if window is None:
            return compute_meta(self._page, 0, self.max_visible)
        return compute_meta(window.page, window.total_pages, self.max_visible)

    # ---------- loading -----------------------------------------------------

    async def load(self) -> QueryState:
        return await self._follow_clamp(await self.fetcher.use_query(self.descriptor))

    async def refetch(self) -> QueryState:
        """Reload the current page from the repository, skipping the cache."""
        if self.fetcher.state.descriptor != self.descriptor:
            return await self.load()
        return await self._follow_clamp(await self.fetcher.refetch())

    async def _follow_clamp(self, state: QueryState) -> QueryState:
        window = state.window
        if (
            window is not None
            and state.window_descriptor == self.descriptor
            and window.page != self._page
        ):
            # the repository clamped a page past the end
            Slogger.debug(f"{self.name}: page {self._page} clamped to {window.page}")
            self._page = window.page
            state = await self.fetcher.use_query(self.descriptor)
        return state

    async def set_page(self, page: int) -> QueryState:
        # validated before it becomes part of the axes
        query_builder.with_page(self.descriptor, page)
        self._page = page
        return await self.load()

    async def set_search(self, query: str) -> QueryState:
        self._search = (query or "").strip()
        self._page = 1
        return await self.load()

    async def set_filters(self, filters: Optional[Mapping[str, Any]]) -> QueryState:
        self._filters = dict(filters or {})
        self._page = 1
        return await self.load()

    async def set_filter(self, key: str, value: Any) -> QueryState:
        filters = dict(self._filters)
        if value is None or value == "":
            filters.pop(key, None)
        else:
            filters[key] = value
        return await self.set_filters(filters)

    async def clear_filters(self) -> QueryState:
        return await self.set_filters({})

    async def set_sort(self, field: Optional[str], descending: bool = False) -> QueryState:
        self._sort = (SortKey(field, descending),) if field else ()
        self._page = 1
        return await self.load()

    # ---------- records -----------------------------------------------------

    async def resolve(self, record_id: Any) -> Optional[R]:
        """The record from the visible window, else straight from the repository."""
        window = self.fetcher.state.window
        if window is not None:
            for record in window.data:
                if self.id_of(record) == record_id:
                    return record
        return await self.repository.by_id(record_id)

    async def save(self, data: Mapping[str, Any]) -> R:
        """
        Persist the form for the current Create or Edit view.

        ValidationError propagates with the view state unchanged so the form
        can show it. A NotFoundError during an edit sends the view back to List.
        """
        state = self.view.state
        if isinstance(state, CreateView):
            record = await self.mutations.create(data)
            self.view.mutation_succeeded(self.id_of(record))
        elif isinstance(state, EditView):
            try:
                record = await self.mutations.update(self.id_of(state.record), data)
            except NotFoundError:
                self.view.record_vanished()
                await self.refetch()
                raise
            self.view.mutation_succeeded()
        else:
            raise RuntimeError(f"{self.name}: save() needs a create or edit view, not {state!r}")

        self.fetcher.invalidate()
        await self.refetch()
        return record

    async def delete(self, record_id: Any) -> None:
        """Delete without asking; the caller has already confirmed."""
        try:
            await self.mutations.delete(record_id)
        except NotFoundError:
            self._leave_record(record_id)
            await self.refetch()
            raise
        self._leave_record(record_id)
        self.fetcher.invalidate()
        await self.refetch()

    def _leave_record(self, record_id: Any) -> None:
        state = self.view.state
        focused = (
            (isinstance(state, DetailView) and state.record_id == record_id)
            or (isinstance(state, EditView) and self.id_of(state.record) == record_id)
        )
        if focused:
            self.view.record_vanished()
