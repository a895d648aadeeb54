# northwind_admin/services/fetch_coordinator.py
"""
Cached, revalidatable page of results for one entity repository.

The coordinator holds a *current* descriptor. Every fetch is tagged with a
generation number, and a result only reaches the visible window if its
descriptor is still current and it belongs to the latest fetch issued for
that descriptor. Older results may still warm the cache.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from northwind_admin.db.repos.base_repo import EntityRepository
from northwind_admin.errors import DashboardError, TransportError
from northwind_admin.models.pagination import PageWindow
from northwind_admin.models.query import QueryDescriptor
from simple_logger import Slogger

Listener = Callable[["QueryState"], None]


@dataclass(frozen=True, slots=True)
class QueryState:
    """Observable state: current input, the window on screen and its status."""

    descriptor: Optional[QueryDescriptor] = None
    window: Optional[PageWindow[Any]] = None
    window_descriptor: Optional[QueryDescriptor] = None  # what `window` was fetched for
    loading: bool = False
    error: Optional[DashboardError] = None


@dataclass(slots=True)
class _CacheEntry:
    window: PageWindow[Any]
    fetched_at: float
    stale: bool = False


class FetchCoordinator:
    """Fetches pages through a repository and keeps the latest good window."""

    def __init__(
        self,
        repository: EntityRepository[Any],
        *,
        stale_after: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
        name: str = "",
    ) -> None:
        self._repo = repository
        self._stale_after = stale_after
        self._clock = clock
        self._name = name or type(repository).__name__

        self._state = QueryState()
        self._cache: Dict[QueryDescriptor, _CacheEntry] = {}
        self._in_flight: Dict[QueryDescriptor, Tuple[int, int, "asyncio.Task[None]"]] = {}
        self._latest: Dict[QueryDescriptor, int] = {}
        self._generation = 0
        self._epoch = 0                     # bumped by invalidate()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> QueryState:
        return self._state

    # ---------- listeners ----------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    # ---------- public API ---------------------------------------------------

    async def use_query(self, descriptor: QueryDescriptor) -> QueryState:
        """Make `descriptor` current and bring the window up to date for it."""
        if descriptor != self._state.descriptor:
            self._set_state(descriptor=descriptor, loading=descriptor in self._in_flight)

        entry = self._cache.get(descriptor)
        if entry is not None and self._is_fresh(entry):
            Slogger.debug(f"{self._name}: cache hit", {"page": descriptor.page})
            self._apply(descriptor, entry.window)
            return self._state

        in_flight = self._in_flight.get(descriptor)
        if in_flight is not None and in_flight[1] == self._epoch:
            await asyncio.shield(in_flight[2])
            return self._state

        return await self._fetch(descriptor)

    async def refetch(self) -> QueryState:
        """Fetch the current descriptor again, ignoring the cache."""
        descriptor = self._state.descriptor
        if descriptor is None:
            return self._state
        return await self._fetch(descriptor)

    def invalidate(self) -> None:
        """Mark every cached window stale, including ones still being fetched."""
        self._epoch += 1
        for entry in self._cache.values():
            entry.stale = True

    # ---------- internals ----------------------------------------------------

    def _is_fresh(self, entry: _CacheEntry) -> bool:
        return not entry.stale and self._clock() - entry.fetched_at < self._stale_after

    async def _fetch(self, descriptor: QueryDescriptor) -> QueryState:
        self._generation += 1
        generation = self._generation
        self._latest[descriptor] = generation

        task = asyncio.ensure_future(self._run(descriptor, generation, self._epoch))
        self._in_flight[descriptor] = (generation, self._epoch, task)
        if descriptor == self._state.descriptor and not self._state.loading:
            self._set_state(loading=True)

        await asyncio.shield(task)
        return self._state

    async def _run(self, descriptor: QueryDescriptor, generation: int, epoch: int) -> None:
        window: Optional[PageWindow[Any]] = None
        error: Optional[DashboardError] = None
        try:
            window = await self._repo.list(descriptor)
        except DashboardError as e:
            Slogger.warning(f"{self._name}: fetch failed: {e.message}", {"page": descriptor.page})
            error = e
        except Exception as e:
            Slogger.exception(e, f"{self._name}: unexpected fetch failure")
            error = TransportError(f"Could not load records: {e}")
        finally:
            if self._in_flight.get(descriptor, (None,))[0] == generation:
                del self._in_flight[descriptor]

        self._settle(descriptor, generation, epoch, window, error)

    def _settle(
        self,
        descriptor: QueryDescriptor,
        generation: int,
        epoch: int,
        window: Optional[PageWindow[Any]],
        error: Optional[DashboardError],
    ) -> None:
        if self._latest.get(descriptor) != generation:
            Slogger.debug(
                f"{self._name}: discarded superseded response",
                {"generation": generation, "latest": self._latest.get(descriptor)},
            )
            return

        if window is not None:
            # fetched before the last invalidate(): cached, but never fresh
            self._cache[descriptor] = _CacheEntry(
                window=window, fetched_at=self._clock(), stale=epoch != self._epoch
            )

        if descriptor != self._state.descriptor:
            Slogger.debug(f"{self._name}: response for a previous query cached, not shown")
            return

        if error is not None:
            # keep the last good window on screen
            self._set_state(loading=False, error=error)
        else:
            self._apply(descriptor, window)

    def _apply(self, descriptor: QueryDescriptor, window: Optional[PageWindow[Any]]) -> None:
        self._set_state(
            window=window,
            window_descriptor=descriptor,
            loading=descriptor in self._in_flight,
            error=None,
        )
