# northwind_admin/services/view_state.py
"""
Per-entity page mode: List, Detail(id), Create or Edit(record).

Transitions happen only through the methods below. Each returns True when the
transition was legal and applied; anything else leaves the state alone and
returns False.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union


@dataclass(frozen=True, slots=True)
class ListView:
    pass


@dataclass(frozen=True, slots=True)
class DetailView:
    record_id: Any


@dataclass(frozen=True, slots=True)
class CreateView:
    pass


@dataclass(frozen=True, slots=True)
class EditView:
    record: Any
    return_to: Optional[Any] = None  # Detail id the edit was entered from


ViewState = Union[ListView, DetailView, CreateView, EditView]
Listener = Callable[[ViewState], None]


class ViewStateMachine:
    def __init__(self, id_of: Callable[[Any], Any]) -> None:
        self._id_of = id_of
        self._state: ViewState = ListView()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def _go(self, state: ViewState) -> bool:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return True

    # ---------- transitions --------------------------------------------------

    def request_create(self) -> bool:
        if isinstance(self._state, ListView):
            return self._go(CreateView())
        return False

    def request_view(self, record: Any) -> bool:
        if record is None or not isinstance(self._state, ListView):
            return False
        record_id = self._id_of(record)
        if record_id is None:
            return False
        return self._go(DetailView(record_id))

    def request_edit(self, record: Any) -> bool:
        if record is None:
            return False
        state = self._state
        if isinstance(state, ListView):
            return self._go(EditView(record, return_to=None))
        if isinstance(state, DetailView) and self._id_of(record) == state.record_id:
            return self._go(EditView(record, return_to=state.record_id))
        return False

    def request_back(self) -> bool:
        if isinstance(self._state, DetailView):
            return self._go(ListView())
        return False

    def cancel(self) -> bool:
        state = self._state
        if isinstance(state, CreateView):
            return self._go(ListView())
        if isinstance(state, EditView):
            if state.return_to is not None:
                return self._go(DetailView(state.return_to))
            return self._go(ListView())
        return False

    def mutation_succeeded(self, new_id: Any = None) -> bool:
        """Create → Detail(new_id); Edit → Detail of the edited record."""
        state = self._state
        if isinstance(state, CreateView):
            if new_id is None:
                return False
            return self._go(DetailView(new_id))
        if isinstance(state, EditView):
            return self._go(DetailView(self._id_of(state.record)))
        return False

    def record_vanished(self) -> bool:
        """The record in focus no longer exists."""
        if isinstance(self._state, (DetailView, EditView)):
            return self._go(ListView())
        return False
