# northwind_admin/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.widgets import Static

from northwind_admin.models.actor import Actor
from northwind_admin.services.fetch_coordinator import QueryState


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    def __init__(self, status_bar: Static, actor: Optional[Actor] = None) -> None:
        self._bar = status_bar
        self._actor = actor

    # ------------------------------------------------------------------ #
    # public helpers
    # ------------------------------------------------------------------ #

    def update(
        self,
        title: str,
        state: QueryState,
        *,
        search: str = "",
        filters: Optional[Dict[str, Any]] = None,
        selected: Any = None,
    ) -> None:
        """Refresh the whole status line from a browser's query state."""
        self._bar.update(
            self.render_text(title, state, search=search, filters=filters, selected=selected)
        )

    def render_text(
        self,
        title: str,
        state: QueryState,
        *,
        search: str = "",
        filters: Optional[Dict[str, Any]] = None,
        selected: Any = None,
    ) -> str:
        window = state.window
        parts: list[str] = []
        if window is None:
            parts.append(f"{title}: -")
        else:
            parts.append(f"{title}: {window.total}")
            parts.append(f"Page: {window.page}/{max(window.total_pages, 1)}")

        if search:
            parts.append(f"Search: '{search}'")
        if filters:
            parts.append("Filters: " + ", ".join(f"{k}={v}" for k, v in sorted(filters.items())))
        if state.loading:
            parts.append("Loading...")
        if state.error is not None:
            parts.append(f"Error: {state.error.message}")
        if selected is not None:
            parts.append(f"Selected: {selected.display_name}")
        if self._actor is not None:
            parts.append(f"User: {self._actor.label}")

        return " | ".join(parts)
