# northwind_admin/ui/screens/entity_screen.py
"""
Generic list / detail / form screen for one entity, driven by an EntityBrowser.

The screen only renders browser state and turns key presses and widget
messages into browser calls. Every browser call runs in a worker; dashboard
errors become notifications or inline form errors.
"""

from __future__ import annotations

from typing import Any, Awaitable, Dict, Optional

from rich.table import Table
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import ContentSwitcher, DataTable, Footer, Header, Label, Static

from northwind_admin.entities import EntityProfile
from northwind_admin.errors import DashboardError, NotFoundError, ValidationError
from northwind_admin.models.actor import Actor
from northwind_admin.services.entity_browser import EntityBrowser
from northwind_admin.services.fetch_coordinator import QueryState
from northwind_admin.services.report_service import ReportService
from northwind_admin.services.view_state import CreateView, DetailView, EditView, ListView, ViewState
from northwind_admin.ui.controllers.status_bar import StatusBarController
from northwind_admin.ui.screens.reports_screen import render_customer_summary
from northwind_admin.ui.widgets.confirmation_modal import ConfirmationModal
from northwind_admin.ui.widgets.pagination import Pagination
from northwind_admin.ui.widgets.record_detail import RecordDetail
from northwind_admin.ui.widgets.record_form import RecordForm
from northwind_admin.ui.widgets.record_table import RecordTable
from northwind_admin.ui.widgets.search_bar import SearchBar
from northwind_admin.utils.formatters import format_money
from simple_logger import Slogger


class EntityScreen(Screen):
    """Browse, view, create, edit and delete records of one entity."""

    DEFAULT_CSS = """
    EntityScreen #filter-bar {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    EntityScreen #modes {
        height: 1fr;
    }

    EntityScreen #records-table {
        height: 1fr;
    }

    EntityScreen #status-bar {
        height: 1;
        background: $boost;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("n", "new_record", "New"),
        Binding("v", "view_record", "View", show=False),
        Binding("e", "edit_record", "Edit"),
        Binding("d", "delete_record", "Delete"),
        Binding("escape", "back", "Back"),
        Binding("r", "refresh", "Refresh"),
        Binding("/", "focus_search", "Search"),
        Binding("[", "prev_page", "Prev page", show=False),
        Binding("]", "next_page", "Next page", show=False),
        Binding("f", "cycle_filter", "Filter"),
        Binding("x", "clear_filters", "Clear filters", show=False),
    ]

    def __init__(
        self,
        profile: EntityProfile,
        browser: EntityBrowser,
        config: Dict[str, Any],
        actor: Optional[Actor] = None,
        *,
        report_service: Optional[ReportService] = None,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(id=id or f"{profile.name}_screen")
        self.profile = profile
        self.browser = browser
        self.actor = actor
        self.report_service = report_service
        self.date_format = config.get("ui", {}).get("date_format", "%Y-%m-%d")
        self._filter_index = -1

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        searchable = ", ".join(self.profile.column_title(f).lower() for f in self.profile.search_fields)
        yield Header(show_clock=True)
        yield SearchBar(placeholder=f"Search {self.profile.title.lower()} by {searchable}...", id="search-bar")
        yield Label("", id="filter-bar")
        with ContentSwitcher(initial="list-pane", id="modes"):
            with Vertical(id="list-pane"):
                yield RecordTable(self.profile, date_format=self.date_format, id="records-table")
                yield Pagination(id="pagination")
            yield RecordDetail(self.profile, date_format=self.date_format, id="detail-pane")
            yield Vertical(id="form-pane")
        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.profile.title
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static), self.actor)
        self.browser.view.subscribe(self._on_view_changed)
        self.browser.fetcher.subscribe(self._on_query_changed)
        self._run(self.browser.load())

    def on_unmount(self) -> None:
        self.browser.view.unsubscribe(self._on_view_changed)
        self.browser.fetcher.unsubscribe(self._on_query_changed)

    def on_screen_resume(self, event) -> None:
        self._run(self.browser.load())

    # ------------------------------------------------------------------ #
    # Workers
    # ------------------------------------------------------------------ #

    def _run(self, work: Awaitable[Any], group: str = "browser") -> None:
        self.run_worker(self._guard(work), group=group)

    async def _guard(self, work: Awaitable[Any]) -> None:
        try:
            await work
        except ValidationError as e:
            form = self._form()
            if form is not None:
                form.show_error(e.message, e.field)
            else:
                self.notify(e.message, title="Invalid input", severity="warning")
        except NotFoundError as e:
            self.notify(e.message, title=f"{self.profile.singular} not found", severity="warning")
        except DashboardError as e:
            Slogger.error(f"{self.profile.title}: {e.message}")
            self.notify(e.message, title="Error", severity="error", timeout=10)

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def _on_query_changed(self, state: QueryState) -> None:
        self.call_later(self._render_list)

    def _on_view_changed(self, state: ViewState) -> None:
        self._run(self._render_view(state), group="view")

    async def _render_list(self) -> None:
        state = self.browser.state
        window = state.window

        self.query_one(RecordTable).show_records(window.data if window is not None else ())
        await self.query_one(Pagination).update_pages(
            window.page if window is not None else 1,
            window.total_pages if window is not None else 0,
            self.browser.pagination_meta(),
        )
        self._render_filters()
        self._update_status()

    def _render_filters(self) -> None:
        parts = []
        for key, value in sorted(self.browser.filters.items()):
            parts.append(f"{self.profile.column_title(key)}: {value}")
        for key in self.browser.sort:
            parts.append(f"Sorted by {self.profile.column_title(key.field)} {'desc' if key.descending else 'asc'}")
        self.query_one("#filter-bar", Label).update(" · ".join(parts))

    def _update_status(self) -> None:
        detail = self.query_one(RecordDetail)
        selected = detail.record if isinstance(self.browser.view_state, (DetailView, EditView)) else None
        self.status_controller.update(
            self.profile.title,
            self.browser.state,
            search=self.browser.search,
            filters=self.browser.filters,
            selected=selected,
        )

    async def _render_view(self, state: ViewState) -> None:
        switcher = self.query_one(ContentSwitcher)

        if isinstance(state, ListView):
            self.query_one(RecordDetail).update_record(None)
            switcher.current = "list-pane"
            self.query_one(RecordTable).focus()

        elif isinstance(state, DetailView):
            record = await self.browser.resolve(state.record_id)
            if record is None:
                self.notify(
                    f"{self.profile.singular} {state.record_id} no longer exists",
                    severity="warning",
                )
                self.browser.view.record_vanished()
                return
            self.query_one(RecordDetail).update_record(record, await self._detail_extra(record))
            switcher.current = "detail-pane"

        elif isinstance(state, (CreateView, EditView)):
            pane = self.query_one("#form-pane", Vertical)
            await pane.remove_children()
            record = state.record if isinstance(state, EditView) else None
            await pane.mount(RecordForm(self.profile, record, id="record-form"))
            switcher.current = "form-pane"

        self._update_status()

    async def _detail_extra(self, record: Any) -> Optional[Table]:
        """Order lines below an order, order history below a customer."""
        if self.profile.name == "customers" and self.report_service is not None:
            stats = await self.report_service.customer_summary(record.id)
            return render_customer_summary(stats, self.date_format)

        lines_of = getattr(self.browser.repository, "lines", None)
        if lines_of is None:
            return None
        lines = await lines_of(record.id)
        table = Table(title="Order lines", expand=False)
        for heading in ("Product", "Unit price", "Qty", "Discount", "Total"):
            table.add_column(heading, justify="right")
        for line in lines:
            table.add_row(
                str(line.product_id),
                format_money(line.unit_price),
                str(line.quantity),
                f"{line.discount:.0%}",
                format_money(line.line_total),
            )
        table.add_section()
        table.add_row("", "", "", "Total", format_money(sum(line.line_total for line in lines)))
        return table

    def _form(self) -> Optional[RecordForm]:
        if not isinstance(self.browser.view_state, (CreateView, EditView)):
            return None
        forms = self.query(RecordForm)
        return forms.first() if forms else None

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus_input()

    def action_new_record(self) -> None:
        if not self.browser.view.request_create():
            self.app.bell()

    def action_view_record(self) -> None:
        if not self.browser.view.request_view(self.query_one(RecordTable).highlighted_record):
            self.app.bell()

    def action_edit_record(self) -> None:
        if isinstance(self.browser.view_state, DetailView):
            record = self.query_one(RecordDetail).record
        else:
            record = self.query_one(RecordTable).highlighted_record
        if not self.browser.view.request_edit(record):
            self.app.bell()

    def action_back(self) -> None:
        view = self.browser.view
        if not (view.request_back() or view.cancel()):
            self.app.bell()

    def action_delete_record(self) -> None:
        state = self.browser.view_state
        if isinstance(state, DetailView):
            record = self.query_one(RecordDetail).record
        elif isinstance(state, ListView):
            record = self.query_one(RecordTable).highlighted_record
        else:
            record = None
        if record is None:
            self.app.bell()
            return

        record_id = self.browser.id_of(record)
        self.app.push_screen(
            ConfirmationModal(
                title=f"Delete {self.profile.singular}",
                message=f"Delete '{record.display_name}'? This cannot be undone.",
                on_yes=lambda: self._run(self._delete(record_id, record.display_name)),
            )
        )

    async def _delete(self, record_id: Any, label: str) -> None:
        await self.browser.delete(record_id)
        self.notify(f"Deleted '{label}'", title="Deleted")

    def action_refresh(self) -> None:
        self._run(self.browser.refetch())

    def action_prev_page(self) -> None:
        window = self.browser.state.window
        if window is not None and window.has_prev():
            self._run(self.browser.set_page(window.page - 1))

    def action_next_page(self) -> None:
        window = self.browser.state.window
        if window is not None and window.has_next():
            self._run(self.browser.set_page(window.page + 1))

    def action_cycle_filter(self) -> None:
        quick = self.profile.quick_filters
        if not quick:
            self.notify(f"No quick filters for {self.profile.title.lower()}")
            return
        self._filter_index += 1
        if self._filter_index >= len(quick):
            self._filter_index = -1
            self._run(self.browser.clear_filters())
            return
        chosen = quick[self._filter_index]
        self.notify(f"Filter: {chosen.label}")
        self._run(self.browser.set_filters({chosen.field: chosen.value}))

    def action_clear_filters(self) -> None:
        self._filter_index = -1
        self._run(self.browser.clear_filters())

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_record_table_record_selected(self, event: RecordTable.RecordSelected) -> None:
        self.browser.view.request_view(event.record)

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        field = self.profile.table_columns[event.column_index]
        if field not in self.profile.repo_class.columns and field != self.profile.primary_key:
            self.notify(f"Cannot sort by {self.profile.column_title(field)}")
            return
        current = self.browser.sort
        descending = bool(current) and current[0].field == field and not current[0].descending
        self._run(self.browser.set_sort(field, descending))

    def on_search_bar_submitted(self, event: SearchBar.Submitted) -> None:
        self._run(self.browser.set_search(event.query))

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        self._run(self.browser.set_page(event.page))

    def on_record_form_saved(self, event: RecordForm.Saved) -> None:
        self._run(self._save(event.data))

    async def _save(self, data: Dict[str, str]) -> None:
        record = await self.browser.save(data)
        self.notify(f"Saved '{record.display_name}'", title="Saved")

    def on_record_form_cancelled(self, event: RecordForm.Cancelled) -> None:
        self.browser.view.cancel()
