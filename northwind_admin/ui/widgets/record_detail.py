"""
Detail pane for a single record (profile-aware).
"""

from __future__ import annotations

from typing import Any, Optional

from rich.console import Group
from rich.table import Table
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Label, Static

from northwind_admin.entities import EntityProfile, value_of
from northwind_admin.utils.formatters import format_value


class RecordDetail(VerticalScroll):
    """Scrollable key/value view of a record."""

    DEFAULT_CSS = """
    RecordDetail {
        height: 1fr;
        padding: 0 1;
    }

    RecordDetail #detail-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(
        self,
        profile: EntityProfile,
        *,
        date_format: str = "%Y-%m-%d",
        id: Optional[str] = None,
    ) -> None:
        super().__init__(id=id)
        self._profile = profile
        self._date_format = date_format
        self.record: Any = None

    def compose(self) -> ComposeResult:
        yield Label(f"No {self._profile.singular} Selected", id="detail-title")
        yield Static("", id="detail-body")

    def update_record(self, record: Optional[Any], extra: Any = None) -> None:
        """Populate from a record (or clear if None). `extra` is rendered below the fields."""
        self.record = record
        title = self.query_one("#detail-title", Label)
        body = self.query_one("#detail-body", Static)

        if record is None:
            title.update(f"No {self._profile.singular} Selected")
            body.update("")
            return

        title.update(f"{self._profile.singular}: {record.display_name}")

        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold cyan", justify="right")
        grid.add_column()
        for field in self._profile.detail_fields():
            grid.add_row(
                self._profile.column_title(field),
                Text(format_value(value_of(record, field), self._date_format)),
            )
        if "status" in self._profile.table_columns:
            grid.add_row("Status", Text(format_value(value_of(record, "status"))))

        body.update(Group(grid, extra) if extra is not None else grid)
