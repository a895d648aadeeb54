"""
DataTable for one page of records
"""

from typing import Any, List, Optional, Sequence

from textual.message import Message
from textual.widgets import DataTable

from northwind_admin.entities import EntityProfile, value_of
from northwind_admin.utils.formatters import format_value


class RecordTable(DataTable):
    """
    DataTable showing the profile's columns, keyed by record id
    """

    class RecordSelected(Message):
        """A row was chosen (Enter / click)"""
        def __init__(self, record: Any) -> None:
            super().__init__()
            self.record = record

    def __init__(
        self,
        profile: EntityProfile,
        *,
        date_format: str = "%Y-%m-%d",
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._profile = profile
        self._date_format = date_format
        self._records: List[Any] = []

    def on_mount(self) -> None:
        self.add_columns(*(self._profile.column_title(f) for f in self._profile.table_columns))

    def show_records(self, records: Sequence[Any]) -> None:
        """Replace the rows with `records`, in order."""
        self.clear()
        self._records = list(records)
        for index, record in enumerate(self._records):
            self.add_row(
                *(format_value(value_of(record, f), self._date_format) for f in self._profile.table_columns),
                key=str(index),
            )

    @property
    def highlighted_record(self) -> Optional[Any]:
        if not self._records or self.cursor_row is None:
            return None
        if 0 <= self.cursor_row < len(self._records):
            return self._records[self.cursor_row]
        return None

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        index = int(event.row_key.value)
        if 0 <= index < len(self._records):
            self.post_message(self.RecordSelected(self._records[index]))
