"""
Create / edit form generated from a repository's column spec.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Label

from northwind_admin.db.repos.base_repo import Column
from northwind_admin.entities import EntityProfile, form_value


def _placeholder(column: Column) -> str:
    if column.kind is datetime:
        return "YYYY-MM-DD"
    if column.kind is bool:
        return "yes / no"
    if column.kind in (int, float):
        return "number"
    if column.max_length:
        return f"up to {column.max_length} characters"
    return ""


class RecordForm(VerticalScroll):
    """Inputs for every editable field, plus Save / Cancel."""

    DEFAULT_CSS = """
    RecordForm {
        height: 1fr;
        padding: 0 1;
    }

    RecordForm .input-label {
        margin-top: 1;
    }

    RecordForm .field-error {
        border: tall $error;
    }

    RecordForm #form-error {
        color: $error;
        margin-top: 1;
    }

    RecordForm #form-buttons {
        height: 3;
        margin-top: 1;
    }
    """

    class Saved(Message):
        """Save pressed; `data` maps field names to raw input text."""
        def __init__(self, data: Dict[str, str]) -> None:
            super().__init__()
            self.data = data

    class Cancelled(Message):
        """Cancel pressed"""

    def __init__(
        self,
        profile: EntityProfile,
        record: Optional[Any] = None,
        *,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(id=id)
        self._profile = profile
        self._record = record
        self._fields = profile.form_fields(creating=record is None)

    def compose(self) -> ComposeResult:
        if self._record is None:
            heading = f"New {self._profile.singular}"
        else:
            heading = f"Edit {self._profile.singular}: {self._record.display_name}"
        yield Label(heading, id="form-title", classes="heading")

        for name, column in self._fields:
            marker = " *" if column.required else ""
            yield Label(f"{column.title(name)}{marker}", classes="input-label")
            yield Input(
                value=form_value(self._record, name),
                placeholder=_placeholder(column),
                id=f"field-{name}",
            )

        yield Label("", id="form-error")
        with Horizontal(id="form-buttons"):
            yield Button("Cancel", variant="primary", id="cancel-button")
            yield Button("Save", variant="success", id="save-button")

    def on_mount(self) -> None:
        if self._fields:
            self.query_one(f"#field-{self._fields[0][0]}", Input).focus()

    def values(self) -> Dict[str, str]:
        return {name: self.query_one(f"#field-{name}", Input).value for name, _ in self._fields}

    def show_error(self, message: str, field: Optional[str] = None) -> None:
        """Show a validation message, highlighting the offending input if known."""
        for widget in self.query(Input):
            widget.remove_class("field-error")
        self.query_one("#form-error", Label).update(message)
        if field:
            matches = self.query(f"#field-{field}")
            if matches:
                matches.first().add_class("field-error")
                matches.first().focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-button":
            event.stop()
            self.post_message(self.Saved(self.values()))
        elif event.button.id == "cancel-button":
            event.stop()
            self.post_message(self.Cancelled())

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Saved(self.values()))
