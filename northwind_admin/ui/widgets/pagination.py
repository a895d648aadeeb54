"""
Pagination widget: prev / next buttons around a strip of page numbers
"""

from __future__ import annotations

from typing import List, Optional, Union

from textual.containers import Container, Horizontal
from textual.message import Message
from textual.widgets import Button, Label

from northwind_admin.utils.pagination import PaginationMeta

ELLIPSIS = "…"

PageToken = Union[int, str]


def page_tokens(meta: PaginationMeta, total_pages: int) -> List[PageToken]:
    """
    Flatten a PaginationMeta into what the strip shows, left to right.

    e.g. page 5 of 10 -> [1, "…", 3, 4, 5, 6, 7, "…", 10]
    """
    tokens: List[PageToken] = []
    if meta.show_first_page:
        tokens.append(1)
    if meta.show_start_ellipsis:
        tokens.append(ELLIPSIS)
    tokens.extend(meta.range)
    if meta.show_end_ellipsis:
        tokens.append(ELLIPSIS)
    if meta.show_last_page:
        tokens.append(total_pages)
    return tokens


class Pagination(Container):
    """
    Page strip with prev / next buttons
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        content-align: center middle;
    }

    Pagination Button {
        min-width: 5;
        margin: 0 1;
    }

    Pagination #page-numbers {
        width: auto;
        height: 3;
    }

    Pagination .page-current {
        text-style: bold reverse;
    }

    Pagination .page-ellipsis {
        padding: 1 1;
    }

    Pagination #page-indicator {
        min-width: 15;
        padding: 1 1;
    }
    """

    class PageChanged(Message):
        """Page changed message"""
        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.current_page = 1
        self.total_pages = 0

    def compose(self):
        """Create child widgets"""
        yield Button("< Prev", id="prev-page")
        yield Horizontal(id="page-numbers")
        yield Button("Next >", id="next-page")
        yield Label("", id="page-indicator")

    async def update_pages(self, current: int, total: int, meta: PaginationMeta) -> None:
        """
        Rebuild the strip for a new page position

        Args:
            current: Current page number
            total: Total pages
            meta: Range and ellipsis flags for `current`
        """
        self.current_page = current
        self.total_pages = total

        strip = self.query_one("#page-numbers", Horizontal)
        await strip.remove_children()
        widgets = []
        for token in page_tokens(meta, total):
            if token == ELLIPSIS:
                widgets.append(Label(ELLIPSIS, classes="page-ellipsis"))
            else:
                classes = "page-number page-current" if token == current else "page-number"
                widgets.append(Button(str(token), name=f"page-{token}", classes=classes))
        if widgets:
            await strip.mount_all(widgets)

        self.query_one("#page-indicator", Label).update(
            f"Page {current} of {total}" if total else "No results"
        )
        self.query_one("#prev-page", Button).disabled = current <= 1
        self.query_one("#next-page", Button).disabled = current >= total

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        event.stop()
        button = event.button
        new_page = self.current_page

        if button.id == "prev-page" and self.current_page > 1:
            new_page = self.current_page - 1
        elif button.id == "next-page" and self.current_page < self.total_pages:
            new_page = self.current_page + 1
        elif button.name and button.name.startswith("page-"):
            new_page = int(button.name.split("-", 1)[1])

        if new_page != self.current_page:
            self.post_message(self.PageChanged(new_page))
