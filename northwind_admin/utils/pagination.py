"""
Page-strip arithmetic: which page numbers to show and where the ellipses go.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True, slots=True)
class PaginationMeta:
    range: Tuple[int, ...]
    show_start_ellipsis: bool
    show_end_ellipsis: bool
    show_first_page: bool
    show_last_page: bool


def compute_range(current_page: int, total_pages: int, max_visible: int = 5) -> List[int]:
    """
    Return the page numbers to display around `current_page`.

    Args:
        current_page: Active page (1-based)
        total_pages: Number of pages in the result set
        max_visible: Size of the window of page buttons

    Returns:
        Consecutive page numbers, at most `max_visible` of them
    """
    if max_visible < 1:
        raise ValueError(f"max_visible must be >= 1, got {max_visible}")

    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    half = max_visible // 2
    # exactly max_visible pages; with an even width current sits right of centre
    start = current_page - half
    end = start + max_visible - 1

    if current_page <= half:
        start, end = 1, max_visible

    # evaluated last: wins over the start clamp
    if current_page + half >= total_pages:
        start, end = total_pages - max_visible + 1, total_pages

    return list(range(start, end + 1))


def compute_meta(current_page: int, total_pages: int, max_visible: int = 5) -> PaginationMeta:
    """Range plus the first/last/ellipsis flags a page strip needs."""
    pages = compute_range(current_page, total_pages, max_visible)
    if not pages:
        return PaginationMeta((), False, False, False, False)

    first, last = pages[0], pages[-1]
    return PaginationMeta(
        range=tuple(pages),
        show_start_ellipsis=first > 2,
        show_end_ellipsis=last < total_pages - 1,
        show_first_page=first > 1,
        show_last_page=last < total_pages,
    )
