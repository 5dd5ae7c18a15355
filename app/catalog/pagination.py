"""
Page-number window for the pagination control under the book grid.

At most five numbered buttons are shown. With more pages than that the
window slides with the current page, and a trailing ``...`` plus the
last page number is added as a jump-to-end shortcut while the window is
still well short of the end.
"""

from __future__ import annotations

from typing import List, Union

from .schemas import ELLIPSIS, PageControls

WINDOW_SIZE = 5

PageItem = Union[int, str]


def total_pages_for(total_matches: int, page_size: int) -> int:
    """Number of pages needed for ``total_matches`` items (0 when empty)."""
    page_size = max(1, page_size)
    return (max(0, total_matches) + page_size - 1) // page_size


def pagination_window(total_pages: int, current_page: int) -> List[PageItem]:
    """Return the page numbers to render, with ``ELLIPSIS`` where pages are skipped."""
    if total_pages <= 0:
        return []
    if total_pages <= WINDOW_SIZE:
        return list(range(1, total_pages + 1))

    half = WINDOW_SIZE // 2
    if current_page <= half + 1:
        first = 1
    elif current_page >= total_pages - half:
        first = total_pages - WINDOW_SIZE + 1
    else:
        first = current_page - half
    last = first + WINDOW_SIZE - 1

    window: List[PageItem] = list(range(first, last + 1))
    if last < total_pages - 2:
        window.extend([ELLIPSIS, total_pages])
    return window


def page_controls(total_pages: int, current_page: int) -> PageControls:
    return PageControls(
        pages=pagination_window(total_pages, current_page),
        has_previous=current_page > 1,
        has_next=current_page < total_pages,
    )
