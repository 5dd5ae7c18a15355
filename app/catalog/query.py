"""
Query pipeline: filter the working set with a predicate, then slice out
one page.

Filtering is stable (matching books keep their relative order) and never
mutates its input, so running the same query twice gives the same page.
``BrowseState`` keeps the filter/page pair of one browsing session; a
new filter always sends the visitor back to page 1 because the previous
page may no longer exist under the new filter.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .filters import Predicate, build_predicate
from .pagination import total_pages_for
from .schemas import Book, FilterSpec, QueryResult, SortField


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def run_query(
    records: Sequence[Book],
    predicate: Predicate,
    page: int = 1,
    page_size: int = 12,
) -> QueryResult:
    """Apply ``predicate`` to ``records`` and return the requested page.

    Parameters
    ----------
    records : Sequence[Book]
        The working set, in display order.
    predicate : Predicate
        Usually the result of ``build_predicate()``.
    page : int
        1-indexed page number. A page past the end yields no items.
    page_size : int
        Number of books per page.

    Returns
    -------
    QueryResult
        The page items together with the match and page counts.
    """
    ps = max(1, int(page_size))
    p = max(1, int(page))

    matches = [b for b in records if predicate(b)]
    total = len(matches)

    start = (p - 1) * ps
    end = start + ps
    return QueryResult(
        items=matches[start:end],
        total_matches=total,
        total_pages=total_pages_for(total, ps),
        page=p,
        page_size=ps,
    )


def sort_books(records: Sequence[Book], sort: SortField = "relevance") -> List[Book]:
    """Return ``records`` ordered by ``sort``; 'relevance' keeps source order."""
    items = list(records)
    if sort == "newest":
        items.sort(key=lambda b: b.created_at or "", reverse=True)
    elif sort == "title":
        items.sort(key=lambda b: (_norm(b.title), _norm(b.author)))
    elif sort == "author":
        items.sort(key=lambda b: (_norm(b.author), _norm(b.title)))
    elif sort == "year":
        items.sort(key=lambda b: b.year, reverse=True)
    return items


class BrowseState:
    """Current filter and page of one browsing session."""

    def __init__(self, records: Sequence[Book], page_size: int = 12):
        self.records = list(records)
        self.page_size = max(1, page_size)
        self.filters = FilterSpec()
        self.page = 1
        self._predicate = build_predicate(self.filters)

    @property
    def total_pages(self) -> int:
        return self.view().total_pages

    def apply_filters(self, filters: FilterSpec) -> QueryResult:
        self.filters = filters
        self._predicate = build_predicate(filters)
        self.page = 1
        return self.view()

    def go_to(self, page: int) -> QueryResult:
        self.page = min(max(1, page), max(1, self.total_pages))
        return self.view()

    def next_page(self) -> QueryResult:
        return self.go_to(self.page + 1)

    def previous_page(self) -> QueryResult:
        return self.go_to(self.page - 1)

    def view(self) -> QueryResult:
        return run_query(self.records, self._predicate, self.page, self.page_size)
