"""
In-memory working set for the catalogue API.

``CatalogStore`` pulls every raw record from its ``BookSource``,
normalises them into ``Book`` instances and keeps the result as an
immutable snapshot. Queries, facets and statistics are all computed
locally against that snapshot; ``refresh()`` swaps in a new one.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .facets import DEFAULT_TAG_LIMIT, category_counts, extract_facets
from .filters import build_predicate
from .query import run_query, sort_books
from .records import NormalizedBatch, normalize_books
from .schemas import Book, CatalogStats, Facets, FilterSpec, QueryResult, SortField
from .sources import BookSource

logger = logging.getLogger(__name__)


class CatalogStore:
    """Working set of books loaded from a ``BookSource``."""

    def __init__(self, source: BookSource, page_size: int = 12, tag_limit: int = DEFAULT_TAG_LIMIT):
        self.source = source
        self.page_size = page_size
        self.tag_limit = tag_limit
        self._books: Optional[List[Book]] = None

    def refresh(self) -> NormalizedBatch:
        """Reload the working set from the source.

        ``SourceError`` propagates and leaves the previous snapshot in
        place.
        """
        rows = self.source.fetch_all_books()
        batch = normalize_books(rows)
        self._books = batch.books
        logger.info(
            "Loaded %d books (%d rejected records)", len(batch.books), len(batch.rejected)
        )
        return batch

    @property
    def books(self) -> List[Book]:
        if self._books is None:
            self.refresh()
        return self._books or []

    def get_book(self, book_id: str) -> Optional[Book]:
        return next((b for b in self.books if b.id == str(book_id)), None)

    def search(
        self,
        filters: FilterSpec,
        page: int = 1,
        page_size: Optional[int] = None,
        sort: SortField = "relevance",
    ) -> QueryResult:
        records = sort_books(self.books, sort)
        return run_query(records, build_predicate(filters), page, page_size or self.page_size)

    def facets(self, tag_limit: Optional[int] = None) -> Facets:
        return extract_facets(self.books, self.tag_limit if tag_limit is None else tag_limit)

    def stats(self) -> CatalogStats:
        books = self.books
        return CatalogStats(total_books=len(books), categories=category_counts(books))
