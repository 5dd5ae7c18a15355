"""
Facet extraction for the filters sidebar.

Facets are always computed over the full working set, not the filtered
page, so options stay visible after a filter narrows the results.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

from .schemas import Book, Facets, TagCount

DEFAULT_TAG_LIMIT = 10


def _distinct(values) -> List[str]:
    # dict keeps first-seen order
    return list(dict.fromkeys(values))


def extract_facets(records: Sequence[Book], tag_limit: int = DEFAULT_TAG_LIMIT) -> Facets:
    """Distinct categories and authors, plus the ``tag_limit`` most used tags.

    A tag listed twice on the same book counts once for that book. Tags
    with equal counts keep the order in which they were first seen.
    """
    tag_counts: Counter = Counter()
    for book in records:
        tag_counts.update(_distinct(book.tags))

    ranked = sorted(tag_counts.items(), key=lambda kv: kv[1], reverse=True)
    limit = max(0, tag_limit)
    return Facets(
        categories=_distinct(b.category for b in records),
        authors=_distinct(b.author for b in records),
        top_tags=[TagCount(tag=t, count=c) for t, c in ranked[:limit]],
    )


def category_counts(records: Sequence[Book]) -> Dict[str, int]:
    """Number of books per category, in first-seen order."""
    return dict(Counter(b.category for b in records))
