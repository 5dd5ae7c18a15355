"""
Filter predicate builder.

``build_predicate()`` turns a ``FilterSpec`` into a single callable
``matches(book) -> bool``. Only the dimensions the visitor actually set
take part in the test, so an empty spec matches every book. All
sub-predicates are pure, so evaluation order never changes the result.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import ParseSkip
from .schemas import Book, FilterSpec

logger = logging.getLogger(__name__)

Predicate = Callable[[Book], bool]

# Inclusive (low, high) year bounds for each bucket; None means open.
YEAR_BUCKETS: Dict[str, Tuple[Optional[int], Optional[int]]] = {
    "2025": (2025, 2025),
    "2024": (2024, 2024),
    "2023-2021": (2021, 2023),
    "old": (None, 2020),
}

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_year_bound(value: Any) -> int:
    """Parse a year bound typed into a form field.

    Accepts ints and strings starting with an integer (``"2021"``,
    ``" 2021 "``, ``"2021abc"``). Raises ``ParseSkip`` otherwise.
    """
    if isinstance(value, bool):
        raise ParseSkip(f"not a year: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        if m:
            return int(m.group(1))
    raise ParseSkip(f"not a year: {value!r}")


def _optional_bound(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return parse_year_bound(value)
    except ParseSkip as exc:
        logger.debug("Ignoring year bound: %s", exc)
        return None


def _search(query: str) -> Predicate:
    def matches(book: Book) -> bool:
        return (
            query in book.title.lower()
            or query in book.author.lower()
            or query in book.description.lower()
        )
    return matches


def _year_between(low: Optional[int], high: Optional[int]) -> Predicate:
    def matches(book: Book) -> bool:
        if low is not None and book.year < low:
            return False
        if high is not None and book.year > high:
            return False
        return True
    return matches


def build_predicate(spec: FilterSpec) -> Predicate:
    """Build the conjunction of the active filters in ``spec``."""
    active: List[Predicate] = []

    query = spec.search.lower()
    if query:
        active.append(_search(query))

    if spec.categories:
        categories = frozenset(spec.categories)
        active.append(lambda book: book.category in categories)

    if spec.authors:
        authors = frozenset(spec.authors)
        active.append(lambda book: book.author in authors)

    if spec.tags:
        tags = frozenset(spec.tags)
        active.append(lambda book: not tags.isdisjoint(book.tags))

    if spec.year != "all":
        active.append(_year_between(*YEAR_BUCKETS[spec.year]))

    year_from = _optional_bound(spec.year_from)
    year_to = _optional_bound(spec.year_to)
    if year_from is not None or year_to is not None:
        active.append(_year_between(year_from, year_to))

    if not active:
        return lambda book: True

    def matches(book: Book) -> bool:
        return all(p(book) for p in active)

    return matches
