"""
Pydantic schema definitions for the catalog module.

The ``Book`` model is the normalised shape every record takes once it
has been fetched from the hosted ``books`` table (see ``records.py``
for the normalisation rules). ``FilterSpec`` carries the constraints a
visitor picked in the filters sidebar, and ``QueryResult`` bundles a
page of matching books with the counts the front-end needs to draw its
pagination control. ``PaginatedBooks`` is the response body of the
``/books`` endpoint.
"""

from typing import Any, Dict, List, Optional, Set, Union

from pydantic import BaseModel, Field
from typing_extensions import Literal

# Category assigned to books that were stored without one.
UNCATEGORIZED = "Uncategorized"

# Marker placed in a page-number window where pages are skipped.
ELLIPSIS = "..."

YearBucket = Literal["all", "2025", "2024", "2023-2021", "old"]

SortField = Literal["relevance", "newest", "title", "author", "year"]


class Book(BaseModel):
    """A single book entry.

    ``id`` is opaque (a UUID in the hosted table) and unique across the
    working set. ``tags`` may contain duplicates when the source data
    does; matching and facet extraction tolerate that. ``pdf_url`` is
    ``None`` when the book has no readable PDF attached.
    """

    id: str
    title: str
    author: str
    description: str = ""
    year: int
    pages: int = Field(ge=0)
    category: str = UNCATEGORIZED
    tags: List[str] = Field(default_factory=list)
    pdf_url: Optional[str] = None
    cover_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class FilterSpec(BaseModel):
    """Constraints applied to the working set.

    Every field defaults to "no constraint". ``year`` and the
    ``year_from``/``year_to`` range are independent and both narrow the
    result when set. The range bounds are kept exactly as given (usually
    an int or text from a form field); values that do not parse, of any
    type, are ignored.
    """

    search: str = ""
    categories: Set[str] = Field(default_factory=set)
    authors: Set[str] = Field(default_factory=set)
    tags: Set[str] = Field(default_factory=set)
    year: YearBucket = "all"
    year_from: Optional[Any] = None
    year_to: Optional[Any] = None


class QueryResult(BaseModel):
    """One page of matching books."""

    items: List[Book]
    total_matches: int
    total_pages: int
    page: int
    page_size: int


class TagCount(BaseModel):
    tag: str
    count: int


class Facets(BaseModel):
    """Filter options derived from the full working set."""

    categories: List[str] = Field(default_factory=list)
    authors: List[str] = Field(default_factory=list)
    top_tags: List[TagCount] = Field(default_factory=list)


class PageControls(BaseModel):
    """Page-number buttons plus the state of the previous/next arrows."""

    pages: List[Union[int, str]]
    has_previous: bool
    has_next: bool


class PaginatedBooks(BaseModel):
    """A wrapper for paginated results returned from ``/books`` endpoint."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: List[Book]
    pages: List[Union[int, str]] = Field(default_factory=list)
    has_previous: bool = False
    has_next: bool = False


class CatalogStats(BaseModel):
    total_books: int
    categories: Dict[str, int] = Field(default_factory=dict)


class RefreshResult(BaseModel):
    loaded: int
    rejected: int
