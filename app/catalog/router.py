"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /books            : list books with filters, sorting and pagination
- GET  /books/{book_id}  : get one book
- GET  /facets           : filter options (categories, authors, top tags)
- GET  /stats            : number of books, per category
- POST /refresh          : reload the working set from the book source

The store is looked up on ``app.state`` so the application decides
which book source backs it (see ``app.factory.create_app``).
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from .errors import SourceError
from .pagination import page_controls
from .schemas import (
    Book,
    CatalogStats,
    Facets,
    FilterSpec,
    PaginatedBooks,
    RefreshResult,
    SortField,
    YearBucket,
)
from .store import CatalogStore

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def _source_unavailable(exc: SourceError) -> HTTPException:
    return HTTPException(status_code=502, detail=f"Book source unavailable: {exc}")


@router.get("/books", response_model=PaginatedBooks)
def list_books(
    q: Optional[str] = Query(default=None, description="Text search (title/author/description)"),
    category: Optional[List[str]] = Query(default=None, description="Filter by category"),
    author: Optional[List[str]] = Query(default=None, description="Filter by author"),
    tag: Optional[List[str]] = Query(default=None, description="Filter by tag (any)"),
    year: YearBucket = Query(default="all", description="Publication year bucket"),
    year_from: Optional[str] = Query(default=None, description="Earliest year (inclusive)"),
    year_to: Optional[str] = Query(default=None, description="Latest year (inclusive)"),
    sort: SortField = Query(default="relevance", description="Sort order"),
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
    page_size: Optional[int] = Query(default=None, ge=1, le=200, description="Page size"),
    store: CatalogStore = Depends(get_store),
) -> PaginatedBooks:
    """
    Returns a paginated list of books.

    Filters combine with AND; within categories, authors and tags any
    listed value matches. The year bucket and the year range both apply
    when given. A page past the end returns an empty ``items`` list.
    """
    filters = FilterSpec(
        search=q or "",
        categories=set(category or []),
        authors=set(author or []),
        tags=set(tag or []),
        year=year,
        year_from=year_from,
        year_to=year_to,
    )
    try:
        result = store.search(filters, page=page, page_size=page_size, sort=sort)
    except SourceError as exc:
        raise _source_unavailable(exc)

    controls = page_controls(result.total_pages, result.page)
    return PaginatedBooks(
        page=result.page,
        page_size=result.page_size,
        total=result.total_matches,
        total_pages=result.total_pages,
        items=result.items,
        pages=controls.pages,
        has_previous=controls.has_previous,
        has_next=controls.has_next,
    )


@router.get("/books/{book_id}", response_model=Book)
def get_book(book_id: str, store: CatalogStore = Depends(get_store)) -> Book:
    try:
        book = store.get_book(book_id)
    except SourceError as exc:
        raise _source_unavailable(exc)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.get("/facets", response_model=Facets)
def get_facets(
    tag_limit: Optional[int] = Query(default=None, ge=0, le=100, description="Number of top tags"),
    store: CatalogStore = Depends(get_store),
) -> Facets:
    try:
        return store.facets(tag_limit)
    except SourceError as exc:
        raise _source_unavailable(exc)


@router.get("/stats", response_model=CatalogStats)
def get_stats(store: CatalogStore = Depends(get_store)) -> CatalogStats:
    try:
        return store.stats()
    except SourceError as exc:
        raise _source_unavailable(exc)


@router.post("/refresh", response_model=RefreshResult)
def refresh(store: CatalogStore = Depends(get_store)) -> RefreshResult:
    """Reload books from the source, keeping the old snapshot on failure."""
    try:
        batch = store.refresh()
    except SourceError as exc:
        raise _source_unavailable(exc)
    return RefreshResult(loaded=len(batch.books), rejected=len(batch.rejected))
