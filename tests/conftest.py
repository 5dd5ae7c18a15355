import pytest

from app.catalog.records import normalize_books


@pytest.fixture
def record_factory():
    """Build a valid raw book row, overriding any field."""

    def make(book_id, **fields):
        record = {
            "id": book_id,
            "title": f"Book {book_id}",
            "author": "Anonymous",
            "description": "",
            "year": 2024,
            "pages": 100,
        }
        record.update(fields)
        return record

    return make


@pytest.fixture
def scenario_books(record_factory):
    """Three books: DB/2024, Web/2025, DB/2020."""
    raws = [
        record_factory("1", category="DB", year=2024, tags=["sql"]),
        record_factory("2", category="Web", year=2025, tags=["js", "react"]),
        record_factory("3", category="DB", year=2020, tags=["sql", "admin"]),
    ]
    return normalize_books(raws).books
