"""
Normalisation of raw rows from the hosted ``books`` table.

Rows arrive as plain JSON objects. Optional columns are frequently
missing or ``null`` (older rows have no category, tags were added
later, the PDF link is sometimes a ``"#"`` placeholder), so those fall
back to defaults instead of failing. The required columns (``id``,
``title``, ``author``, ``year`` and ``pages``) must be present with
the right type, otherwise the row is rejected with ``ValidationError``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional

from .errors import ValidationError
from .schemas import UNCATEGORIZED, Book

logger = logging.getLogger(__name__)

# Placeholder some admin forms store instead of leaving the link empty.
_PLACEHOLDER_URLS = {"#"}


class NormalizedBatch(NamedTuple):
    books: List[Book]
    rejected: List[ValidationError]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _optional_url(value: Any) -> Optional[str]:
    url = _optional_str(value)
    if url is None or url.strip() in _PLACEHOLDER_URLS:
        return None
    return url


def _tags(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [t for t in value if isinstance(t, str) and t]


def normalize_book(raw: Any) -> Book:
    """Convert one raw record into a ``Book``.

    Raises ``ValidationError`` when a required field is missing or
    malformed. Malformed optional fields silently take their default.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError(f"record must be an object, got {type(raw).__name__}")

    raw_id = raw.get("id")
    if isinstance(raw_id, str) and raw_id.strip():
        book_id = raw_id
    elif _is_int(raw_id):
        book_id = str(raw_id)
    else:
        raise ValidationError("missing or invalid 'id'", field="id")

    for name in ("title", "author"):
        if not isinstance(raw.get(name), str):
            raise ValidationError(f"missing or invalid {name!r}", record_id=book_id, field=name)

    for name in ("year", "pages"):
        if not _is_int(raw.get(name)):
            raise ValidationError(f"missing or invalid {name!r}", record_id=book_id, field=name)
    if raw["pages"] < 0:
        raise ValidationError("'pages' must not be negative", record_id=book_id, field="pages")

    description = raw.get("description")
    return Book(
        id=book_id,
        title=raw["title"],
        author=raw["author"],
        description=description if isinstance(description, str) else "",
        year=raw["year"],
        pages=raw["pages"],
        category=_optional_str(raw.get("category")) or UNCATEGORIZED,
        tags=_tags(raw.get("tags")),
        pdf_url=_optional_url(raw.get("pdf_url")),
        cover_url=_optional_url(raw.get("cover_url")),
        created_at=_optional_str(raw.get("created_at")),
        updated_at=_optional_str(raw.get("updated_at")),
    )


def normalize_books(raws: Iterable[Any]) -> NormalizedBatch:
    """Normalise a batch of raw records into a working set.

    Invalid records are excluded and reported in ``rejected``. When two
    records share an id, the first one wins.
    """
    books: List[Book] = []
    rejected: List[ValidationError] = []
    seen = set()
    for raw in raws:
        try:
            book = normalize_book(raw)
        except ValidationError as exc:
            logger.warning("Skipping book record %s: %s", exc.record_id or "<no id>", exc)
            rejected.append(exc)
            continue
        if book.id in seen:
            logger.warning("Skipping duplicate book id %s", book.id)
            continue
        seen.add(book.id)
        books.append(book)
    return NormalizedBatch(books, rejected)
