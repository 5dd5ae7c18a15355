"""
Exception types for the catalogue package.

``ValidationError`` is raised when a raw record cannot become a ``Book``;
batch loading catches it per record so one bad row never empties the
catalogue. ``ParseSkip`` only exists inside the filter builder and is
never seen by callers. ``SourceError`` wraps failures of the hosted
backend (network, HTTP status, malformed JSON).
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalogue errors."""


class ValidationError(CatalogError):
    """A required book field is missing or has the wrong type."""

    def __init__(self, message: str, record_id: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.record_id = record_id
        self.field = field


class ParseSkip(CatalogError):
    """An optional numeric filter bound could not be parsed."""


class SourceError(CatalogError):
    """The book source could not deliver records."""
