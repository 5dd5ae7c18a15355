"""
Book sources: where the catalogue's raw records come from.

The catalogue never talks to a global database client. Instead it is
handed a ``BookSource``, anything with a ``fetch_all_books()`` method
returning the complete list of raw records. Four sources are provided:

* ``SupabaseBookSource`` reads the hosted ``books`` table through the
  Supabase REST (PostgREST) endpoint, newest first.
* ``JsonFileBookSource`` reads a JSON array from disk, used for the
  bundled sample data.
* ``StaticBookSource`` wraps an in-memory list (tests, demos).
* ``FallbackBookSource`` tries a primary source and falls back to a
  second one when the primary fails or returns nothing, so the site
  still shows demo books while the hosted table is unavailable.

Only the Python standard library is used for HTTP requests.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from typing_extensions import Protocol

from .errors import SourceError

logger = logging.getLogger(__name__)

RawRecord = Dict[str, Any]


class BookSource(Protocol):
    def fetch_all_books(self) -> List[RawRecord]:
        ...


def _http_get_json(url: str, headers: Dict[str, str], timeout: float) -> Any:
    """Perform an HTTP GET and return the parsed JSON body.

    Network errors, non-200 responses and undecodable bodies are logged
    and raised as ``SourceError``.
    """
    request = urllib.request.Request(url, headers={"Accept": "application/json", **headers})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            if response.status != 200:
                logger.warning("Request to %s returned status %s", url, response.status)
                raise SourceError(f"unexpected status {response.status} from {url}")
            data = response.read().decode("utf-8", errors="ignore")
    except urllib.error.HTTPError as exc:
        logger.error("Request to %s failed with status %s", url, exc.code)
        raise SourceError(f"status {exc.code} from {url}") from exc
    except (urllib.error.URLError, OSError) as exc:
        logger.error("Error fetching %s: %s", url, exc)
        raise SourceError(f"could not reach {url}: {exc}") from exc
    try:
        return json.loads(data)
    except ValueError as exc:
        logger.error("Invalid JSON from %s: %s", url, exc)
        raise SourceError(f"invalid JSON from {url}") from exc


class SupabaseBookSource:
    """Fetch every row of the hosted books table via the REST API."""

    def __init__(self, url: str, api_key: str, table: str = "books", timeout: float = 10.0):
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout

    def endpoint(self) -> str:
        params = urllib.parse.urlencode({"select": "*", "order": "created_at.desc"})
        return f"{self.url}/rest/v1/{urllib.parse.quote(self.table)}?{params}"

    def fetch_all_books(self) -> List[RawRecord]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        data = _http_get_json(self.endpoint(), headers, self.timeout)
        if not isinstance(data, list):
            raise SourceError(f"expected a list of rows from table {self.table!r}")
        logger.info("Fetched %d rows from table %s", len(data), self.table)
        return data


class JsonFileBookSource:
    """Read raw records from a JSON file holding an array of objects."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def fetch_all_books(self) -> List[RawRecord]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise SourceError(f"cannot read {self.path}: {exc}") from exc
        except ValueError as exc:
            raise SourceError(f"invalid JSON in {self.path}") from exc
        if not isinstance(data, list):
            raise SourceError(f"expected a JSON array in {self.path}")
        return data


class StaticBookSource:
    def __init__(self, records: Sequence[RawRecord]):
        self.records = list(records)

    def fetch_all_books(self) -> List[RawRecord]:
        return list(self.records)


class FallbackBookSource:
    """Use ``fallback`` when ``primary`` fails or has no rows."""

    def __init__(self, primary: BookSource, fallback: BookSource):
        self.primary = primary
        self.fallback = fallback

    def fetch_all_books(self) -> List[RawRecord]:
        try:
            rows = self.primary.fetch_all_books()
        except SourceError as exc:
            logger.warning("Primary book source failed (%s); using fallback data", exc)
            return self.fallback.fetch_all_books()
        if not rows:
            logger.info("Primary book source returned no rows; using fallback data")
            return self.fallback.fetch_all_books()
        return rows
