"""
Catalog package for the book catalog API.

Books are fetched from a ``BookSource`` (the hosted Supabase table or
local sample data). Searching, filtering, paging and the sidebar's
filter options are all computed here in memory. The core
operations are ``build_predicate``, ``run_query``, ``extract_facets``
and ``pagination_window``; ``router`` exposes them over HTTP.
"""

from .facets import extract_facets  # noqa: F401
from .filters import build_predicate  # noqa: F401
from .pagination import pagination_window  # noqa: F401
from .query import run_query  # noqa: F401
from .router import router as catalog_router  # noqa: F401
