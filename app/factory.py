"""
app/factory.py

Builds the FastAPI application around a ``CatalogStore``.
- Pass a store to serve any book source (tests use an in-memory one).
- Without one, the store is built from settings (see ``app.config.build_source``).
- No logging or other process-wide setup happens here; ``app.main`` does that.
"""

from typing import Optional

from fastapi import FastAPI

from .catalog import catalog_router
from .catalog.store import CatalogStore
from .config import Settings, build_source, get_settings


def create_app(store: Optional[CatalogStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    if store is None:
        settings = settings or get_settings()
        store = CatalogStore(
            build_source(settings),
            page_size=settings.page_size,
            tag_limit=settings.tag_limit,
        )

    app = FastAPI(
        title="Technical Literature Catalog",
        description=(
            "Catalogue of technical books: search, filters by category, "
            "author, tag and year, pagination and filter options, computed "
            "over books stored in a hosted database."
        ),
        version="1.0.0",
    )
    app.state.store = store
    app.include_router(catalog_router)

    # Base route for a quick liveness check
    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "Catalog API live"}

    return app
