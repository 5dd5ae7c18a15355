"""
app/config.py

Central configuration for the catalogue service.
- Values can be overridden via ``CATALOG_*`` environment variables or a `.env` file.
- ``build_source()`` picks the book source the store reads from: the hosted
  Supabase table when a URL is configured (with the bundled sample data as
  fallback), otherwise the sample data alone.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .catalog.sources import BookSource, FallbackBookSource, JsonFileBookSource, SupabaseBookSource

DEFAULT_SAMPLE_FILE = Path(__file__).resolve().parent / "data" / "sample_books.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", extra="ignore")

    # ---------- Hosted backend ----------
    supabase_url: Optional[str] = None
    supabase_key: str = ""
    books_table: str = "books"
    request_timeout: float = 10.0

    # ---------- Local sample data ----------
    sample_data_file: Path = DEFAULT_SAMPLE_FILE
    use_sample_fallback: bool = True

    # ---------- Browsing defaults ----------
    page_size: int = 12
    tag_limit: int = 10

    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def build_source(settings: Settings) -> BookSource:
    sample = JsonFileBookSource(settings.sample_data_file)
    if not settings.supabase_url:
        return sample
    remote = SupabaseBookSource(
        settings.supabase_url,
        settings.supabase_key,
        table=settings.books_table,
        timeout=settings.request_timeout,
    )
    if settings.use_sample_fallback:
        return FallbackBookSource(remote, sample)
    return remote
