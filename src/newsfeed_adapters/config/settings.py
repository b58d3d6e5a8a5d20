"""Application settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.
Every tunable is read through this module — never call ``os.getenv``
directly elsewhere in the codebase.

Usage::

    from newsfeed_adapters.config.settings import get_settings

    settings = get_settings()
    timeout = settings.request_timeout
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter configuration backed by environment variables and an optional .env file.

    Every field has a default so that the adapters run without any
    environment at all (e.g. from the CLI or in unit tests).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Application behaviour
    # ------------------------------------------------------------------

    app_name: str = "Newsfeed Adapters"
    """Human-readable application name shown in the OpenAPI docs."""

    debug: bool = False
    """Enable FastAPI debug mode and verbose error responses.  Never True in production."""

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    # ------------------------------------------------------------------
    # Upstream HTTP
    # ------------------------------------------------------------------

    request_timeout: float = Field(default=30.0, gt=0)
    """Per-request timeout in seconds for listing, fallback and detail fetches."""

    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    """User-Agent sent with every upstream request."""

    # ------------------------------------------------------------------
    # Listing and enrichment
    # ------------------------------------------------------------------

    default_limit: int = Field(default=20, ge=1)
    """Number of listing items requested when the caller does not pass ``limit``."""

    enrichment_concurrency: int = Field(default=8, ge=1)
    """Maximum number of article detail pages fetched in parallel per request."""

    article_cache_ttl_seconds: Optional[float] = 3600.0
    """Lifetime of a cached article detail.  ``None`` keeps entries forever."""


@lru_cache
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Uses ``functools.lru_cache`` so that Pydantic Settings reads the environment
    and .env file exactly once per process lifetime.  In tests, call
    ``get_settings.cache_clear()`` after patching environment variables.

    Returns:
        Settings: The validated settings object.
    """
    return Settings()
