"""Shared pytest fixtures for newsfeed-adapters tests.

Fixture summary
---------------
reuters_fixture   — Loader for recorded Reuters responses (JSON or HTML text).
renderer          — TemplateRenderer over the packaged templates.
article_cache     — Empty ArticleCache without expiry.
http_client       — httpx.AsyncClient closed after the test (mock with respx).

Every test runs without network access: upstream HTTP is mocked with
``respx``.
"""

from __future__ import annotations

import json
import os
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio

# ---------------------------------------------------------------------------
# Test environment bootstrap
# ---------------------------------------------------------------------------
# Pin the settings that tests rely on before any application module reads
# them, so a developer's local .env cannot change the defaults under test.

_TEST_ENV_DEFAULTS: dict[str, str] = {
    "LOG_LEVEL": "INFO",
    "DEFAULT_LIMIT": "20",
    "ENRICHMENT_CONCURRENCY": "4",
}

for _key, _default in _TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _default)

from newsfeed_adapters.config.settings import get_settings  # noqa: E402
from newsfeed_adapters.core.cache import ArticleCache  # noqa: E402
from newsfeed_adapters.core.feed import ArticleDetail  # noqa: E402
from newsfeed_adapters.core.rendering import TemplateRenderer  # noqa: E402

# Clear the lru_cache so Settings() re-reads from the patched environment.
get_settings.cache_clear()

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "api_responses"


@pytest.fixture
def reuters_fixture() -> Callable[[str], Any]:
    """Return a loader for files under ``fixtures/api_responses/reuters``.

    ``.json`` files are decoded; anything else is returned as text.
    """

    def _load(name: str) -> Any:
        text = (FIXTURES_DIR / "reuters" / name).read_text(encoding="utf-8")
        return json.loads(text) if name.endswith(".json") else text

    return _load


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def article_cache() -> ArticleCache[ArticleDetail]:
    return ArticleCache()


@pytest_asyncio.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient() as client:
        yield client
