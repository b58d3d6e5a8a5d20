"""Reuters source collector.

Turns a Reuters category/topic/author listing into a :class:`FeedResult`.

Two retrieval paths are supported:

- **Primary** — the Fusion content API (by topic for authors and tags, by
  section otherwise).  Items are normalized, deduplicated by id and, when
  ``fulltext`` is requested, enriched from their detail pages.
- **Fallback** — the mobile wire API.  Runs exactly once whenever anything
  on the primary path raises.

When both paths fail, :meth:`ReutersCollector.collect` returns ``None``: the
caller gets no feed rather than a partial one.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from newsfeed_adapters.config.settings import Settings, get_settings
from newsfeed_adapters.core.cache import ArticleCache
from newsfeed_adapters.core.deduplication import deduplicate_by_id
from newsfeed_adapters.core.exceptions import EmptyFallbackResult, FallbackFetchError
from newsfeed_adapters.core.feed import ArticleDetail, FeedResult
from newsfeed_adapters.core.rendering import TemplateRenderer
from newsfeed_adapters.sources.reuters.config import REUTERS_FEED_IMAGE, REUTERS_ROOT
from newsfeed_adapters.sources.reuters.enricher import DetailEnricher
from newsfeed_adapters.sources.reuters.fallback import FallbackFetcher
from newsfeed_adapters.sources.reuters.listing import ListingFetcher
from newsfeed_adapters.sources.reuters.models import ListingRequest
from newsfeed_adapters.sources.reuters.normalizer import normalize_article

logger = logging.getLogger(__name__)


class ReutersCollector:
    """Collects one Reuters listing as a feed.

    Class Attributes:
        source_name: ``"reuters"``

    Args:
        http_client: Optional injected ``httpx.AsyncClient`` (shared across
            calls, never closed by the collector).  When omitted a client is
            created and closed per :meth:`collect` call.
        cache: Shared cache of article details keyed by URL.  A private cache
            is created when omitted.
        renderer: Template renderer for Fusion article descriptions.
        settings: Settings override (defaults to :func:`get_settings`).
    """

    source_name: str = "reuters"

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        cache: ArticleCache[ArticleDetail] | None = None,
        renderer: TemplateRenderer | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._http_client = http_client
        self._cache: ArticleCache[ArticleDetail] = (
            cache
            if cache is not None
            else ArticleCache(ttl_seconds=self._settings.article_cache_ttl_seconds)
        )
        self._renderer = renderer or TemplateRenderer()

    @property
    def cache(self) -> ArticleCache[ArticleDetail]:
        return self._cache

    async def collect(self, request: ListingRequest) -> FeedResult | None:
        """Build the feed for *request*.

        Args:
            request: Category/topic, limit and option flags.

        Returns:
            The feed, or ``None`` when neither the primary nor the fallback
            API produced one.
        """
        async with self._client() as client:
            try:
                feed = await self._collect_primary(client, request)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "reuters: primary listing failed for %s, using fallback: %s",
                    request.section_path,
                    exc,
                    exc_info=exc,
                )
            else:
                logger.info(
                    "reuters: collected %d items for %s",
                    len(feed.items),
                    request.section_path,
                )
                return feed

            try:
                feed = await FallbackFetcher(client, timeout=self._settings.request_timeout).fetch(request)
            except EmptyFallbackResult as exc:
                logger.warning("reuters: fallback listing empty for %s: %s", request.section_path, exc)
                return None
            except FallbackFetchError as exc:
                logger.error("reuters: fallback listing failed for %s: %s", request.section_path, exc)
                return None

        logger.info(
            "reuters: collected %d fallback items for %s",
            len(feed.items),
            request.section_path,
        )
        return feed

    async def health_check(self) -> dict[str, Any]:
        """Verify that the primary listing API answers for the default section.

        Returns:
            Dict with ``status`` (``"ok"`` | ``"down"``), ``source`` and
            optionally ``detail``.
        """
        base: dict[str, Any] = {"source": self.source_name}
        async with self._client() as client:
            try:
                await ListingFetcher(client, timeout=10.0).fetch(
                    ListingRequest.create("world", limit=1)
                )
            except Exception as exc:  # noqa: BLE001
                return {**base, "status": "down", "detail": str(exc)}
        return {**base, "status": "ok"}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a fresh one closed on exit."""
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(
            timeout=self._settings.request_timeout,
            headers={"User-Agent": self._settings.user_agent},
        ) as client:
            yield client

    async def _collect_primary(
        self,
        client: httpx.AsyncClient,
        request: ListingRequest,
    ) -> FeedResult:
        page = await ListingFetcher(client, timeout=self._settings.request_timeout).fetch(request)

        items = [normalize_article(raw, page.root_url) for raw in page.raw_items]
        items = deduplicate_by_id(items)

        if request.fulltext:
            enricher = DetailEnricher(
                client,
                cache=self._cache,
                renderer=self._renderer,
                concurrency=self._settings.enrichment_concurrency,
                timeout=self._settings.request_timeout,
            )
            items = await enricher.enrich(items)

        return FeedResult(
            title=page.title,
            description=page.description,
            image=REUTERS_FEED_IMAGE,
            link=f"{REUTERS_ROOT}{request.section_path}",
            items=items,
        )
