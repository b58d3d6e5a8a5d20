"""Full-text enrichment of Reuters listing items from their detail pages.

Each item's detail page is fetched once per cache lifetime, parsed, and
handed to the first applicable extractor.  Items are enriched concurrently
under a semaphore; the batch always runs to completion and failed items are
dropped rather than failing the feed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from newsfeed_adapters.core.cache import ArticleCache
from newsfeed_adapters.core.exceptions import (
    ExtractionShapeMismatch,
    FetchError,
    ItemEnrichmentError,
)
from newsfeed_adapters.core.feed import ArticleDetail, ArticleItem
from newsfeed_adapters.core.rendering import TemplateRenderer
from newsfeed_adapters.scraper.config import DEFAULT_TIMEOUT
from newsfeed_adapters.scraper.http_fetcher import fetch_url
from newsfeed_adapters.sources.reuters.config import BROWSER_HEADERS
from newsfeed_adapters.sources.reuters.extractors import (
    DetailExtractor,
    DetailPage,
    default_extractors,
)

logger = logging.getLogger(__name__)

_SOURCE = "reuters"


@dataclass
class EnrichmentOutcome:
    """Tagged result of enriching one item.

    Attributes:
        index: Position of the item in the input sequence.
        item: The item (mutated in place on success).
        error: The failure, or ``None`` on success.
    """

    index: int
    item: ArticleItem
    error: ItemEnrichmentError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DetailEnricher:
    """Replace listing summaries with data from each article's detail page.

    Args:
        client: Shared ``httpx.AsyncClient``.
        cache: Cache of :class:`ArticleDetail` keyed by article URL.
        renderer: Template renderer used by the Fusion extractor.
        extractors: Extractors in priority order.  Defaults to
            :func:`~newsfeed_adapters.sources.reuters.extractors.default_extractors`.
        concurrency: Maximum number of detail pages fetched at once.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: ArticleCache[ArticleDetail],
        renderer: TemplateRenderer,
        extractors: Sequence[DetailExtractor] | None = None,
        concurrency: int = 8,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = client
        self._cache = cache
        self._extractors = list(extractors) if extractors is not None else default_extractors(renderer)
        self._concurrency = max(1, concurrency)
        self._timeout = timeout

    async def enrich(self, items: Sequence[ArticleItem]) -> list[ArticleItem]:
        """Enrich every item and return the successful ones in input order.

        Args:
            items: Deduplicated listing items.

        Returns:
            The enriched items, original order preserved, failed items removed.
        """
        semaphore = asyncio.Semaphore(self._concurrency)

        async def _run(index: int, item: ArticleItem) -> EnrichmentOutcome:
            async with semaphore:
                return await self._enrich_one(index, item)

        outcomes = await asyncio.gather(*(_run(i, item) for i, item in enumerate(items)))
        outcomes = sorted(outcomes, key=lambda outcome: outcome.index)

        failed = [outcome for outcome in outcomes if not outcome.ok]
        if failed:
            logger.warning(
                "reuters: dropped %d of %d items after enrichment failures",
                len(failed),
                len(outcomes),
            )
        return [outcome.item for outcome in outcomes if outcome.ok]

    async def extract_detail(self, url: str) -> ArticleDetail:
        """Fetch *url* and run the first applicable extractor on it.

        Raises:
            FetchError: If the page cannot be fetched.
            ExtractionShapeMismatch: If no extractor applies or the chosen
                one finds the page malformed.
        """
        result = await fetch_url(
            url,
            client=self._client,
            headers=BROWSER_HEADERS,
            timeout=self._timeout,
        )
        page = DetailPage.parse(result.final_url, result.text)
        for extractor in self._extractors:
            if extractor.can_handle(page):
                logger.debug("reuters: %s extractor for %s", extractor.name, page.url)
                return extractor.extract(page)
        raise ExtractionShapeMismatch(
            f"reuters: no extractor matches {page.url}",
            url=page.url,
            source=_SOURCE,
        )

    async def _enrich_one(self, index: int, item: ArticleItem) -> EnrichmentOutcome:
        try:
            detail = await self._cache.get_or_compute(
                item.link, lambda: self.extract_detail(item.link)
            )
        except ItemEnrichmentError as exc:
            logger.info("reuters: enrichment failed for %s: %s", item.link, exc)
            return EnrichmentOutcome(index=index, item=item, error=exc)
        except FetchError as exc:
            logger.info("reuters: detail fetch failed for %s: %s", item.link, exc)
            error = ItemEnrichmentError(str(exc), url=item.link, source=_SOURCE)
            error.__cause__ = exc
            return EnrichmentOutcome(index=index, item=item, error=error)
        except Exception as exc:  # noqa: BLE001
            logger.warning("reuters: unexpected enrichment error for %s", item.link, exc_info=exc)
            error = ItemEnrichmentError(
                f"unexpected {type(exc).__name__}: {exc}", url=item.link, source=_SOURCE
            )
            error.__cause__ = exc
            return EnrichmentOutcome(index=index, item=item, error=error)

        detail.apply_to(item)
        return EnrichmentOutcome(index=index, item=item)
