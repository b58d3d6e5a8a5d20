"""Fallback listing through the Reuters mobile wire API.

Used only when the primary content API path fails.  The wire API returns
``wireitems``, each holding one or more render templates; the
``story_with_image`` template carries the article itself.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

import httpx

from newsfeed_adapters.core.dates import parse_date
from newsfeed_adapters.core.exceptions import (
    EmptyFallbackResult,
    FallbackFetchError,
    FetchError,
)
from newsfeed_adapters.core.feed import ArticleItem, FeedResult
from newsfeed_adapters.scraper.config import DEFAULT_TIMEOUT
from newsfeed_adapters.scraper.http_fetcher import fetch_json
from newsfeed_adapters.sources.reuters.config import (
    BROWSER_HEADERS,
    FALLBACK_STORY_TEMPLATE,
    REUTERS_FALLBACK_BASE,
    REUTERS_FEED_IMAGE,
    REUTERS_ROOT,
)
from newsfeed_adapters.sources.reuters.models import ListingRequest
from newsfeed_adapters.sources.reuters.normalizer import join_author_names

logger = logging.getLogger(__name__)

_SOURCE = "reuters"


def build_fallback_url(category: str, topic: str = "") -> str:
    """Return the wire API URL for a category/topic pair."""
    if topic:
        return f"{REUTERS_FALLBACK_BASE}/{category}/{topic}/?outputType=json"
    return f"{REUTERS_FALLBACK_BASE}/{category}/?outputType=json"


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _story_template(wire_item: dict[str, Any]) -> dict[str, Any] | None:
    templates = wire_item.get("templates")
    if not isinstance(templates, list):
        return None
    for template in templates:
        if isinstance(template, dict) and template.get("template") == FALLBACK_STORY_TEMPLATE:
            return template
    return None


def _channel_tags(analytics: dict[str, Any]) -> list[str]:
    tags = [analytics.get("topic_channel"), analytics.get("topic_sub_channel")]
    return [tag for tag in tags if isinstance(tag, str) and tag]


def normalize_wire_item(
    wire_item: dict[str, Any],
    categories: list[str],
) -> ArticleItem | None:
    """Map one wire item to an :class:`ArticleItem`.

    Args:
        wire_item: Entry of the ``wireitems`` array.
        categories: Listing-level channel tags applied to every item.

    Returns:
        The normalized item, or ``None`` when the item has no
        ``story_with_image`` template, no story object, no article URL or
        no ``usn``.
    """
    template = _story_template(wire_item)
    if template is None:
        return None
    story = template.get("story")
    if not isinstance(story, dict) or not story:
        return None

    path = _as_text(_as_dict(template.get("template_action")).get("url"))
    usn = story.get("usn")
    if not path or usn in (None, ""):
        return None

    updated = parse_date(story.get("updated_at"))
    authors = story.get("authors")
    return ArticleItem(
        title=_as_text(story.get("hed")),
        link=urljoin(REUTERS_ROOT, path),
        id=str(usn),
        published_at=updated,
        updated_at=updated,
        author=join_author_names(authors) if isinstance(authors, list) else None,
        categories=list(categories),
        description=_as_text(story.get("lede")),
    )


class FallbackFetcher:
    """Build a complete feed from the Reuters mobile wire API.

    Args:
        client: Shared ``httpx.AsyncClient``.
        timeout: Request timeout in seconds.
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, request: ListingRequest) -> FeedResult:
        """Fetch and normalize the wire listing for *request*.

        Wire items without a ``story_with_image`` template are dropped; the
        surviving items are truncated to ``request.limit``.

        Raises:
            FallbackFetchError: On transport errors or a malformed body.
            EmptyFallbackResult: When the response has no wire items at all.
        """
        url = build_fallback_url(request.category, request.topic)
        logger.info("reuters: fetching fallback listing %s", url)

        try:
            data = await fetch_json(
                url,
                client=self._client,
                headers=BROWSER_HEADERS,
                timeout=self._timeout,
            )
        except FetchError as exc:
            raise FallbackFetchError(
                f"reuters: fallback fetch failed for {url}: {exc}",
                source=_SOURCE,
            ) from exc

        if not isinstance(data, dict):
            raise FallbackFetchError(f"reuters: unexpected fallback body from {url}", source=_SOURCE)

        wire_items = data.get("wireitems")
        if not isinstance(wire_items, list) or not wire_items:
            raise EmptyFallbackResult(f"reuters: no wire items from {url}", source=_SOURCE)

        try:
            return self._build_feed(data, wire_items, request)
        except (AttributeError, TypeError, ValueError) as exc:
            raise FallbackFetchError(
                f"reuters: malformed fallback body from {url}: {exc}",
                source=_SOURCE,
            ) from exc

    def _build_feed(
        self,
        data: dict[str, Any],
        wire_items: list[Any],
        request: ListingRequest,
    ) -> FeedResult:
        analytics = _as_dict(data.get("analytics"))
        categories = _channel_tags(analytics)

        items: list[ArticleItem] = []
        for wire_item in wire_items:
            if not isinstance(wire_item, dict):
                continue
            item = normalize_wire_item(wire_item, categories)
            if item is not None:
                items.append(item)

        dropped = len(wire_items) - len(items)
        if dropped:
            logger.debug("reuters: dropped %d unusable wire items", dropped)

        canonical = _as_text(_as_dict(data.get("canonical_action")).get("url"))
        wire_name = _as_text(data.get("wire_name")) or request.category
        return FeedResult(
            title=_as_text(analytics.get("title")) or f"{wire_name} | Reuters",
            description=_as_text(analytics.get("content_title")) or None,
            image=REUTERS_FEED_IMAGE,
            link=canonical or f"{REUTERS_ROOT}{request.section_path}",
            items=items[: request.limit],
            categories=categories,
        )
