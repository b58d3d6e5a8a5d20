"""Primary Reuters listing fetch.

Authors and tags are listed through the topic endpoint; every other category
goes through the section endpoint.  Both take a single ``query`` parameter
holding a JSON document, and both answer with ``result.articles``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from newsfeed_adapters.core.exceptions import FetchError, ListingFetchError
from newsfeed_adapters.scraper.config import DEFAULT_TIMEOUT
from newsfeed_adapters.scraper.http_fetcher import fetch_json
from newsfeed_adapters.sources.reuters.config import (
    BROWSER_HEADERS,
    REUTERS_SECTION_ENDPOINT,
    REUTERS_TOPIC_ENDPOINT,
    REUTERS_WEBSITE,
    SOPHI_QUERY,
    TOPIC_LISTING_CATEGORIES,
)
from newsfeed_adapters.sources.reuters.models import ListingPage, ListingRequest

logger = logging.getLogger(__name__)

_SOURCE = "reuters"


def uses_topic_listing(category: str) -> bool:
    """Return ``True`` if *category* must be listed through the topic endpoint."""
    return category in TOPIC_LISTING_CATEGORIES


def build_listing_query(request: ListingRequest) -> tuple[str, dict[str, Any]]:
    """Return the endpoint and the JSON ``query`` document for *request*.

    Args:
        request: The listing request.

    Returns:
        ``(endpoint, query)`` where ``query`` is the dict to be serialised
        into the ``query`` URL parameter.
    """
    if uses_topic_listing(request.category):
        return REUTERS_TOPIC_ENDPOINT, {
            "offset": 0,
            "size": request.limit,
            "topic_url": request.section_path,
            "website": REUTERS_WEBSITE,
        }

    query: dict[str, Any] = {
        "offset": 0,
        "size": request.limit,
        "section_id": request.section_path,
        "website": REUTERS_WEBSITE,
    }
    if request.use_sophi:
        query.update(SOPHI_QUERY)
    return REUTERS_SECTION_ENDPOINT, query


class ListingFetcher:
    """Fetch one page of a Reuters category/topic listing.

    Args:
        client: Shared ``httpx.AsyncClient``.
        timeout: Request timeout in seconds.
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, request: ListingRequest) -> ListingPage:
        """Fetch the listing for *request*.

        Returns:
            A :class:`ListingPage` with title/description taken from the
            topic or section metadata of the response.

        Raises:
            ListingFetchError: On any transport error, non-2xx status,
                malformed JSON or missing response field.
        """
        endpoint, query = build_listing_query(request)
        logger.debug("reuters: listing %s via %s", request.section_path, endpoint)

        try:
            data = await fetch_json(
                endpoint,
                client=self._client,
                params={"query": json.dumps(query, separators=(",", ":"))},
                headers=BROWSER_HEADERS,
                timeout=self._timeout,
            )
        except FetchError as exc:
            raise ListingFetchError(
                f"reuters: listing fetch failed for {request.section_path}: {exc}",
                source=_SOURCE,
            ) from exc

        try:
            result = data["result"]
            if uses_topic_listing(request.category):
                topic = result["topics"][0]
                title = f"{topic['name']} | Reuters"
                description = topic.get("entity_id")
            else:
                section = result["section"]
                title = section["title"]
                description = section.get("section_about")
            articles = result["articles"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ListingFetchError(
                f"reuters: unexpected listing response for {request.section_path}: {exc!r}",
                source=_SOURCE,
            ) from exc

        if not isinstance(articles, list):
            raise ListingFetchError(
                f"reuters: 'articles' is not a list for {request.section_path}",
                source=_SOURCE,
            )

        return ListingPage(
            title=title,
            description=description,
            root_url=endpoint,
            raw_items=articles,
        )
