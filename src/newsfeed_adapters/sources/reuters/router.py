"""FastAPI router for the Reuters source.

Mount in the main app::

    from newsfeed_adapters.sources.reuters.router import router as reuters_router
    app.include_router(reuters_router)

Endpoints:

- ``GET /reuters/options``            — documented categories, topics and examples.
- ``GET /reuters/health``             — primary listing API health check.
- ``GET /reuters/{category}``         — feed for a whole category.
- ``GET /reuters/{category}/{topic}`` — feed for a topic or author page.

Feed endpoints answer ``204 No Content`` when neither the primary nor the
fallback API produced a feed.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from newsfeed_adapters.api.dependencies import get_reuters_collector
from newsfeed_adapters.core.schemas.feed import FeedResponse
from newsfeed_adapters.sources.reuters.collector import ReutersCollector
from newsfeed_adapters.sources.reuters.config import (
    CATEGORY_OPTIONS,
    DEFAULT_CATEGORY,
    RADAR_SOURCES,
    ROUTE_CATEGORIES,
    ROUTE_EXAMPLE,
    ROUTE_NAME,
    ROUTE_PATH,
    TOPIC_OPTIONS,
)
from newsfeed_adapters.sources.reuters.models import ListingRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reuters", tags=["Reuters"])

Collector = Annotated[ReutersCollector, Depends(get_reuters_collector)]
Limit = Annotated[int | None, Query(ge=1, description="Number of listing items (default 20).")]
Fulltext = Annotated[bool, Query(description="Enrich items from their article pages.")]
Sophi = Annotated[bool, Query(description="Use Sophi ranking (world topics only).")]


async def _feed_response(
    collector: ReutersCollector,
    category: str,
    topic: str | None,
    limit: int | None,
    fulltext: bool,
    sophi: bool,
) -> FeedResponse | Response:
    try:
        request = ListingRequest.create(
            category, topic=topic, limit=limit, fulltext=fulltext, sophi=sophi
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    feed = await collector.collect(request)
    if feed is None:
        logger.info("reuters: no feed produced for %s", request.section_path)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return FeedResponse.model_validate(feed)


@router.get("/options")
async def reuters_options() -> dict[str, Any]:
    """Return the route metadata: path, example, categories and topics."""
    return {
        "name": ROUTE_NAME,
        "path": ROUTE_PATH,
        "example": ROUTE_EXAMPLE,
        "categories": ROUTE_CATEGORIES,
        "radar": RADAR_SOURCES,
        "parameters": {
            "category": {"options": CATEGORY_OPTIONS, "default": DEFAULT_CATEGORY},
            "topic": TOPIC_OPTIONS,
        },
    }


@router.get(
    "/health",
    summary="Reuters source health check",
    description="Verify that the Reuters content API answers.  Returns ``ok`` or ``down``.",
)
async def reuters_health(collector: Collector) -> dict[str, Any]:
    """Run a health check against the primary listing API."""
    result = await collector.health_check()
    logger.info("reuters router: health_check status=%s", result.get("status"))
    return result


@router.get("/{category}", response_model=FeedResponse)
async def reuters_category_feed(
    category: str,
    collector: Collector,
    limit: Limit = None,
    fulltext: Fulltext = False,
    sophi: Sophi = False,
) -> FeedResponse | Response:
    """Return the feed for a whole category (or the default author page)."""
    return await _feed_response(collector, category, None, limit, fulltext, sophi)


@router.get("/{category}/{topic}", response_model=FeedResponse)
async def reuters_topic_feed(
    category: str,
    topic: str,
    collector: Collector,
    limit: Limit = None,
    fulltext: Fulltext = False,
    sophi: Sophi = False,
) -> FeedResponse | Response:
    """Return the feed for a topic, tag or author page."""
    return await _feed_response(collector, category, topic, limit, fulltext, sophi)
