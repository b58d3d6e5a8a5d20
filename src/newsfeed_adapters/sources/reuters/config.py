"""Reuters adapter configuration: endpoints, constants and route metadata.

Reuters is served from its Arc/Fusion content platform.  The adapter reads
two JSON listing endpoints (by topic and by section; each request uses one of
them) and falls back to the mobile "outbound feeds" wire API when the content
API fails.

Coverage: public category, topic and author pages on reuters.com.
Authentication: none.
Pagination: a single page of up to ``limit`` items (offset 0).
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# API endpoints
# ---------------------------------------------------------------------------

REUTERS_ROOT: str = "https://www.reuters.com"
"""Public site root; canonical section links are built against it."""

REUTERS_CONTENT_API: str = f"{REUTERS_ROOT}/pf/api/v3/content/fetch"
"""Fusion content-fetch API base URL."""

REUTERS_TOPIC_ENDPOINT: str = f"{REUTERS_CONTENT_API}/articles-by-topic-v1"
"""Listing by ``topic_url`` (authors and tags)."""

REUTERS_SECTION_ENDPOINT: str = f"{REUTERS_CONTENT_API}/articles-by-section-alias-or-id-v1"
"""Listing by ``section_id`` (every other category)."""

REUTERS_FALLBACK_BASE: str = f"{REUTERS_ROOT}/arc/outboundfeeds/v4/mobile/section"
"""Mobile wire-format API used when the content API fails."""

REUTERS_INVESTIGATES_PREFIX: str = f"{REUTERS_ROOT}/investigates/"
"""Detail pages under this prefix use the special-report layout."""

# ---------------------------------------------------------------------------
# API constants
# ---------------------------------------------------------------------------

REUTERS_WEBSITE: str = "reuters"
"""``website`` value sent in every content API query."""

REUTERS_FEED_IMAGE: str = (
    "https://www.reuters.com/pf/resources/images/reuters/logo-vertical-default-512x512.png?d=116"
)
"""Publisher logo attached to every feed."""

BROWSER_HEADERS: dict[str, str] = {
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://www.reuters.com/",
}
"""Headers sent with every upstream request; the APIs reject bare clients."""

TOPIC_LISTING_CATEGORIES: frozenset[str] = frozenset({"authors", "tags"})
"""Categories whose listings must be fetched by topic URL."""

DEFAULT_TOPICS: dict[str, str] = {"authors": "reuters"}
"""Topic used when the caller omits one, per category."""

SOPHI_CATEGORIES: frozenset[str] = frozenset({"world"})
"""Categories allowed to request the alternate (Sophi) ranking."""

SOPHI_QUERY: dict[str, str] = {
    "fetch_type": "sophi",
    "sophi_page": "*",
    "sophi_widget": "topic",
}
"""Extra query fields that switch the section listing to Sophi ranking."""

FALLBACK_STORY_TEMPLATE: str = "story_with_image"
"""Only wire-item templates with this name carry article content."""

DESCRIPTION_TEMPLATE: str = "reuters/description.html"
"""Template rendering Fusion article payloads into descriptions."""

# ---------------------------------------------------------------------------
# Route metadata
# ---------------------------------------------------------------------------

ROUTE_PATH: str = "/reuters/:category/:topic?"
ROUTE_EXAMPLE: str = "/reuters/world/us"
ROUTE_NAME: str = "Category/Topic/Author"
ROUTE_CATEGORIES: list[str] = ["traditional-media"]

RADAR_SOURCES: list[str] = ["reuters.com/:category/:topic?", "reuters.com/"]
"""Site URL patterns a browser extension can map onto this route."""

DEFAULT_CATEGORY: str = "world"

CATEGORY_OPTIONS: dict[str, str] = {
    "world": "World",
    "business": "Business",
    "legal": "Legal",
    "markets": "Markets",
    "breakingviews": "Breakingviews",
    "technology": "Technology",
    "graphics": "Graphics",
    "authors": "Authors",
}
"""Documented ``category`` values (value -> label).  Not strictly validated."""

TOPIC_OPTIONS: dict[str, dict[str, str]] = {
    "world": {
        "": "All",
        "africa": "Africa",
        "americas": "Americas",
        "asia-pacific": "Asia Pacific",
        "china": "China",
        "europe": "Europe",
        "india": "India",
        "middle-east": "Middle East",
        "uk": "United Kingdom",
        "us": "United States",
        "the-great-reboot": "The Great Reboot",
        "reuters-next": "Reuters Next",
    },
    "business": {
        "": "All",
        "aerospace-defense": "Aerospace & Defense",
        "autos-transportation": "Autos & Transportation",
        "energy": "Energy",
        "environment": "Environment",
        "finance": "Finance",
        "healthcare-pharmaceuticals": "Healthcare & Pharmaceuticals",
        "media-telecom": "Media & Telecom",
        "retail-consumer": "Retail & Consumer",
        "sustainable-business": "Sustainable Business",
        "charged": "Charged",
        "future-of-health": "Future of Health",
        "future-of-money": "Future of Money",
        "take-five": "Take Five",
        "reuters-impact": "Reuters Impact",
    },
    "legal": {
        "": "All",
        "government": "Government",
        "legalindustry": "Legal Industry",
        "litigation": "Litigation",
        "transactional": "Transactional",
    },
    "authors": {
        "reuters": "Default",
        "jonathan-landay": "Jonathan Landay",
    },
}
"""Documented ``topic`` values per category.  Any slug from a reuters.com
section or author URL also works."""
