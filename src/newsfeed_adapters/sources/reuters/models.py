"""Request and intermediate records for the Reuters adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from newsfeed_adapters.config.settings import get_settings
from newsfeed_adapters.sources.reuters.config import DEFAULT_TOPICS, SOPHI_CATEGORIES


def build_section_path(category: str, topic: str = "") -> str:
    """Return the ``/category/topic/`` lookup key, or ``/category/`` without a topic."""
    return f"/{category}/{topic}/" if topic else f"/{category}/"


@dataclass(frozen=True)
class ListingRequest:
    """One invocation of the adapter.

    Build instances with :meth:`create`, which applies the per-category topic
    default and the Sophi allow-list.

    Attributes:
        category: Reuters category slug (``world``, ``business``, ``authors`` ...).
        topic: Topic/author slug, possibly empty.
        limit: Number of listing items to request.
        use_sophi: Request the alternate (Sophi) ranking for section listings.
        fulltext: Enrich every item from its article detail page.
    """

    category: str
    topic: str
    limit: int
    use_sophi: bool = False
    fulltext: bool = False

    @classmethod
    def create(
        cls,
        category: str,
        topic: str | None = None,
        limit: int | None = None,
        fulltext: bool = False,
        sophi: bool = False,
    ) -> ListingRequest:
        """Build a request from raw caller parameters.

        Args:
            category: Category slug.
            topic: Optional topic slug.  ``None`` falls back to the category
                default (``"reuters"`` for ``authors``) or ``""``.
            limit: Positive listing size.  ``None`` uses the configured default.
            fulltext: Whether to enrich items from their detail pages.
            sophi: Whether the caller asked for Sophi ranking.  Only honoured
                for allow-listed categories with a non-empty topic.

        Raises:
            ValueError: If *category* is empty or *limit* is not positive.
        """
        if not category:
            raise ValueError("category must not be empty")
        if topic is None:
            topic = DEFAULT_TOPICS.get(category, "")
        if limit is None:
            limit = get_settings().default_limit
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        use_sophi = sophi and topic != "" and category in SOPHI_CATEGORIES
        return cls(
            category=category,
            topic=topic,
            limit=limit,
            use_sophi=use_sophi,
            fulltext=fulltext,
        )

    @property
    def section_path(self) -> str:
        return build_section_path(self.category, self.topic)


@dataclass
class ListingPage:
    """Raw listing returned by the primary content API.

    Attributes:
        title: Feed title derived from the listing metadata.
        description: Feed description derived from the listing metadata.
        root_url: Endpoint the listing came from; relative article URLs
            resolve against it.
        raw_items: Article records exactly as returned upstream.
    """

    title: str
    description: str | None
    root_url: str
    raw_items: list[dict[str, Any]] = field(default_factory=list)
