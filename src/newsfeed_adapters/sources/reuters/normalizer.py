"""Normalisation of Reuters content-API article records.

Both primary listing endpoints return articles in the same shape; the
fallback wire API is normalised inline in :mod:`.fallback`.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

from newsfeed_adapters.core.dates import parse_date
from newsfeed_adapters.core.exceptions import NormalizationError
from newsfeed_adapters.core.feed import ArticleItem


def join_author_names(authors: list[dict[str, Any]] | None) -> str:
    """Return the comma-joined ``name`` of every author record."""
    return ", ".join(a["name"] for a in authors or [] if isinstance(a, dict) and a.get("name"))


def normalize_article(raw: dict[str, Any], root_url: str) -> ArticleItem:
    """Map one content-API article record to an :class:`ArticleItem`.

    Args:
        raw: Article dict from ``result.articles``.
        root_url: URL the listing was fetched from; ``canonical_url`` is
            resolved against it.

    Returns:
        The normalized item.

    Raises:
        NormalizationError: If the record has no ``id`` or ``canonical_url``.
    """
    article_id = raw.get("id")
    canonical_url = raw.get("canonical_url")
    if not article_id or not canonical_url:
        raise NormalizationError("reuters: article without id or canonical_url", raw_item=raw)

    kicker = raw.get("kicker") or {}
    return ArticleItem(
        title=raw.get("title") or "",
        link=urljoin(root_url, canonical_url),
        id=str(article_id),
        published_at=parse_date(raw.get("published_time")),
        updated_at=parse_date(raw.get("updated_time")),
        author=join_author_names(raw.get("authors")),
        categories=list(kicker.get("names") or []),
        description=raw.get("description") or "",
    )
