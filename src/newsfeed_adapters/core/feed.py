"""Source-independent feed records.

Every adapter produces :class:`ArticleItem` records and wraps them in a
:class:`FeedResult`.  Records are plain dataclasses: adapters build and
mutate them in place, and the API layer serialises them through
:meth:`FeedResult.to_dict` or the pydantic schemas in
:mod:`newsfeed_adapters.core.schemas.feed`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class ArticleItem:
    """One article in a feed.

    Attributes:
        title: Headline.
        link: Absolute article URL.
        id: Upstream identifier; unique within one listing response.
        published_at: First publication time (UTC), if known.
        updated_at: Last update time (UTC), if known.
        author: Comma-joined author names; ``None`` when the upstream omits them.
        categories: Ordered category/keyword labels.
        description: Plain-text summary or HTML fragment.
    """

    title: str
    link: str
    id: str
    published_at: datetime | None = None
    updated_at: datetime | None = None
    author: str | None = None
    categories: list[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "id": self.id,
            "published_at": _isoformat(self.published_at),
            "updated_at": _isoformat(self.updated_at),
            "author": self.author,
            "categories": list(self.categories),
            "description": self.description,
        }


@dataclass(frozen=True)
class ArticleDetail:
    """Fields extracted from one article detail page.

    ``None`` means "not provided by this page"; :meth:`apply_to` leaves the
    corresponding item field untouched.  Instances are immutable so one
    cached detail can be applied to any number of items safely.
    """

    title: str | None = None
    published_at: datetime | None = None
    author: str | None = None
    categories: tuple[str, ...] | None = None
    description: str | None = None

    def apply_to(self, item: ArticleItem) -> ArticleItem:
        """Copy every provided field onto *item* in place and return it."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "categories":
                value = list(value)
            setattr(item, f.name, value)
        return item


@dataclass
class FeedResult:
    """A complete feed ready for the aggregator's serialisation layer.

    Attributes:
        title: Feed title.
        description: Feed description.
        image: Publisher logo URL.
        link: Canonical listing page URL.
        items: Articles in listing order.
        categories: Listing-level tags (empty when the source has none).
    """

    title: str
    description: str | None
    image: str
    link: str
    items: list[ArticleItem] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "link": self.link,
            "categories": list(self.categories),
            "items": [item.to_dict() for item in self.items],
        }
