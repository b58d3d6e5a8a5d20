"""Pydantic response schemas for feeds.

Built from the :mod:`newsfeed_adapters.core.feed` dataclasses via
``model_validate(..., from_attributes=True)``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ArticleItemRead(BaseModel):
    """A single feed article as returned by the API.

    Attributes:
        title: Headline.
        link: Absolute article URL.
        id: Upstream article identifier.
        published_at: Publication timestamp (UTC).
        updated_at: Last update timestamp (UTC).
        author: Comma-joined author names.
        categories: Category/keyword labels.
        description: Plain-text summary or HTML fragment.
    """

    model_config = ConfigDict(from_attributes=True)

    title: str
    link: str
    id: str
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[str] = None
    categories: list[str] = Field(default_factory=list)
    description: str = ""


class FeedResponse(BaseModel):
    """A complete feed as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    description: Optional[str] = None
    image: str
    link: str
    categories: list[str] = Field(default_factory=list)
    items: list[ArticleItemRead] = Field(default_factory=list)
