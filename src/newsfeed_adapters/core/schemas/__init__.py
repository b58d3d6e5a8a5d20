"""Pydantic schemas for API responses."""

from newsfeed_adapters.core.schemas.feed import ArticleItemRead, FeedResponse

__all__ = [
    "ArticleItemRead",
    "FeedResponse",
]
