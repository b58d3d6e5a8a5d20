"""Shared FastAPI dependencies.

Collaborators that must be shared across requests (the HTTP client, the
article cache and the template renderer) live on ``app.state`` and are
created by the lifespan handler in :mod:`newsfeed_adapters.api.main`.
"""

from __future__ import annotations

from fastapi import Request

from newsfeed_adapters.config.settings import get_settings
from newsfeed_adapters.sources.reuters.collector import ReutersCollector


def get_reuters_collector(request: Request) -> ReutersCollector:
    """Return a Reuters collector wired to the app-wide collaborators.

    Args:
        request: The incoming request (used to reach ``app.state``).

    Returns:
        A :class:`ReutersCollector` sharing the app's client, cache and renderer.
    """
    state = request.app.state
    return ReutersCollector(
        http_client=getattr(state, "http_client", None),
        cache=state.article_cache,
        renderer=state.renderer,
        settings=get_settings(),
    )
