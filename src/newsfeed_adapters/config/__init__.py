"""Configuration package for newsfeed-adapters.

Re-exports the settings symbols so that callers can write::

    from newsfeed_adapters.config import get_settings
"""

from __future__ import annotations

from newsfeed_adapters.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
