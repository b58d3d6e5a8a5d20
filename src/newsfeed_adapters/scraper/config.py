"""Constants for upstream HTTP access."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Fetch timing
# ---------------------------------------------------------------------------

#: Default HTTP request timeout in seconds.
DEFAULT_TIMEOUT: float = 30.0

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

#: Content-Type prefixes that indicate binary/non-text resources that cannot
#: be parsed as JSON or HTML.
BINARY_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "application/pdf",
        "application/zip",
        "application/octet-stream",
        "image/",
        "video/",
        "audio/",
        "font/",
    }
)
