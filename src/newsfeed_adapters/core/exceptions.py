"""Application-wide exception hierarchy for newsfeed-adapters.

All custom exceptions subclass ``NewsfeedError``, enabling consistent
error handling and structured logging across the adapters.

Hierarchy::

    NewsfeedError
    ├── FetchError                   (url, status_code)
    ├── SourceError                  (source)
    │   ├── ListingFetchError
    │   ├── FallbackFetchError
    │   │   └── EmptyFallbackResult
    │   └── ItemEnrichmentError      (url)
    │       └── ExtractionShapeMismatch
    └── NormalizationError           (raw_item)
"""

from __future__ import annotations


class NewsfeedError(Exception):
    """Base class for all newsfeed-adapters exceptions.

    All application-specific exceptions inherit from this class so that
    callers can catch the entire hierarchy with a single ``except`` clause
    when needed.
    """


# ---------------------------------------------------------------------------
# Transport exceptions
# ---------------------------------------------------------------------------


class FetchError(NewsfeedError):
    """Raised when an upstream HTTP fetch does not yield a usable body.

    Covers transport failures, timeouts, non-2xx statuses, binary bodies and
    malformed JSON.

    Args:
        message: Human-readable description of the failure.
        url: URL that was requested.
        status_code: HTTP status code, or ``None`` for transport errors.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Source adapter exceptions
# ---------------------------------------------------------------------------


class SourceError(NewsfeedError):
    """Raised when a source adapter fails while producing a feed.

    Args:
        message: Human-readable description of the failure.
        source: Name of the adapter that failed (e.g. ``"reuters"``).
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class ListingFetchError(SourceError):
    """Raised when the primary listing API is unreachable or returns a malformed body.

    Recovered by the collector, which switches to the fallback API.
    """


class FallbackFetchError(SourceError):
    """Raised when the fallback listing API is unreachable or malformed."""


class EmptyFallbackResult(FallbackFetchError):
    """Raised when the fallback listing API answers without any wire items."""


class ItemEnrichmentError(SourceError):
    """Raised when fetching or parsing one article detail page fails.

    Never aborts a batch: the enricher drops the affected item and carries on.

    Args:
        message: Human-readable description of the failure.
        url: Detail page URL of the affected item.
        source: Name of the adapter.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        source: str | None = None,
    ) -> None:
        super().__init__(message, source=source)
        self.url = url


class ExtractionShapeMismatch(ItemEnrichmentError):
    """Raised when a detail page does not have the shape any extractor expects."""


# ---------------------------------------------------------------------------
# Data-processing exceptions
# ---------------------------------------------------------------------------


class NormalizationError(NewsfeedError):
    """Raised when a raw listing record cannot be normalized.

    Args:
        message: Description of the normalization failure.
        raw_item: The raw dict that could not be normalized (for debugging).
    """

    def __init__(
        self,
        message: str,
        raw_item: dict | None = None,  # type: ignore[type-arg]
    ) -> None:
        super().__init__(message)
        self.raw_item = raw_item
