"""Async HTTP fetch helpers for listing APIs and article pages.

Uses ``httpx`` for all HTTP requests.  Unlike a best-effort page scraper,
every failure here is raised as :class:`~newsfeed_adapters.core.exceptions.FetchError`
so the calling adapter decides whether to fall back, drop an item or give up.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from newsfeed_adapters.core.exceptions import FetchError
from newsfeed_adapters.scraper.config import BINARY_CONTENT_TYPES, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass
class FetchResult:
    """Result of a successful HTTP fetch.

    Attributes:
        text: Decoded response body.
        status_code: HTTP status code.
        final_url: URL after following redirects.
        content_type: Value of the ``Content-Type`` header (may be empty).
    """

    text: str
    status_code: int
    final_url: str
    content_type: str = ""


# ---------------------------------------------------------------------------
# Binary content-type check
# ---------------------------------------------------------------------------


def _is_binary_content_type(content_type: str) -> bool:
    """Return ``True`` if the Content-Type indicates a non-text binary resource."""
    ct = content_type.lower().split(";")[0].strip()
    return any(ct.startswith(prefix) for prefix in BINARY_CONTENT_TYPES)


# ---------------------------------------------------------------------------
# Public fetch functions
# ---------------------------------------------------------------------------


async def fetch_url(
    url: str,
    *,
    client: httpx.AsyncClient,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> FetchResult:
    """Fetch a single URL and return its decoded body.

    Follows redirects.  The final URL is reported on the result so callers
    can branch on where a link actually landed.

    Args:
        url: Target URL to fetch.
        client: Shared :class:`httpx.AsyncClient` instance.
        params: Optional query parameters.
        headers: Optional request headers merged over the client defaults.
        timeout: Request timeout in seconds.

    Returns:
        A :class:`FetchResult` instance.

    Raises:
        FetchError: On timeout, redirect loops, transport errors, HTTP
            status >= 400 or a binary content type.
    """
    try:
        response = await client.get(
            url,
            params=dict(params) if params else None,
            headers=dict(headers) if headers else None,
            timeout=timeout,
            follow_redirects=True,
        )
    except httpx.TimeoutException as exc:
        logger.warning("fetch: timeout fetching %s", url)
        raise FetchError(f"timeout fetching {url}", url=url) from exc
    except httpx.TooManyRedirects as exc:
        logger.warning("fetch: too many redirects for %s", url)
        raise FetchError(f"too many redirects for {url}", url=url) from exc
    except httpx.RequestError as exc:
        logger.warning("fetch: request error for %s: %s", url, exc)
        raise FetchError(f"request error for {url}: {exc}", url=url) from exc

    final_url = str(response.url)
    logger.debug(
        "fetch: HTTP %d from %s",
        response.status_code,
        final_url,
        extra={"request_headers": dict(response.request.headers)},
    )

    if response.status_code >= 400:
        logger.info("fetch: HTTP %d for %s", response.status_code, url)
        raise FetchError(
            f"HTTP {response.status_code} for {url}",
            url=url,
            status_code=response.status_code,
        )

    content_type = response.headers.get("content-type", "")
    if _is_binary_content_type(content_type):
        logger.info("fetch: binary content-type '%s' for %s", content_type, url)
        raise FetchError(
            f"binary content-type {content_type!r} for {url}",
            url=url,
            status_code=response.status_code,
        )

    return FetchResult(
        text=response.text,
        status_code=response.status_code,
        final_url=final_url,
        content_type=content_type,
    )


async def fetch_json(
    url: str,
    *,
    client: httpx.AsyncClient,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """Fetch a URL and decode its body as JSON.

    Args:
        url: Target URL to fetch.
        client: Shared :class:`httpx.AsyncClient` instance.
        params: Optional query parameters.
        headers: Optional request headers.
        timeout: Request timeout in seconds.

    Returns:
        The parsed JSON document.

    Raises:
        FetchError: On any :func:`fetch_url` failure or a malformed JSON body.
    """
    result = await fetch_url(url, client=client, params=params, headers=headers, timeout=timeout)
    try:
        return json.loads(result.text)
    except ValueError as exc:
        logger.warning("fetch: malformed JSON from %s: %s", url, exc)
        raise FetchError(
            f"malformed JSON from {url}",
            url=url,
            status_code=result.status_code,
        ) from exc
