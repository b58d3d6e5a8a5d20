"""In-process memoisation of per-URL computations.

:class:`ArticleCache` guarantees at most one in-flight computation per key:
the first caller computes while concurrent callers for the same key wait on a
per-key :class:`asyncio.Lock` and then read the stored value.  Unrelated keys
never contend with each other.

The cache is an injected dependency.  The FastAPI app keeps a single instance
on ``app.state`` and hands it to each collector; tests build their own.

Usage::

    cache = ArticleCache(ttl_seconds=3600)
    detail = await cache.get_or_compute(url, lambda: fetch_detail(url))
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


@dataclass
class _KeyLock:
    """A per-key lock plus the number of callers currently holding or awaiting it."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class ArticleCache(Generic[T]):
    """Async get-or-compute cache with per-key locking and optional expiry.

    Args:
        ttl_seconds: Lifetime of an entry in seconds.  ``None`` keeps entries
            for the lifetime of the cache.
        clock: Monotonic clock used for expiry (injectable for tests).
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float | None, T]] = {}
        self._locks: dict[str, _KeyLock] = {}

    def __len__(self) -> int:
        return sum(1 for key in list(self._entries) if self._lookup(key) is not _MISSING)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._lookup(key) is not _MISSING

    def get(self, key: str, default: T | None = None) -> T | None:
        """Return the cached value for *key*, or *default* if absent or expired."""
        value = self._lookup(key)
        return default if value is _MISSING else value

    def clear(self) -> None:
        """Drop every stored entry.  In-flight computations still complete."""
        self._entries.clear()

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for *key*, computing and storing it on a miss.

        Only one ``compute`` call runs per key at a time.  If ``compute``
        raises, nothing is stored and the exception propagates to this caller;
        callers that were waiting on the same key then retry the computation
        themselves.

        Args:
            key: Cache key (the article URL for detail enrichment).
            compute: Zero-argument coroutine function producing the value.

        Returns:
            The cached or freshly computed value.
        """
        value = self._lookup(key)
        if value is not _MISSING:
            return value

        key_lock = self._locks.setdefault(key, _KeyLock())
        key_lock.users += 1
        try:
            async with key_lock.lock:
                value = self._lookup(key)
                if value is not _MISSING:
                    return value
                logger.debug("cache: computing entry for %s", key)
                value = await compute()
                self._store(key, value)
                return value
        finally:
            key_lock.users -= 1
            if key_lock.users == 0 and self._locks.get(key) is key_lock:
                del self._locks[key]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lookup(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        expires_at, value = entry
        if expires_at is not None and self._clock() >= expires_at:
            self._entries.pop(key, None)
            return _MISSING
        return value

    def _store(self, key: str, value: T) -> None:
        expires_at = None if self._ttl is None else self._clock() + self._ttl
        self._entries[key] = (expires_at, value)
