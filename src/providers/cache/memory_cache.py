"""In-memory cache provider using cachetools.TTLCache.

Simple, fast cache suitable for development and single-process deployments.
Can be swapped for Redis or another backend via the ICacheProvider interface.

Concurrent misses for the same key share one in-flight asyncio task, so an
expensive provider call runs once no matter how many requests ask for it.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable

import structlog
from cachetools import TTLCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds for cache entries.
    timer:
        Clock used for expiry.  Tests pass a fake clock.
    name:
        Label included in log events (``"insights"``, ``"summaries"`` ...).
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl: float = 1800,
        timer: Callable[[], float] = time.monotonic,
        name: str = "default",
    ) -> None:
        self._ttl = ttl
        self._name = name
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=max_size, ttl=ttl, timer=timer)
        self._inflight: dict[str, asyncio.Task[Any]] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get_or_compute(self, key: str, compute: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for *key*, computing it once on a miss.

        The membership check and the in-flight registration happen without
        an intervening ``await``, so two coroutines can never both start a
        computation for the same key.  Each waiter is shielded: cancelling
        one caller does not cancel the shared computation.
        """
        if key in self._cache:
            logger.debug("cache_hit", cache=self._name, key=key)
            return self._cache[key]

        task = self._inflight.get(key)
        if task is None:
            logger.debug("cache_miss", cache=self._name, key=key)
            task = asyncio.ensure_future(self._compute_and_store(key, compute))
            self._inflight[key] = task
        else:
            logger.debug("cache_join_inflight", cache=self._name, key=key)

        return await asyncio.shield(task)

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired."""
        value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", cache=self._name, key=key)
        else:
            logger.debug("cache_miss", cache=self._name, key=key)
        return value

    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* with the cache-wide TTL."""
        self._cache[key] = value
        logger.debug("cache_set", cache=self._name, key=key)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", cache=self._name, key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return key in self._cache

    async def clear(self) -> None:
        self._cache.clear()
        logger.debug("cache_clear", cache=self._name)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _compute_and_store(self, key: str, compute: Callable[[], Awaitable[Any]]) -> Any:
        # Failures propagate to every waiter and leave nothing cached.
        try:
            value = await compute()
            self._cache[key] = value
            logger.debug("cache_set", cache=self._name, key=key)
            return value
        finally:
            self._inflight.pop(key, None)
