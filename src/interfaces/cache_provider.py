"""Abstract base class for cache service providers.

Defines the contract for the key-value caches that sit in front of the
insight providers (generated insights, document summaries, key topics).
Implementations may use an in-process TTL cache, Redis, or anything else;
what they must all guarantee is single-flight computation in
:meth:`ICacheProvider.get_or_compute`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores without
    blocking the event loop.
    """

    @abstractmethod
    async def get_or_compute(self, key: str, compute: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for *key*, computing it on a miss.

        Parameters
        ----------
        key:
            The cache key.
        compute:
            Zero-argument coroutine function producing the value.  Invoked
            at most once per key at a time: concurrent callers for the
            same key wait on the single in-flight computation and receive
            its result (or its exception).  Exceptions are not cached.
        """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if missing/expired."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* using the cache's configured TTL."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*.  No-op if absent."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every entry."""
