"""Cache providers.

In-memory TTL-based cache used to avoid repeating identical provider calls
(the same query over the same documents, the same document summary, the
same topic extraction).

MemoryCacheProvider is a dict-based cache, fast but not shared across
processes. For multi-worker deployments, swap in a Redis adapter implementing
ICacheProvider without changing any business logic.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
