import time
from typing import Any, Optional
import threading
import logging

from cachetools import TLRUCache

logger = logging.getLogger(__name__)


def _expires_at(key: str, entry: tuple, now: float) -> float:
    ttl_seconds, _ = entry
    return now + ttl_seconds


class CacheService:
    """
    In-memory response cache with per-entry expiry.

    Backed by a cachetools TLRUCache: expired entries are evicted on every
    write, and the least recently used entry goes once MAX_ENTRIES is reached.

    Provides TTL presets:
    - FIXTURES: 1 hour (football-data.org freshness window)
    """

    # TTL Presets (in seconds)
    TTL_FIXTURES = 3600

    MAX_ENTRIES = 1024

    def __init__(self, maxsize: int = MAX_ENTRIES, clock=time.monotonic):
        """Initialize the cache service."""
        self._memory_cache = TLRUCache(maxsize=maxsize, ttu=_expires_at, timer=clock)
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Get a value from cache, None when missing or expired."""
        with self._lock:
            entry = self._memory_cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            self._hits += 1
            _, value = entry
            return value

    def set(self, key: str, value: Any, ttl_seconds: int = TTL_FIXTURES) -> None:
        """Store a value for ``ttl_seconds``."""
        with self._lock:
            self._memory_cache[key] = (ttl_seconds, value)

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry."""
        with self._lock:
            return self._memory_cache.pop(key, None) is not None

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._memory_cache.clear()
            logger.info("Cache cleared")

    @property
    def stats(self) -> dict:
        with self._lock:
            self._memory_cache.expire()
            return {
                "entries": len(self._memory_cache),
                "cache_hits": self._hits,
                "cache_misses": self._misses,
            }


# Singleton instance
_cache_instance: Optional[CacheService] = None
_instance_lock = threading.Lock()


def get_cache_service() -> CacheService:
    """Get the singleton cache service instance."""
    global _cache_instance
    if _cache_instance is None:
        with _instance_lock:
            if _cache_instance is None:
                _cache_instance = CacheService()
                logger.info("CacheService initialized (in-memory)")
    return _cache_instance
