"""
Caching for archwarden.

Two layers:

- ``LRUCache``: bounded in-memory cache with least-recently-used eviction,
  used for per-file import lists keyed by (path, modification time).
- ``AnalysisCache``: optional persistent cache built on diskcache, used to
  keep parsed imports across process restarts.
"""

from __future__ import annotations

import hashlib
from collections import OrderedDict
from typing import Any, Generic, Hashable, Optional, Protocol, TypeVar

from diskcache import Cache

from .logging_config import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class BoundedCache(Protocol[K, V]):
    """Fixed-capacity key/value cache."""

    capacity: int

    def get(self, key: K) -> Optional[V]: ...

    def set(self, key: K, value: V) -> None: ...

    def clear(self) -> None: ...

    def __len__(self) -> int: ...

    def __contains__(self, key: object) -> bool: ...


class LRUCache(Generic[K, V]):
    """Least-recently-used cache with a fixed capacity.

    ``get`` refreshes an entry's position; ``set`` evicts the oldest entry
    once ``capacity`` is reached.
    """

    def __init__(self, capacity: int = 100):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: OrderedDict[K, V] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: K) -> Optional[V]:
        try:
            value = self._entries[key]
        except KeyError:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: K, value: V) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"LRU evicted {evicted!r}")
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def keys(self) -> list[K]:
        """Keys from least to most recently used."""
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class AnalysisCache:
    """
    SQLite-based cache for parse results.

    Features:
    - Cache keys derived from file path, modification time and size
    - TTL-based expiration
    - Can be disabled entirely (all operations become no-ops)
    """

    def __init__(
        self,
        cache_dir: str = ".archwarden-cache",
        ttl_hours: int = 24,
        enabled: bool = True,
    ):
        """
        Initialize cache.

        Args:
            cache_dir: Directory for cache storage
            ttl_hours: Time-to-live in hours
            enabled: Whether caching is enabled
        """
        self.enabled = enabled
        self.ttl_seconds = ttl_hours * 3600

        if self.enabled:
            self.cache: Optional[Cache] = Cache(cache_dir)
            logger.debug(f"Cache initialized at {cache_dir} with TTL={ttl_hours}h")
        else:
            self.cache = None
            logger.debug("Cache disabled")

    @staticmethod
    def file_key(path: str, mtime: int, size: int, namespace: str = "imports") -> str:
        """
        Generate cache key from file metadata.

        Args:
            path: Absolute file path
            mtime: Modification time token
            size: File size in bytes
            namespace: Kind of cached value

        Returns:
            Cache key string
        """
        key_data = f"{namespace}:{path}:{mtime}:{size}"
        return hashlib.sha256(key_data.encode()).hexdigest()

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache, or None if missing/expired/disabled."""
        if not self.enabled or self.cache is None:
            return None

        try:
            value = self.cache.get(key)
        except Exception as e:
            logger.warning(f"Cache get failed: {e}")
            return None
        if value is not None:
            logger.debug(f"Cache hit: {key[:16]}...")
        return value

    def set(self, key: str, value: Any) -> None:
        """Set value in cache."""
        if not self.enabled or self.cache is None:
            return

        try:
            self.cache.set(key, value, expire=self.ttl_seconds)
            logger.debug(f"Cache set: {key[:16]}...")
        except Exception as e:
            logger.warning(f"Cache set failed: {e}")

    def clear(self) -> None:
        """Clear all cache entries."""
        if not self.enabled or self.cache is None:
            return

        try:
            self.cache.clear()
            logger.info("Cache cleared")
        except Exception as e:
            logger.warning(f"Cache clear failed: {e}")

    def stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        if not self.enabled or self.cache is None:
            return {"enabled": False}

        try:
            return {
                "enabled": True,
                "size": len(self.cache),
                "directory": self.cache.directory,
                "volume": self.cache.volume(),
            }
        except Exception as e:
            logger.warning(f"Cache stats failed: {e}")
            return {"enabled": True, "error": str(e)}

    def close(self) -> None:
        """Close cache (cleanup)."""
        if self.cache is not None:
            self.cache.close()
