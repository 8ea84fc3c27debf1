"""
Backend caching for expensive aggregate queries.

Provides server-side caching of computed results with TTL and prefix
invalidation. Thread-safe implementation for concurrent access.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class QueryCache:
    """Thread-safe TTL cache keyed by query name."""

    def __init__(
        self, default_ttl_seconds: float = 60, max_cache_size: int = 100, clock: Callable[[], float] = time.time
    ):
        """Initialize cache.

        Args:
            default_ttl_seconds: Time to live for entries without an explicit TTL
            max_cache_size: Maximum number of cached queries
            clock: Time source (seconds), swappable in tests
        """
        self._values: dict[str, Any] = {}
        self._expires_at: dict[str, float] = {}
        self._access_times: dict[str, float] = {}
        # Bumped by invalidate; a compute that started before the bump is not stored
        self._generations: dict[str, int] = {}
        self._default_ttl = default_ttl_seconds
        self._max_size = max_cache_size
        self._clock = clock
        self._lock = threading.RLock()
        self._hit_count = 0
        self._miss_count = 0

    def get(self, key: str) -> Any | None:
        """Get a cached value if present and not expired."""
        with self._lock:
            if key not in self._values:
                self._miss_count += 1
                return None

            now = self._clock()
            if now >= self._expires_at[key]:
                logger.debug(f"Cache expired for {key}")
                self._evict(key)
                self._miss_count += 1
                return None

            self._access_times[key] = now
            self._hit_count += 1
            return self._values[key]

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        with self._lock:
            if len(self._values) >= self._max_size and key not in self._values:
                self._evict_lru()

            now = self._clock()
            self._values[key] = value
            self._expires_at[key] = now + ttl
            self._access_times[key] = now

    def get_or_compute(self, key: str, loader: Callable[[], V], ttl_seconds: float | None = None) -> V:
        """Return the cached value for key, computing and storing it on a miss.

        The loader runs outside the lock; two concurrent misses may both
        compute, and the later result wins. A result whose key was
        invalidated while the loader ran is returned but not stored.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached  # type: ignore[no-any-return]

        with self._lock:
            generation = self._generations.setdefault(key, 0)

        value = loader()

        with self._lock:
            if self._generations[key] != generation:
                logger.debug(f"Not caching {key}: invalidated during compute")
                return value
            self.set(key, value, ttl_seconds)
        return value

    def invalidate(self, prefix: str) -> int:
        """Drop every entry whose key starts with prefix.

        Returns:
            Number of entries invalidated
        """
        with self._lock:
            keys_to_remove = [key for key in self._values if key.startswith(prefix)]
            for key in self._generations:
                if key.startswith(prefix):
                    self._generations[key] += 1
            for key in keys_to_remove:
                self._evict(key)

            if keys_to_remove:
                logger.debug(f"Invalidated {len(keys_to_remove)} cached queries for '{prefix}'")
            return len(keys_to_remove)

    def clear(self) -> None:
        with self._lock:
            count = len(self._values)
            self._values.clear()
            self._expires_at.clear()
            self._access_times.clear()
            for key in self._generations:
                self._generations[key] += 1
            logger.info(f"Cleared {count} cached queries")

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            total_requests = self._hit_count + self._miss_count
            hit_rate = self._hit_count / total_requests if total_requests > 0 else 0.0
            return {
                "size": len(self._values),
                "max_size": self._max_size,
                "hits": self._hit_count,
                "misses": self._miss_count,
                "hit_rate": hit_rate,
            }

    def _evict(self, key: str) -> None:
        self._values.pop(key, None)
        self._expires_at.pop(key, None)
        self._access_times.pop(key, None)

    def _evict_lru(self) -> None:
        if not self._access_times:
            return
        lru_key = min(self._access_times, key=lambda k: self._access_times[k])
        self._evict(lru_key)
        logger.debug(f"Evicted LRU cache entry {lru_key}")
