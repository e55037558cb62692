#!/usr/bin/env python3
"""Thread-safe LRU cache for compiled rules.

Compiled rules are immutable and depend only on their pattern line, so
entries never expire; the cache is bounded by entry count alone.

Example:
    >>> cache = LRUCache(CacheConfig(max_entries=2))
    >>> cache.set("*.log", rule)
    >>> cache.get("*.log") is rule
    True
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ignorematch.core.constants import Defaults


@dataclass
class CacheEntry:
    """Single cached value under its key."""

    key: str
    value: Any


@dataclass
class CacheConfig:
    """Cache limits."""

    max_entries: int = Defaults.CACHE_MAX_ENTRIES
    enabled: bool = Defaults.CACHE_ENABLED

    def validate(self) -> None:
        if self.max_entries <= 0:
            raise ValueError(f"max_entries must be positive: {self.max_entries}")


class LRUCache:
    """Thread-safe LRU cache bounded by entry count."""

    def __init__(self, config: Optional[CacheConfig] = None):
        """Initialize LRU cache.

        Args:
            config: Cache configuration (defaults if None)
        """
        self.config = config or CacheConfig()
        self.config.validate()
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()

        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> Optional[Any]:
        """Get a value, marking it most recently used.

        Returns:
            Cached value or None if absent or the cache is disabled
        """
        with self._lock:
            if not self.config.enabled or key not in self._cache:
                self._misses += 1
                return None

            entry = self._cache[key]
            self._cache.move_to_end(key)

            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value, evicting the least recently used entries if full."""
        if not self.config.enabled:
            return

        with self._lock:
            self._cache.pop(key, None)

            while len(self._cache) >= self.config.max_entries:
                self._cache.popitem(last=False)
                self._evictions += 1

            self._cache[key] = CacheEntry(key=key, value=value)

    def invalidate(self, key: str) -> bool:
        """Remove entry from cache.

        Returns:
            True if entry was removed
        """
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = self._hits / total_requests if total_requests > 0 else 0

            return {
                "entries": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": hit_rate,
                "evictions": self._evictions,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._cache
