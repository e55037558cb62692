#!/usr/bin/env python3
"""Tests for the compiled-rule LRU cache."""

import threading

import pytest

from ignorematch.infrastructure.cache_manager import CacheConfig, CacheEntry, LRUCache


class TestCacheConfig:
    """Tests for CacheConfig."""

    def test_defaults(self):
        """Defaults come from the package constants."""
        config = CacheConfig()
        assert config.max_entries == 1024
        assert config.enabled is True

    def test_invalid_max_entries(self):
        """Non-positive limits are rejected."""
        with pytest.raises(ValueError, match="max_entries must be positive"):
            LRUCache(CacheConfig(max_entries=0))


class TestCacheEntry:
    """Tests for CacheEntry."""

    def test_fields(self):
        """An entry holds its key and value."""
        entry = CacheEntry(key="*.log", value=1)
        assert (entry.key, entry.value) == ("*.log", 1)


class TestLRUCache:
    """Tests for LRUCache."""

    def test_get_set(self):
        """Stored values are returned."""
        cache = LRUCache()
        cache.set("a", 1)
        assert cache.get("a") == 1
        assert cache.get("missing") is None
        assert "a" in cache
        assert len(cache) == 1

    def test_lru_eviction(self):
        """The least recently used entry is evicted first."""
        cache = LRUCache(CacheConfig(max_entries=2))
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert cache.get_stats()["evictions"] == 1

    def test_overwrite_does_not_evict(self):
        """Replacing a key keeps the entry count."""
        cache = LRUCache(CacheConfig(max_entries=2))
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 3)

        assert cache.get("a") == 3
        assert "b" in cache
        assert cache.get_stats()["evictions"] == 0

    def test_disabled(self):
        """A disabled cache stores nothing."""
        cache = LRUCache(CacheConfig(enabled=False))
        cache.set("a", 1)
        assert cache.get("a") is None
        assert len(cache) == 0

    def test_invalidate_and_clear(self):
        """Entries can be removed singly or all at once."""
        cache = LRUCache()
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.invalidate("a") is True
        assert cache.invalidate("a") is False
        cache.clear()
        assert len(cache) == 0

    def test_stats(self):
        """Hits, misses and hit rate are tracked."""
        cache = LRUCache()
        assert cache.get_stats()["hit_rate"] == 0

        cache.set("a", 1)
        cache.get("a")
        cache.get("b")

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
        assert stats["entries"] == 1

    def test_thread_safety(self):
        """Concurrent writers never exceed the bound."""
        cache = LRUCache(CacheConfig(max_entries=50))

        def writer(offset):
            for i in range(200):
                cache.set(f"{offset}-{i}", i)
                cache.get(f"{offset}-{i // 2}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 50
