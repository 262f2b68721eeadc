"""Tests for the in-memory LRU cache and the persistent analysis cache."""

import pytest

from archwarden.cache import AnalysisCache, LRUCache


class TestLRUCache:
    """Bounded LRU behaviour."""

    def test_evicts_least_recently_used(self):
        cache = LRUCache(capacity=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert "b" not in cache
        assert cache.keys() == ["a", "c"]

    def test_overwrite_does_not_evict(self):
        cache = LRUCache(capacity=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        assert len(cache) == 2
        assert cache.get("a") == 10
        assert cache.keys() == ["b", "a"]

    def test_hit_and_miss_counts(self):
        cache = LRUCache()
        cache.set("a", 1)
        cache.get("a")
        cache.get("missing")
        assert (cache.hits, cache.misses) == (1, 1)
        cache.clear()
        assert len(cache) == 0
        assert (cache.hits, cache.misses) == (0, 0)

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            LRUCache(capacity=0)


class TestAnalysisCache:
    """diskcache-backed persistence."""

    def test_disabled_is_noop(self, tmp_path):
        cache = AnalysisCache(cache_dir=str(tmp_path / "c"), enabled=False)
        cache.set("k", [1])
        assert cache.get("k") is None
        assert cache.stats() == {"enabled": False}
        assert not (tmp_path / "c").exists()

    def test_roundtrip_and_clear(self, tmp_path):
        cache = AnalysisCache(cache_dir=str(tmp_path / "c"))
        try:
            cache.set("k", ["./a", "./b"])
            assert cache.get("k") == ["./a", "./b"]
            stats = cache.stats()
            assert stats["enabled"] is True
            assert stats["size"] == 1
            cache.clear()
            assert cache.get("k") is None
        finally:
            cache.close()

    def test_file_key_depends_on_metadata(self):
        key = AnalysisCache.file_key("/p/a.js", 1, 10)
        assert key == AnalysisCache.file_key("/p/a.js", 1, 10)
        assert key != AnalysisCache.file_key("/p/a.js", 2, 10)
        assert key != AnalysisCache.file_key("/p/a.js", 1, 11)
        assert key != AnalysisCache.file_key("/p/a.js", 1, 10, namespace="metrics")
