"""
Tests für infrastructure.cache_manager

Testet das Failure-Memo der Solver.
"""

import pytest

from infrastructure.cache_manager import CacheStatistics, FailureStateCache


class TestFailureStateCache:
    def test_mark_and_contains(self):
        """Test: Markierte Zustände werden wiedererkannt."""
        cache = FailureStateCache(maxsize=10, name="test")
        assert cache.contains(b"\x00\x01") is False

        cache.mark_failed(b"\x00\x01")
        assert cache.contains(b"\x00\x01") is True
        assert len(cache) == 1

    def test_statistics(self):
        cache = FailureStateCache(maxsize=10)
        cache.mark_failed(1)
        cache.contains(1)
        cache.contains(2)

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["sets"] == 1
        assert cache.statistics.hit_rate == 0.5

    def test_lru_eviction(self):
        """Test: Bei voller Kapazität fällt der älteste Eintrag heraus."""
        cache = FailureStateCache(maxsize=2)
        cache.mark_failed("a")
        cache.mark_failed("b")
        cache.mark_failed("c")

        assert len(cache) == 2
        assert cache.contains("a") is False
        assert cache.contains("c") is True

    def test_clear(self):
        cache = FailureStateCache(maxsize=5)
        cache.mark_failed("a")
        cache.clear()

        assert len(cache) == 0
        assert cache.statistics.invalidations == 1

    @pytest.mark.parametrize("maxsize", [0, -1])
    def test_invalid_maxsize(self, maxsize):
        with pytest.raises(ValueError):
            FailureStateCache(maxsize=maxsize)

    def test_empty_statistics(self):
        stats = CacheStatistics(cache_name="leer")
        assert stats.total_requests == 0
        assert stats.hit_rate == 0.0
