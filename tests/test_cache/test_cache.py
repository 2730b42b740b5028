"""Tests for the PatternCache module."""

from __future__ import annotations

import time

import pytest

from patterndir.cache import PatternCache
from patterndir.models import CacheConfig


@pytest.fixture()
def disabled_cache(tmp_path):
    """Create a disabled PatternCache."""
    c = PatternCache(tmp_path, CacheConfig(enabled=False, ttl_seconds=300))
    yield c
    c.close()


def _make_entry(count: int = 1) -> dict:
    return {
        "patterns": [{"id": i} for i in range(count)],
        "stored_at": time.time(),
    }


# ------------------------------------------------------------------ #
# Core get/set behaviour
# ------------------------------------------------------------------ #


class TestGetSet:
    def test_set_and_get(self, cache: PatternCache) -> None:
        entry = _make_entry(3)
        cache.set("patterns_abc", entry)
        assert cache.get("patterns_abc") == entry

    def test_cache_miss_returns_none(self, cache: PatternCache) -> None:
        assert cache.get("patterns_missing") is None

    def test_set_overwrites(self, cache: PatternCache) -> None:
        cache.set("patterns_abc", _make_entry(1))
        cache.set("patterns_abc", _make_entry(2))
        assert len(cache.get("patterns_abc")["patterns"]) == 2

    def test_persists_across_instances(self, tmp_path) -> None:
        config = CacheConfig(enabled=True, ttl_seconds=300)
        with PatternCache(tmp_path, config) as first:
            first.set("patterns_abc", _make_entry())
        with PatternCache(tmp_path, config) as second:
            assert second.get("patterns_abc") is not None


# ------------------------------------------------------------------ #
# TTL
# ------------------------------------------------------------------ #


class TestTTL:
    def test_entry_expires(self, tmp_path) -> None:
        c = PatternCache(tmp_path, CacheConfig(enabled=True, ttl_seconds=1))
        try:
            c.set("patterns_abc", _make_entry())
            assert c.get("patterns_abc") is not None
            time.sleep(1.1)
            assert c.get("patterns_abc") is None
        finally:
            c.close()


# ------------------------------------------------------------------ #
# Disabled cache
# ------------------------------------------------------------------ #


class TestDisabled:
    def test_get_returns_none(self, disabled_cache: PatternCache) -> None:
        disabled_cache.set("patterns_abc", _make_entry())
        assert disabled_cache.get("patterns_abc") is None

    def test_stats_when_disabled(self, disabled_cache: PatternCache) -> None:
        assert disabled_cache.stats() == {"enabled": False}

    def test_clear_when_disabled(self, disabled_cache: PatternCache) -> None:
        assert disabled_cache.clear() == 0


# ------------------------------------------------------------------ #
# Maintenance
# ------------------------------------------------------------------ #


class TestMaintenance:
    def test_clear(self, cache: PatternCache) -> None:
        cache.set("patterns_a", _make_entry())
        cache.set("patterns_b", _make_entry())
        assert cache.clear() == 2
        assert cache.get("patterns_a") is None

    def test_stats(self, cache: PatternCache, tmp_path) -> None:
        cache.set("patterns_a", _make_entry())
        stats = cache.stats()
        assert stats["enabled"] is True
        assert stats["size"] == 1
        assert stats["ttl_seconds"] == 300
        assert stats["directory"] == str(tmp_path / "patterns")
