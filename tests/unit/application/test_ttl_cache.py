"""Unit tests for the context cache – TTLCache and its key scheme."""
from __future__ import annotations

import pytest

from lexscope.application.cache import CacheStats, TTLCache, user_context_key
from lexscope.testing.fakes import FakeClock


class TestUserContextKey:
    def test_format(self) -> None:
        assert user_context_key("u1") == "user:u1"


class TestTTLCache:
    def test_rejects_non_positive_ttl(self) -> None:
        with pytest.raises(ValueError):
            TTLCache(0)

    def test_miss_returns_none(self) -> None:
        assert TTLCache(10, clock=FakeClock()).get("missing") is None

    def test_hit_within_ttl(self) -> None:
        clock = FakeClock()
        cache: TTLCache[str] = TTLCache(300, clock=clock)
        cache.set("k", "v")
        clock.advance(seconds=299)
        assert cache.get("k") == "v"

    def test_expires_at_ttl_boundary(self) -> None:
        clock = FakeClock()
        cache: TTLCache[str] = TTLCache(300, clock=clock)
        cache.set("k", "v")
        clock.advance(seconds=300)
        assert cache.get("k") is None
        assert cache.stats().size == 0

    def test_set_overwrites_and_refreshes(self) -> None:
        clock = FakeClock()
        cache: TTLCache[str] = TTLCache(10, clock=clock)
        cache.set("k", "old")
        clock.advance(seconds=8)
        cache.set("k", "new")
        clock.advance(seconds=8)
        assert cache.get("k") == "new"

    def test_delete_and_clear(self) -> None:
        cache: TTLCache[int] = TTLCache(10, clock=FakeClock())
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        cache.delete("a")
        assert cache.stats() == CacheStats(size=1, entries=("b",))
        cache.clear()
        assert cache.stats() == CacheStats(size=0, entries=())

    def test_ttl_seconds_property(self) -> None:
        assert TTLCache(5).ttl_seconds == 5.0
