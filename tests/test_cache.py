from __future__ import annotations

import pytest

from highlights.cache import MAX_ITEMS, YearCache
from highlights.settings import WEEK_SEC


def test_put_then_get(clock) -> None:
    cache = YearCache(clock=clock)
    cache.put(1969, ["Moon landing"])
    entry = cache.get(1969)
    assert entry is not None
    assert entry.year == 1969
    assert entry.items == ("Moon landing",)
    assert entry.cached_at == clock.now


def test_miss_for_unknown_year(clock) -> None:
    assert YearCache(clock=clock).get(1850) is None


def test_entry_expires_after_ttl(clock) -> None:
    cache = YearCache(clock=clock)
    cache.put(1969, ["Moon landing"])
    clock.advance(WEEK_SEC - 1)
    assert cache.get(1969) is not None
    clock.advance(1)
    assert cache.get(1969) is None
    assert 1969 not in cache


def test_put_overwrites_and_restamps(clock) -> None:
    cache = YearCache(clock=clock)
    cache.put(1969, ["old"])
    clock.advance(60)
    cache.put(1969, ["new"])
    entry = cache.get(1969)
    assert entry.items == ("new",)
    assert entry.cached_at == clock.now
    assert len(cache) == 1


def test_items_truncated(clock) -> None:
    cache = YearCache(clock=clock)
    entry = cache.put(2000, [f"e{i}" for i in range(8)])
    assert len(entry.items) == MAX_ITEMS


def test_empty_items_rejected(clock) -> None:
    with pytest.raises(ValueError):
        YearCache(clock=clock).put(2000, [])


def test_lru_eviction_drops_least_recently_used(clock) -> None:
    cache = YearCache(max_entries=2, clock=clock)
    cache.put(1900, ["a"])
    cache.put(1901, ["b"])
    assert cache.get(1900) is not None  # 1901 is now least recently used
    cache.put(1902, ["c"])
    assert 1901 not in cache
    assert 1900 in cache and 1902 in cache


def test_sweep_removes_only_expired(clock) -> None:
    cache = YearCache(ttl_sec=100, clock=clock)
    cache.put(1900, ["a"])
    clock.advance(60)
    cache.put(1901, ["b"])
    clock.advance(50)
    assert cache.sweep() == 1
    assert 1900 not in cache
    assert 1901 in cache


def test_invalid_bound() -> None:
    with pytest.raises(ValueError):
        YearCache(max_entries=0)
