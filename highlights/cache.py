# highlights/cache.py
# Purpose: in-memory year -> highlights cache for the lookup service.
# Why: one upstream generation per year per TTL window.
# Pitfalls: not persistent; resets when the process restarts. Staleness is
#           checked when an entry is read, plus an optional sweep().

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from highlights.settings import WEEK_SEC

MAX_ITEMS = 5


@dataclass(frozen=True)
class YearCacheEntry:
    year: int
    items: tuple[str, ...]
    cached_at: float

    def age(self, now: float) -> float:
        return now - self.cached_at


class YearCache:
    """TTL-aware LRU cache keyed by calendar year."""

    def __init__(
        self,
        ttl_sec: float = WEEK_SEC,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._entries: OrderedDict[int, YearCacheEntry] = OrderedDict()
        self._ttl = ttl_sec
        self._max_entries = max_entries
        self._clock = clock

    @property
    def ttl_sec(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, year: object) -> bool:
        return year in self._entries

    def get(self, year: int) -> YearCacheEntry | None:
        """Return the entry for `year` if present and fresh, else None."""
        entry = self._entries.get(year)
        if entry is None:
            return None
        if entry.age(self._clock()) >= self._ttl:
            # expired
            self._entries.pop(year, None)
            return None
        self._entries.move_to_end(year)
        return entry

    def put(self, year: int, items: Sequence[str]) -> YearCacheEntry:
        """Store `items` for `year`, replacing any previous entry."""
        if not items:
            raise ValueError("refusing to cache an empty item list")
        entry = YearCacheEntry(year=year, items=tuple(items[:MAX_ITEMS]), cached_at=self._clock())
        self._entries[year] = entry
        self._entries.move_to_end(year)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
        return entry

    def sweep(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        now = self._clock()
        stale = [y for y, e in self._entries.items() if e.age(now) >= self._ttl]
        for year in stale:
            del self._entries[year]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
