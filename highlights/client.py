"""
Fetch client for the timeline card.

Keeps the highlights of every year it has shown in memory and only calls
GET /api/achievement for years it has not seen yet. Exposes a snapshot:

  FeedSnapshot(year=1969, state=FetchState.SUCCESS, items=("...", ...))

Notes / Pitfalls:
- Navigation is faster than the network. Every request is tagged with the
  year and a generation number; an answer that comes back after the user
  moved on is dropped (no state change, not cached).
- Error kinds are not distinguished: any failure is FetchState.ERROR.
- No retries. Asking for the same year again after an error re-fetches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import httpx

logger = logging.getLogger("highlights.client")

ACHIEVEMENT_PATH = "/api/achievement"


class FetchState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class FeedSnapshot:
    year: int | None
    state: FetchState
    items: tuple[str, ...] = ()


class HighlightsFeed:
    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._cache: dict[int, list[str]] = {}
        self._generation = 0
        self._year: int | None = None
        self._state = FetchState.IDLE
        self._items: list[str] = []

    @property
    def snapshot(self) -> FeedSnapshot:
        return FeedSnapshot(year=self._year, state=self._state, items=tuple(self._items))

    def cached(self, year: int) -> list[str] | None:
        items = self._cache.get(year)
        return list(items) if items is not None else None

    def select(self, year: int) -> FeedSnapshot | None:
        """
        Make `year` current. Returns the snapshot when the local cache can answer
        synchronously, else None (state is LOADING). Any request still in flight
        for the previous selection becomes stale.
        """
        self._generation += 1
        self._year = year
        items = self._cache.get(year)
        if items:
            self._state = FetchState.SUCCESS
            self._items = list(items)
            return self.snapshot
        self._state = FetchState.LOADING
        self._items = []
        return None

    async def request_items_for_year(self, year: int) -> FeedSnapshot:
        hit = self.select(year)
        if hit is not None:
            return hit
        return await self._load(year, self._generation)

    async def on_year_change(self, year: int) -> FeedSnapshot:
        """Listener hook for timeline.YearNavigator events."""
        return await self.request_items_for_year(year)

    async def _load(self, year: int, generation: int) -> FeedSnapshot:
        try:
            items = await self._fetch(year)
        except (httpx.HTTPError, ValueError) as e:
            if self._is_stale(year, generation):
                logger.debug("dropping failed response for stale year %s", year)
                return self.snapshot
            logger.warning("highlights request for year %s failed: %s", year, e)
            self._state = FetchState.ERROR
            self._items = []
            return self.snapshot

        if self._is_stale(year, generation):
            logger.debug("dropping late response for year %s (now %s)", year, self._year)
            return self.snapshot

        self._cache[year] = items
        self._state = FetchState.SUCCESS
        self._items = list(items)
        return self.snapshot

    def _is_stale(self, year: int, generation: int) -> bool:
        return generation != self._generation or year != self._year

    async def _fetch(self, year: int) -> list[str]:
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            r = await client.get(ACHIEVEMENT_PATH, params={"year": year})
            r.raise_for_status()
            data = r.json()
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        return [i for i in items if isinstance(i, str)]
