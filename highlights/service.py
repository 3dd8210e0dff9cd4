# highlights/service.py
# Single source of truth for "highlights of year N" (router + tests).
# What it does:
# - Serves fresh cache entries without touching the upstream API
# - Otherwise asks the model, coerces its text, caches and returns the items
# - Coalesces concurrent refreshes of the same year into one upstream call
# Pitfalls:
# - State lives in this object; build one per app (main.create_app) and inject
#   fakes in tests rather than patching module globals.

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from highlights.cache import MAX_ITEMS, YearCache
from highlights.coerce import coerce_to_string_list
from highlights.errors import EmptyContentError, InvalidYearError
from highlights.observability import CACHE_LOOKUPS, COALESCED_WAITS, EMPTY_RESULTS
from highlights.upstream import GeminiClient

logger = logging.getLogger("highlights.service")


@dataclass(frozen=True)
class LookupResult:
    year: int
    items: list[str]
    cached: bool = False


class LookupService:
    def __init__(self, cache: YearCache, upstream: GeminiClient) -> None:
        self.cache = cache
        self.upstream = upstream
        self._inflight: dict[int, asyncio.Task[list[str]]] = {}

    async def lookup(self, year: int, force: bool = False) -> LookupResult:
        if year < 0:
            raise InvalidYearError()

        if force:
            CACHE_LOOKUPS.labels(result="forced").inc()
        else:
            entry = self.cache.get(year)
            if entry is not None:
                CACHE_LOOKUPS.labels(result="hit").inc()
                logger.debug("cache hit for year %s", year)
                return LookupResult(year=year, items=list(entry.items), cached=True)
            CACHE_LOOKUPS.labels(result="miss").inc()

        items = await self._refresh_once(year)
        return LookupResult(year=year, items=items)

    async def _refresh_once(self, year: int) -> list[str]:
        task = self._inflight.get(year)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._refresh(year))
            self._inflight[year] = task
            task.add_done_callback(lambda t: self._forget(year, t))
        else:
            COALESCED_WAITS.inc()
            logger.debug("joining in-flight refresh for year %s", year)
        # a caller that goes away must not cancel the refresh others are awaiting
        items = await asyncio.shield(task)
        return list(items)

    def _forget(self, year: int, task: asyncio.Task) -> None:
        if self._inflight.get(year) is task:
            del self._inflight[year]

    async def _refresh(self, year: int) -> list[str]:
        text = await self.upstream.generate(year)
        items = coerce_to_string_list(text)[:MAX_ITEMS]
        if not items:
            EMPTY_RESULTS.inc()
            logger.warning("no usable items in upstream text for year %s", year)
            raise EmptyContentError()
        self.cache.put(year, items)
        logger.info("cached %d highlights for year %s", len(items), year, extra={"year": year})
        return items
