# highlights/timeline.py
# Year navigation for the timeline card: previous/next, keyboard, swipe.
# Only the data-facing part lives here; rendering and animation do not.

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable

START_YEAR = 1800
END_YEAR = 2025
SWIPE_THRESHOLD_PX = 80

YearListener = Callable[[int], object]


class YearNavigator:
    def __init__(
        self, start: int = START_YEAR, end: int = END_YEAR, initial: int | None = None
    ) -> None:
        if start > end:
            raise ValueError(f"empty year range: {start}..{end}")
        self.start = start
        self.end = end
        self._year = self._clamp(end if initial is None else initial)
        self._listeners: list[YearListener] = []
        self._pending: set[asyncio.Task] = set()

    @property
    def year(self) -> int:
        return self._year

    @property
    def years(self) -> range:
        return range(self.start, self.end + 1)

    def subscribe(self, listener: YearListener) -> None:
        """
        `listener(year)` is called after every change of the current year.
        Coroutine listeners (HighlightsFeed.on_year_change) are scheduled as tasks
        on the running loop; await settle() to wait for them.
        """
        self._listeners.append(listener)

    def _clamp(self, year: int) -> int:
        return max(self.start, min(self.end, year))

    def go(self, year: int) -> bool:
        target = self._clamp(year)
        if target == self._year:
            return False
        self._year = target
        for listener in list(self._listeners):
            res = listener(target)
            if inspect.isawaitable(res):
                task = asyncio.ensure_future(res, loop=asyncio.get_running_loop())
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)
        return True

    async def settle(self) -> None:
        """Wait until every scheduled listener task has finished."""
        while self._pending:
            await asyncio.gather(*self._pending)

    def next(self) -> bool:
        return self.go(self._year + 1)

    def prev(self) -> bool:
        return self.go(self._year - 1)

    def handle_key(self, key: str) -> bool:
        if key == "ArrowLeft":
            return self.prev()
        if key == "ArrowRight":
            return self.next()
        return False

    def swipe(self, delta_px: float, threshold: float = SWIPE_THRESHOLD_PX) -> bool:
        """Dragging left (negative delta) moves to the next year; short drags snap back."""
        if abs(delta_px) < threshold:
            return False
        return self.next() if delta_px < 0 else self.prev()
