"""Periodic sampling loop: timer -> async fetch -> serialized ingest queue."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Protocol, Set, Union

from ma_signal_bot.exceptions import FeedError
from ma_signal_bot.logging.feed_log import get_feed_logger

_STOP = object()


class PriceSource(Protocol):
    async def fetch_price(self) -> float | None: ...


PriceHandler = Callable[[float], Union[Any, Awaitable[Any]]]
FailureHandler = Callable[[BaseException], Union[Any, Awaitable[Any]]]


class TickScheduler:
    """Fires one fetch per tick and applies results strictly in arrival order.

    Fetches are not awaited by the timer, so a slow request never delays the
    next tick and several requests may be in flight at once. Their outcomes
    go through a single queue consumer, which is the only caller of the
    handlers. A fetch that raises or returns None is a failed tick. Outcomes
    that land after `stop()` are dropped.
    """

    def __init__(
        self,
        feed: PriceSource,
        on_price: PriceHandler,
        on_failure: FailureHandler,
        interval: float,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.feed = feed
        self.on_price = on_price
        self.on_failure = on_failure
        self.interval = interval
        self.ticks_fired = 0
        self.ticks_processed = 0
        self._running = False
        self._queue: Optional[asyncio.Queue] = None
        self._timer_task: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
        self._logger = get_feed_logger()

    @property
    def running(self) -> bool:
        return self._running

    async def run(self, max_ticks: int | None = None) -> None:
        """Run until `stop()` is called or `max_ticks` outcomes were applied."""
        self._queue = asyncio.Queue()
        self._running = True
        self._timer_task = asyncio.create_task(self._timer())
        try:
            while self._running:
                item = await self._queue.get()
                if item is _STOP or not self._running:
                    break
                await self._apply(item)
                self.ticks_processed += 1
                if max_ticks and self.ticks_processed >= max_ticks:
                    break
        finally:
            await self._shutdown()

    def stop(self) -> None:
        """Halt future ticks; the consumer exits at its next wake-up."""
        if not self._running:
            return
        self._running = False
        if self._timer_task is not None:
            self._timer_task.cancel()
        if self._queue is not None:
            self._queue.put_nowait(_STOP)

    async def _timer(self) -> None:
        while self._running:
            self.ticks_fired += 1
            task = asyncio.create_task(self._fetch(self.ticks_fired))
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            await asyncio.sleep(self.interval)

    async def _fetch(self, tick: int) -> None:
        try:
            outcome: float | BaseException | None = await self.feed.fetch_price()
        except Exception as e:
            outcome = e
        if outcome is None:
            outcome = FeedError("feed returned no price")
        if not self._running:
            self._logger.debug("drop late outcome tick=%d", tick)
            return
        self._queue.put_nowait(outcome)

    async def _apply(self, outcome: float | BaseException) -> None:
        if isinstance(outcome, BaseException):
            result = self.on_failure(outcome)
        else:
            result = self.on_price(outcome)
        if inspect.isawaitable(result):
            await result

    async def _shutdown(self) -> None:
        self._running = False
        tasks = [t for t in (self._timer_task, *self._in_flight) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()
