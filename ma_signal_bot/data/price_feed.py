"""Price feeds for live polling and deterministic paper runs."""

from __future__ import annotations

import asyncio
import math
import random
from typing import Any, Optional

import aiohttp

from ma_signal_bot.config.constants import (
    DEFAULT_FEED_TIMEOUT_SECONDS,
    DEFAULT_FEED_URL,
    DEFAULT_SYMBOL,
)
from ma_signal_bot.exceptions import FeedError

_HEADERS = {"User-Agent": "ma-signal-bot/0.1"}


def parse_price(payload: Any) -> float:
    """Extract the string-encoded `price` field of a ticker payload."""
    if not isinstance(payload, dict) or "price" not in payload:
        raise FeedError(f"malformed ticker payload: {payload!r}")
    try:
        price = float(payload["price"])
    except (TypeError, ValueError):
        raise FeedError(f"non-numeric price: {payload['price']!r}")
    if not math.isfinite(price) or price < 0:
        raise FeedError(f"invalid price: {price!r}")
    return price


class HttpPriceFeed:
    """Polls the Binance public ticker endpoint for one symbol."""

    def __init__(
        self,
        url: str = DEFAULT_FEED_URL,
        symbol: str = DEFAULT_SYMBOL,
        timeout: float = DEFAULT_FEED_TIMEOUT_SECONDS,
    ) -> None:
        self.url = url
        self.symbol = symbol.upper()
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=_HEADERS)
        return self._session

    async def fetch_price(self) -> float:
        """Return the current price or raise FeedError."""
        try:
            session = await self._get_session()
            async with session.get(
                self.url,
                params={"symbol": self.symbol},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise FeedError(f"ticker endpoint returned {response.status}")
                payload = await response.json()
        except FeedError:
            raise
        except asyncio.TimeoutError:
            raise FeedError("ticker request timed out")
        except (aiohttp.ClientError, ValueError) as e:
            raise FeedError(f"ticker request failed: {e}")
        return parse_price(payload)

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None


class SyntheticPriceFeed:
    """Seeded random walk with the same contract as HttpPriceFeed."""

    def __init__(
        self,
        seed: int = 42,
        start_price: float = 50000.0,
        volatility: float = 0.0015,
        failure_rate: float = 0.0,
    ) -> None:
        self._rng = random.Random(seed)
        self._price = start_price
        self.volatility = volatility
        self.failure_rate = failure_rate

    async def fetch_price(self) -> float:
        """Step the walk once; fails on roughly `failure_rate` of calls."""
        if self.failure_rate and self._rng.random() < self.failure_rate:
            raise FeedError("synthetic feed dropped this tick")
        drift = self._rng.uniform(-self.volatility, self.volatility)
        self._price = max(1.0, self._price * (1.0 + drift))
        return self._price

    async def close(self) -> None:
        return None
