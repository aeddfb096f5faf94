"""Short/long simple moving average crossover strategy."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple

from ma_signal_bot.config.constants import (
    DEFAULT_LONG_WINDOW,
    DEFAULT_SHORT_WINDOW,
    HISTORY_CAP,
    TRADE_LOG_CAP,
)
from ma_signal_bot.data.indicators import moving_average
from ma_signal_bot.strategy.signal import Signal, TradeRecord, derive_signal

PriceHistory = Tuple[float, ...]
TradeLog = Tuple[TradeRecord, ...]


@dataclass(frozen=True)
class EngineState:
    """Rolling price window (oldest first) and trade log (newest first)."""

    history: PriceHistory = ()
    trade_log: TradeLog = ()


@dataclass(frozen=True)
class TickSnapshot:
    """Everything a display needs after one successful ingest."""

    price: float
    short_ma: float | None
    long_ma: float | None
    signal: Signal
    history: PriceHistory
    trade_log: TradeLog
    ts: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def state(self) -> EngineState:
        return EngineState(history=self.history, trade_log=self.trade_log)

    @property
    def new_trade(self) -> TradeRecord | None:
        """The record appended on this tick, if any."""
        if self.signal.is_trade and self.trade_log:
            return self.trade_log[0]
        return None


def ingest(
    history: PriceHistory,
    trade_log: TradeLog,
    sample: float,
    now: datetime | None = None,
    short_window: int = DEFAULT_SHORT_WINDOW,
    long_window: int = DEFAULT_LONG_WINDOW,
    history_cap: int = HISTORY_CAP,
    trade_log_cap: int = TRADE_LOG_CAP,
) -> TickSnapshot:
    """Fold one price sample into the state and derive this tick's signal.

    Averages are taken over the history as it was before `sample` is appended,
    so the signal for a tick lags the newest price by one sample. Inputs are
    left untouched; the new history and log are returned on the snapshot.
    """
    ts = now or datetime.now(timezone.utc)
    new_history = (tuple(history) + (sample,))[-history_cap:]

    short_ma = moving_average(history, short_window)
    long_ma = moving_average(history, long_window)
    signal = derive_signal(short_ma, long_ma)

    new_log = tuple(trade_log)
    if signal.is_trade:
        record = TradeRecord(side=signal, price=sample, ts=ts)
        new_log = ((record,) + new_log)[:trade_log_cap]

    return TickSnapshot(
        price=sample,
        short_ma=short_ma,
        long_ma=long_ma,
        signal=signal,
        history=new_history,
        trade_log=new_log,
        ts=ts,
    )


class MovingAverageCrossover:
    """Applies `ingest` with a fixed set of window sizes and caps."""

    def __init__(
        self,
        short_window: int = DEFAULT_SHORT_WINDOW,
        long_window: int = DEFAULT_LONG_WINDOW,
        history_cap: int = HISTORY_CAP,
        trade_log_cap: int = TRADE_LOG_CAP,
    ) -> None:
        if short_window <= 0 or long_window <= 0:
            raise ValueError("moving average windows must be > 0")
        if short_window >= long_window:
            raise ValueError("short_window must be smaller than long_window")
        if history_cap < long_window:
            raise ValueError("history_cap must hold at least long_window samples")
        if trade_log_cap <= 0:
            raise ValueError("trade_log_cap must be > 0")
        self.short_window = short_window
        self.long_window = long_window
        self.history_cap = history_cap
        self.trade_log_cap = trade_log_cap

    def generate(self, state: EngineState, price: float, now: datetime | None = None) -> TickSnapshot:
        """Return the snapshot for `price` applied on top of `state`."""
        return ingest(
            state.history,
            state.trade_log,
            price,
            now=now,
            short_window=self.short_window,
            long_window=self.long_window,
            history_cap=self.history_cap,
            trade_log_cap=self.trade_log_cap,
        )
