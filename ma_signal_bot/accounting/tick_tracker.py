"""Per-run tick and signal statistics."""

from __future__ import annotations

from dataclasses import dataclass

from ma_signal_bot.strategy.signal import Signal


@dataclass
class TickTracker:
    """Counts ticks, feed failures and emitted signals."""

    total_ticks: int = 0
    ingested_ticks: int = 0
    skipped_ticks: int = 0
    buy_signals: int = 0
    sell_signals: int = 0
    undetermined_signals: int = 0

    def mark_ingest(self, signal: Signal) -> None:
        """Record a successfully ingested tick and its signal."""
        self.total_ticks += 1
        self.ingested_ticks += 1
        if signal is Signal.BUY:
            self.buy_signals += 1
        elif signal is Signal.SELL:
            self.sell_signals += 1
        else:
            self.undetermined_signals += 1

    def mark_skip(self) -> None:
        """Record a tick dropped because the feed failed."""
        self.total_ticks += 1
        self.skipped_ticks += 1

    @property
    def trade_count(self) -> int:
        return self.buy_signals + self.sell_signals

    @property
    def skip_ratio(self) -> float:
        """Fraction of ticks lost to feed failures."""
        if self.total_ticks == 0:
            return 0.0
        return self.skipped_ticks / self.total_ticks
