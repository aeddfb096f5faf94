"""Metrics summary helpers."""

from __future__ import annotations

from dataclasses import asdict

from ma_signal_bot.accounting.tick_tracker import TickTracker


def summarize_metrics(tracker: TickTracker, last_price: float | None) -> dict[str, float]:
    """Build a minimal metrics snapshot for the shutdown report."""
    base = {
        "last_price": float(last_price) if last_price is not None else 0.0,
        "skip_ratio": tracker.skip_ratio,
        "trade_count": float(tracker.trade_count),
    }
    base.update({f"ticks_{k}": float(v) for k, v in asdict(tracker).items() if isinstance(v, (int, float))})
    return base
