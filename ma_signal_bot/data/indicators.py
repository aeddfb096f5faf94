"""Indicator helpers used by the crossover strategy."""

from __future__ import annotations

from typing import Sequence


def moving_average(values: Sequence[float], period: int) -> float | None:
    """Return the simple moving average of the last `period` values.

    None means there is not enough data yet. No rounding is applied.
    """
    if period <= 0:
        raise ValueError("period must be > 0")
    if len(values) < period:
        return None

    window = values[-period:]
    total = 0.0
    for v in window:
        total += v
    return total / period


def pct_change(new_value: float, old_value: float) -> float:
    """Safe percentage change."""
    if old_value == 0:
        return 0.0
    return (new_value - old_value) / old_value


def ma_spread_pct(short_ma: float | None, long_ma: float | None) -> float | None:
    """Relative gap of the short average over the long one, None when either is missing."""
    if short_ma is None or long_ma is None:
        return None
    return pct_change(short_ma, long_ma)
