"""Signal models shared between strategy, engine and display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ma_signal_bot.config.constants import PENDING_LABEL


class Signal(str, Enum):
    """Direction derived from the short/long moving average comparison."""

    BUY = "BUY"
    SELL = "SELL"
    UNDETERMINED = "UNDETERMINED"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_trade(self) -> bool:
        return self is not Signal.UNDETERMINED


_LABELS = {
    Signal.BUY: "Buy 🚀",
    Signal.SELL: "Sell 🔻",
    Signal.UNDETERMINED: PENDING_LABEL,
}


@dataclass(frozen=True)
class TradeRecord:
    """A logged BUY or SELL occurrence."""

    side: Signal
    price: float
    ts: datetime


def derive_signal(short_ma: float | None, long_ma: float | None) -> Signal:
    """Compare the averages; missing data or a tie is UNDETERMINED."""
    if short_ma is None or long_ma is None:
        return Signal.UNDETERMINED
    if short_ma > long_ma:
        return Signal.BUY
    if short_ma < long_ma:
        return Signal.SELL
    return Signal.UNDETERMINED
