"""Trade record logger."""

from __future__ import annotations

import logging

from ma_signal_bot.logging.factory import build_logger


def get_trade_logger() -> logging.Logger:
    """Every BUY/SELL entry added to the trade log."""
    return build_logger("ma_signal_bot.trade", "TRADE")
