"""Signal event logger."""

from __future__ import annotations

import logging

from ma_signal_bot.logging.factory import build_logger


def get_signal_logger() -> logging.Logger:
    """Per-tick averages and signals."""
    return build_logger("ma_signal_bot.signal", "SIGNAL")
