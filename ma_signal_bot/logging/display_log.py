"""Dashboard output logger."""

from __future__ import annotations

import logging

from ma_signal_bot.logging.factory import build_logger


def get_display_logger() -> logging.Logger:
    return build_logger("ma_signal_bot.display", "DISPLAY")
