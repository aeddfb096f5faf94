"""Price feed and scheduler logger."""

from __future__ import annotations

import logging

from ma_signal_bot.logging.factory import build_logger


def get_feed_logger() -> logging.Logger:
    return build_logger("ma_signal_bot.feed", "FEED")
