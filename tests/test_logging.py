"""
Tests for the logger factories in ma_signal_bot/logging/

Covers:
- build_logger: single handler, tagged format, idempotent
- get_signal_logger / get_trade_logger / get_feed_logger / get_display_logger
- Broadcaster module logger carries a handler
"""

import logging

import pytest

from ma_signal_bot.display import broadcaster
from ma_signal_bot.logging.display_log import get_display_logger
from ma_signal_bot.logging.factory import build_logger
from ma_signal_bot.logging.feed_log import get_feed_logger
from ma_signal_bot.logging.signal_log import get_signal_logger
from ma_signal_bot.logging.trade_log import get_trade_logger


class TestBuildLogger:
    def test_single_handler_after_repeat_calls(self):
        first = build_logger("ma_signal_bot.test_factory", "TEST")
        second = build_logger("ma_signal_bot.test_factory", "TEST")
        assert first is second
        assert len(first.handlers) == 1
        assert first.level == logging.INFO

    def test_format_contains_tag(self):
        logger = build_logger("ma_signal_bot.test_factory_fmt", "XYZ")
        record = logging.LogRecord(logger.name, logging.INFO, __file__, 1, "hello", None, None)
        line = logger.handlers[0].formatter.format(record)
        assert line.endswith(" | XYZ | INFO | hello")


class TestNamedLoggers:
    @pytest.mark.parametrize(
        "factory, name, tag",
        [
            (get_signal_logger, "ma_signal_bot.signal", "SIGNAL"),
            (get_trade_logger, "ma_signal_bot.trade", "TRADE"),
            (get_feed_logger, "ma_signal_bot.feed", "FEED"),
            (get_display_logger, "ma_signal_bot.display", "DISPLAY"),
        ],
    )
    def test_factory(self, factory, name, tag):
        logger = factory()
        assert logger.name == name
        assert len(logger.handlers) == 1
        assert f"| {tag} |" in logger.handlers[0].formatter._fmt

    def test_broadcaster_uses_display_logger(self):
        assert broadcaster.logger is get_display_logger()
        assert broadcaster.logger.handlers
