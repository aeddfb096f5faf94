"""Main orchestration engine for the moving-average signal bot."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from ma_signal_bot.accounting.tick_tracker import TickTracker
from ma_signal_bot.config.constants import (
    DEFAULT_FEED_TIMEOUT_SECONDS,
    DEFAULT_FEED_URL,
    DEFAULT_LONG_WINDOW,
    DEFAULT_PAIR,
    DEFAULT_SHORT_WINDOW,
    DEFAULT_SYMBOL,
    DEFAULT_TICK_INTERVAL_SECONDS,
    DEFAULT_WS_HOST,
    DEFAULT_WS_PORT,
    HISTORY_CAP,
    TRADE_LOG_CAP,
)
from ma_signal_bot.data.indicators import ma_spread_pct
from ma_signal_bot.logging.feed_log import get_feed_logger
from ma_signal_bot.logging.metrics import summarize_metrics
from ma_signal_bot.logging.signal_log import get_signal_logger
from ma_signal_bot.logging.trade_log import get_trade_logger
from ma_signal_bot.strategy.ma_crossover import EngineState, MovingAverageCrossover, TickSnapshot

DEFAULTS: dict[str, Any] = {
    "feed": {
        "url": DEFAULT_FEED_URL,
        "symbol": DEFAULT_SYMBOL,
        "pair": DEFAULT_PAIR,
        "timeout_seconds": DEFAULT_FEED_TIMEOUT_SECONDS,
    },
    "strategy": {
        "short_window": DEFAULT_SHORT_WINDOW,
        "long_window": DEFAULT_LONG_WINDOW,
        "history_cap": HISTORY_CAP,
        "trade_log_cap": TRADE_LOG_CAP,
    },
    "engine": {
        "tick_interval_seconds": DEFAULT_TICK_INTERVAL_SECONDS,
        "seed": 42,
        "max_ticks": 0,
    },
    "display": {
        "console": True,
        "websocket": {"enabled": False, "host": DEFAULT_WS_HOST, "port": DEFAULT_WS_PORT},
    },
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


@dataclass
class EngineConfig:
    raw: dict[str, Any]

    @classmethod
    def default(cls) -> "EngineConfig":
        return cls(raw=copy.deepcopy(DEFAULTS))

    @classmethod
    def from_yaml(cls, path: str | Path) -> "EngineConfig":
        """Load settings, filling anything the file leaves out from DEFAULTS."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"settings file {path} must contain a mapping")
        raw = _merge(DEFAULTS, data)
        for section in DEFAULTS:
            if not isinstance(raw[section], dict):
                raise ValueError(f"settings section '{section}' in {path} must be a mapping")
        return cls(raw=raw)

    @property
    def tick_interval(self) -> float:
        return float(self.raw["engine"]["tick_interval_seconds"])


class SignalEngine:
    """Owns the rolling state and threads it through the strategy on every tick."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        config = config or EngineConfig.default()
        cfg = config.raw
        self.strategy = MovingAverageCrossover(
            short_window=int(cfg["strategy"]["short_window"]),
            long_window=int(cfg["strategy"]["long_window"]),
            history_cap=int(cfg["strategy"]["history_cap"]),
            trade_log_cap=int(cfg["strategy"]["trade_log_cap"]),
        )
        self.tick_interval = config.tick_interval
        if self.tick_interval <= 0:
            raise ValueError("tick_interval_seconds must be > 0")
        self.pair = cfg["feed"]["pair"]
        self.max_ticks = int(cfg["engine"]["max_ticks"])
        self.tracker = TickTracker()
        self.signal_logger = get_signal_logger()
        self.trade_logger = get_trade_logger()
        self.feed_logger = get_feed_logger()
        self.state = EngineState()
        self.last_snapshot: TickSnapshot | None = None

    def on_price(self, price: float, now: datetime | None = None) -> TickSnapshot:
        """Ingest one sample and publish the resulting snapshot."""
        snapshot = self.strategy.generate(self.state, price, now=now)
        self.state = snapshot.state
        self.last_snapshot = snapshot
        self.tracker.mark_ingest(snapshot.signal)

        if snapshot.short_ma is None or snapshot.long_ma is None:
            self.signal_logger.info(
                "pending pair=%s price=%.2f samples=%d",
                self.pair,
                price,
                len(snapshot.history),
            )
        else:
            self.signal_logger.info(
                "signal=%s pair=%s price=%.2f short_ma=%.2f long_ma=%.2f spread=%.5f",
                snapshot.signal.value,
                self.pair,
                price,
                snapshot.short_ma,
                snapshot.long_ma,
                ma_spread_pct(snapshot.short_ma, snapshot.long_ma),
            )

        trade = snapshot.new_trade
        if trade is not None:
            self.trade_logger.info(
                "%s pair=%s price=%.2f ts=%s",
                trade.side.value.lower(),
                self.pair,
                trade.price,
                trade.ts.isoformat(),
            )
        return snapshot

    def on_feed_failure(self, exc: BaseException) -> None:
        """Skip the tick; state and last snapshot stay as they were."""
        self.tracker.mark_skip()
        self.feed_logger.warning("skip tick reason=feed_error detail=%s", exc)

    def shutdown(self) -> dict[str, float]:
        """Log the run summary and flush handlers."""
        last_price = self.state.history[-1] if self.state.history else None
        metrics = summarize_metrics(self.tracker, last_price)
        print("=== SIGNAL RUN SUMMARY ===")
        for k, v in metrics.items():
            print(f"{k}: {v:.6f}" if isinstance(v, float) else f"{k}: {v}")
        for logger in [self.signal_logger, self.trade_logger, self.feed_logger]:
            for handler in logger.handlers:
                handler.flush()
        print("Engine shutdown complete.")
        return metrics
