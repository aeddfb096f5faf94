"""Entry point for a deterministic offline run against a synthetic feed."""

from __future__ import annotations

import asyncio

from ma_signal_bot.data.price_feed import SyntheticPriceFeed
from ma_signal_bot.engine import SignalEngine
from ma_signal_bot.run_live import load_config, run

PAPER_TICKS = 60
PAPER_INTERVAL_SECONDS = 0.05


def main() -> None:
    config = load_config()
    config.raw["engine"]["tick_interval_seconds"] = PAPER_INTERVAL_SECONDS
    config.raw["display"]["websocket"]["enabled"] = False
    engine = SignalEngine(config)
    feed = SyntheticPriceFeed(seed=int(config.raw["engine"]["seed"]), failure_rate=0.05)

    print("Paper signal run started. Press CTRL+C to stop.")
    try:
        asyncio.run(run(engine, feed, config, max_ticks=engine.max_ticks or PAPER_TICKS))
    except KeyboardInterrupt:
        print("\nGraceful shutdown initiated...")
    finally:
        engine.shutdown()
        print("Paper signal run stopped cleanly.")


if __name__ == "__main__":
    main()
