"""Entry point for polling the live ticker and printing MA signals."""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path

from ma_signal_bot.data.price_feed import HttpPriceFeed
from ma_signal_bot.display.broadcaster import SnapshotBroadcaster
from ma_signal_bot.display.console import ConsoleDisplay
from ma_signal_bot.engine import EngineConfig, SignalEngine
from ma_signal_bot.scheduler import PriceSource, TickScheduler

SETTINGS_PATH = Path(__file__).parent / "config" / "settings.yaml"


def load_config(path: Path = SETTINGS_PATH) -> EngineConfig:
    if path.exists():
        return EngineConfig.from_yaml(path)
    return EngineConfig.default()


async def run(engine: SignalEngine, feed: PriceSource, config: EngineConfig, max_ticks: int | None = None) -> None:
    """Wire feed -> engine -> displays and run until stopped."""
    display_cfg = config.raw["display"]
    strategy = engine.strategy
    console = None
    if display_cfg.get("console", True):
        console = ConsoleDisplay(sys.stdout, engine.pair, strategy.short_window, strategy.long_window)
    broadcaster = None
    ws_cfg = display_cfg.get("websocket") or {}
    if ws_cfg.get("enabled"):
        broadcaster = SnapshotBroadcaster(host=ws_cfg["host"], port=int(ws_cfg["port"]))
        await broadcaster.start()

    async def on_price(price: float) -> None:
        snapshot = engine.on_price(price)
        if console is not None:
            console.show(snapshot)
        if broadcaster is not None:
            await broadcaster.broadcast(snapshot)

    scheduler = TickScheduler(feed, on_price, engine.on_feed_failure, engine.tick_interval)

    loop = asyncio.get_running_loop()
    handled = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, scheduler.stop)
            handled.append(sig)
        except (NotImplementedError, RuntimeError):
            pass

    if console is not None:
        console.show(None)
    try:
        await scheduler.run(max_ticks=max_ticks)
    finally:
        for sig in handled:
            loop.remove_signal_handler(sig)
        await feed.close()
        if broadcaster is not None:
            await broadcaster.close()


def main() -> None:
    config = load_config()
    engine = SignalEngine(config)
    feed_cfg = config.raw["feed"]
    feed = HttpPriceFeed(
        url=feed_cfg["url"],
        symbol=feed_cfg["symbol"],
        timeout=float(feed_cfg["timeout_seconds"]),
    )
    print(f"Polling {engine.pair} every {engine.tick_interval:.1f}s. Press CTRL+C to stop.")
    try:
        asyncio.run(run(engine, feed, config, max_ticks=engine.max_ticks or None))
    except KeyboardInterrupt:
        print("\nGraceful shutdown initiated...")
    finally:
        engine.shutdown()
        print("Signal bot stopped cleanly.")


if __name__ == "__main__":
    main()
