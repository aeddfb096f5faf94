"""Plain-text dashboard for terminal output."""

from __future__ import annotations

from typing import Any, TextIO

from ma_signal_bot.config.constants import DEFAULT_PAIR, HOLD_LABEL, PENDING_LABEL, PRICE_DECIMALS
from ma_signal_bot.strategy.ma_crossover import TickSnapshot
from ma_signal_bot.strategy.signal import Signal, TradeRecord


def format_price(value: float | None) -> str:
    if value is None:
        return PENDING_LABEL
    return f"{value:.{PRICE_DECIMALS}f}"


def format_trade(trade: TradeRecord) -> str:
    """`Buy @ $110.00 - 12:00:01`, with the time shown in local time."""
    side = trade.side.value.capitalize()
    local_time = trade.ts.astimezone().strftime("%H:%M:%S")
    return f"{side} @ ${format_price(trade.price)} - {local_time}"


def signal_label(snapshot: TickSnapshot | None) -> str:
    """Headline text; a tie between two defined averages reads as a hold, not as pending."""
    if snapshot is None:
        return PENDING_LABEL
    if snapshot.signal is Signal.UNDETERMINED and snapshot.short_ma is not None and snapshot.long_ma is not None:
        return HOLD_LABEL
    return snapshot.signal.label


def snapshot_to_dict(snapshot: TickSnapshot) -> dict[str, Any]:
    """JSON-friendly view of a snapshot, rounded for display."""
    return {
        "ts": snapshot.ts.isoformat(),
        "price": round(snapshot.price, PRICE_DECIMALS),
        "short_ma": None if snapshot.short_ma is None else round(snapshot.short_ma, PRICE_DECIMALS),
        "long_ma": None if snapshot.long_ma is None else round(snapshot.long_ma, PRICE_DECIMALS),
        "signal": snapshot.signal.value,
        "label": signal_label(snapshot),
        "trades": [
            {
                "type": t.side.value,
                "price": format_price(t.price),
                "time": t.ts.isoformat(),
            }
            for t in snapshot.trade_log
        ],
    }


def render_snapshot(snapshot: TickSnapshot | None, pair: str = DEFAULT_PAIR, short_window: int = 5, long_window: int = 20) -> str:
    """Render the dashboard block; None renders the pre-first-tick view."""
    price = snapshot.price if snapshot else None
    short_ma = snapshot.short_ma if snapshot else None
    long_ma = snapshot.long_ma if snapshot else None
    label = signal_label(snapshot)
    trades = snapshot.trade_log if snapshot else ()

    lines = [
        f"📈 {pair} Trading Dashboard",
        f"Current Price: {format_price(price)}",
        f"Short MA ({short_window}): {format_price(short_ma)}",
        f"Long MA ({long_window}): {format_price(long_ma)}",
        f"Signal: {label}",
        "",
        "🔔 Trade History",
    ]
    if not trades:
        lines.append("No trades yet.")
    else:
        lines.extend(f"  {format_trade(t)}" for t in trades)
    return "\n".join(lines)


class ConsoleDisplay:
    """Writes a fresh dashboard block after every snapshot."""

    def __init__(self, stream: TextIO, pair: str = DEFAULT_PAIR, short_window: int = 5, long_window: int = 20) -> None:
        self.stream = stream
        self.pair = pair
        self.short_window = short_window
        self.long_window = long_window

    def show(self, snapshot: TickSnapshot | None) -> None:
        text = render_snapshot(snapshot, self.pair, self.short_window, self.long_window)
        self.stream.write(text + "\n\n")
        self.stream.flush()
