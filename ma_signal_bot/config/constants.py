"""Project-wide constants for the moving-average signal bot."""

from __future__ import annotations

DEFAULT_PAIR = "BTC/USDT"
DEFAULT_SYMBOL = "BTCUSDT"
DEFAULT_FEED_URL = "https://api.binance.com/api/v3/ticker/price"
DEFAULT_FEED_TIMEOUT_SECONDS = 10.0

# Engine behavior
DEFAULT_TICK_INTERVAL_SECONDS = 1.0
DEFAULT_SHORT_WINDOW = 5
DEFAULT_LONG_WINDOW = 20
HISTORY_CAP = 20
TRADE_LOG_CAP = 5

# Display
PRICE_DECIMALS = 2
PENDING_LABEL = "Calculating..."
HOLD_LABEL = "Hold"
DEFAULT_WS_HOST = "localhost"
DEFAULT_WS_PORT = 6789
