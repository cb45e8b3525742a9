# marketdash/market_data/symbol_utils.py
"""
Symbol normalization utilities.
Handles "$MSFT", "tsla\n", index tickers and Yahoo-specific spellings.
"""
import re

# Yahoo Finance spellings for symbols clients commonly send
YAHOO_SYMBOL_MAP = {
    "BTCUSD": "BTC-USD",
    "ETHUSD": "ETH-USD",
    "SPX": "^GSPC",
    "DJI": "^DJI",
    "IXIC": "^IXIC",
    "RUT": "^RUT",
    "VIX": "^VIX",
}


def normalize_symbol(symbol: str) -> str:
    """
    Normalize a path or query symbol before dispatch.

    Examples:
        "$MSFT " -> "MSFT"
        "tsla\\n" -> "TSLA"
        "brk.b" -> "BRK.B"
    """
    if not symbol:
        return ""

    normalized = str(symbol).strip()
    normalized = re.sub(r'^[\$€£¥₹]+\s*', '', normalized)
    normalized = re.sub(r'[^\w.^-]+$', '', normalized)
    return normalized.upper().strip()


def to_yahoo_symbol(symbol: str) -> str:
    normalized = normalize_symbol(symbol)
    return YAHOO_SYMBOL_MAP.get(normalized, normalized)


def validate_symbol(symbol: str) -> bool:
    """
    Check that a normalized symbol looks like a ticker.

    Allows 1-10 characters of A-Z, 0-9, dots, hyphens and a leading caret
    (e.g. AAPL, BRK.B, BTC-USD, ^GSPC).
    """
    if not symbol:
        return False
    return bool(re.match(r'^\^?[A-Z0-9.-]{1,10}$', symbol))
