# marketdash/market_data/charts.py
"""
Synthetic OHLCV chart series.
"""
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from .types import ChartDataPoint

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

DEFAULT_RANGE = "1M"


def _intraday_label(i: int, total: int, now: datetime) -> str:
    minutes = 9 * 60 + 30 + i * 5
    return f"{minutes // 60}:{minutes % 60:02d}"


def _weekday_label(i: int, total: int, now: datetime) -> str:
    return WEEKDAYS[min(i // 7, len(WEEKDAYS) - 1)]


def _day_label(i: int, total: int, now: datetime) -> str:
    day = now - timedelta(days=total - i)
    return f"{day.month}/{day.day}"


def _month_label(i: int, total: int, now: datetime) -> str:
    return MONTHS[(i // 21) % 12]


def _year_label(i: int, total: int, now: datetime) -> str:
    months_back = (total - i) // 21
    month_index = now.year * 12 + (now.month - 1) - months_back
    return str(month_index // 12)


RANGE_SHAPES: Dict[str, Tuple[int, Callable[[int, int, datetime], str]]] = {
    "1D": (78, _intraday_label),   # 5-minute bars over a trading session
    "1W": (35, _weekday_label),    # 5 days x 7 bars
    "1M": (22, _day_label),        # trading days in a month
    "3M": (65, _day_label),
    "1Y": (252, _month_label),     # trading days in a year
    "ALL": (500, _year_label),
}


def base_price_for(symbol: str) -> int:
    return 50 + sum(ord(ch) for ch in symbol) % 500


def generate_chart_data(symbol: str, range_: str = DEFAULT_RANGE,
                        rng: Optional[random.Random] = None,
                        now: Optional[datetime] = None) -> List[ChartDataPoint]:
    """
    Random walk of OHLCV bars for the given range.

    Unrecognized ranges use the 1M shape. Prices are rounded after the
    high/low bounds are computed, so every bar keeps
    low <= min(open, close) and high >= max(open, close).
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    points, label = RANGE_SHAPES.get(range_, RANGE_SHAPES[DEFAULT_RANGE])

    price = float(base_price_for(symbol))
    volatility = 0.02 + rng.random() * 0.03

    data = []
    for i in range(points):
        change = (rng.random() - 0.5) * 2 * price * volatility
        open_ = price
        close = price + change
        high = max(open_, close) + rng.random() * abs(change) * 0.5
        low = min(open_, close) - rng.random() * abs(change) * 0.5

        data.append(ChartDataPoint(
            time=label(i, points, now),
            open=round(open_, 2),
            high=round(high, 2),
            low=round(low, 2),
            close=round(close, 2),
            volume=rng.randrange(1_000_000, 11_000_000),
        ))
        price = close
    return data
