# marketdash/market_data/adapters/__init__.py
"""
Market data provider adapters.
Each adapter implements the BaseMarketDataProvider interface.
"""
from .synthetic_adapter import SyntheticDataProvider
from .yahoo_adapter import YahooDataProvider

__all__ = ["SyntheticDataProvider", "YahooDataProvider"]
