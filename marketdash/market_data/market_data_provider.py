# marketdash/market_data/market_data_provider.py
"""
Base market data provider interface and provider registry.

Exactly one provider serves a process, selected by MARKET_DATA_SOURCE.
"""
from abc import ABC, abstractmethod
from typing import Optional, List

from ..utils.config import SUPPORTED_DATA_SOURCES, get_settings
from ..utils.logger import log_info, log_warning
from .types import (
    Stock,
    StockFundamentals,
    ChartDataPoint,
    MarketIndex,
    EarningsData,
    DividendHistory,
    InsiderTransaction,
    InstitutionalHolder,
    SectorPerformance,
)


class BaseMarketDataProvider(ABC):
    """Base interface for all market data providers."""

    name: str = "base"

    @abstractmethod
    async def get_trending_stocks(self) -> List[Stock]:
        """Popular symbols with sparklines."""

    @abstractmethod
    async def get_default_symbols(self) -> List[str]:
        pass

    @abstractmethod
    async def search_stocks(self, query: str) -> List[Stock]:
        pass

    @abstractmethod
    async def get_quote(self, symbol: str) -> Optional[Stock]:
        """Single quote with sparkline. Returns None for unknown symbols."""

    @abstractmethod
    async def get_multiple_quotes(self, symbols: List[str]) -> List[Stock]:
        """Quotes for symbols that resolved; failures are dropped."""

    @abstractmethod
    async def get_fundamentals(self, symbol: str) -> Optional[StockFundamentals]:
        pass

    @abstractmethod
    async def get_chart(self, symbol: str, range_: str = "1M") -> List[ChartDataPoint]:
        """
        Get OHLCV bars for a range (1D, 1W, 1M, 3M, 1Y, ALL, ...).

        Returns:
            List of ChartDataPoint, oldest first. Empty when unavailable.
        """

    @abstractmethod
    async def get_earnings(self, symbol: str, quarters: int = 8) -> Optional[List[EarningsData]]:
        """None for unknown symbols."""

    @abstractmethod
    async def get_dividends(self, symbol: str, count: int = 8) -> Optional[List[DividendHistory]]:
        pass

    @abstractmethod
    async def get_insider_transactions(self, symbol: str, count: int = 10) -> Optional[List[InsiderTransaction]]:
        pass

    @abstractmethod
    async def get_institutional_holders(self, symbol: str) -> Optional[List[InstitutionalHolder]]:
        pass

    @abstractmethod
    async def get_indices(self) -> List[MarketIndex]:
        pass

    @abstractmethod
    async def get_sector_performance(self) -> List[SectorPerformance]:
        pass


# Provider registry
_providers: dict[str, type[BaseMarketDataProvider]] = {}
_active_provider: Optional[BaseMarketDataProvider] = None


def register_provider(name: str, provider_class: type[BaseMarketDataProvider]):
    """Register a market data provider."""
    _providers[name.lower()] = provider_class


def _register_builtin_providers():
    if "synthetic" not in _providers:
        from .adapters.synthetic_adapter import SyntheticDataProvider
        register_provider("synthetic", SyntheticDataProvider)
    if "yahoo" not in _providers:
        from .adapters.yahoo_adapter import YahooDataProvider
        register_provider("yahoo", YahooDataProvider)


def create_provider(name: str) -> BaseMarketDataProvider:
    """
    Build a provider instance by name.

    Unknown names fall back to the synthetic provider.
    """
    _register_builtin_providers()
    name = (name or "").lower()
    if name not in SUPPORTED_DATA_SOURCES or name not in _providers:
        log_warning(f"Unknown market data source {name!r}, using synthetic")
        name = "synthetic"

    provider_class = _providers[name]
    if name == "yahoo":
        from .cache import TTLCache
        settings = get_settings()
        return provider_class(cache=TTLCache(settings.cache_ttl_seconds, settings.cache_max_size))
    return provider_class()


def get_provider() -> BaseMarketDataProvider:
    """Process-wide provider chosen once from MARKET_DATA_SOURCE."""
    global _active_provider
    if _active_provider is None:
        _active_provider = create_provider(get_settings().market_data_source)
        log_info(f"Market data provider: {_active_provider.name}")
    return _active_provider


def reset_provider() -> None:
    """Forget the active provider (used by tests and app startup)."""
    global _active_provider
    _active_provider = None
