# marketdash/market_data/adapters/synthetic_adapter.py
"""
Synthetic market data provider adapter.
Serves generated data; no network access and no API key.
"""
import random
from typing import Optional, List

from ..market_data_provider import BaseMarketDataProvider
from .. import synthetic
from ..catalog import DEFAULT_SYMBOLS, TRENDING_SYMBOLS, find_stock
from ..charts import generate_chart_data
from ..types import (
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


class SyntheticDataProvider(BaseMarketDataProvider):
    """In-memory generator behind the provider interface."""

    name = "synthetic"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    async def get_trending_stocks(self) -> List[Stock]:
        return synthetic.get_multiple_quotes(TRENDING_SYMBOLS, self._rng)

    async def get_default_symbols(self) -> List[str]:
        return list(DEFAULT_SYMBOLS)

    async def search_stocks(self, query: str) -> List[Stock]:
        return synthetic.search_stocks(query, self._rng)

    async def get_quote(self, symbol: str) -> Optional[Stock]:
        return synthetic.get_stock_by_symbol(symbol, self._rng)

    async def get_multiple_quotes(self, symbols: List[str]) -> List[Stock]:
        return synthetic.get_multiple_quotes(symbols, self._rng)

    async def get_fundamentals(self, symbol: str) -> Optional[StockFundamentals]:
        return synthetic.get_fundamentals(symbol, self._rng)

    async def get_chart(self, symbol: str, range_: str = "1M") -> List[ChartDataPoint]:
        if find_stock(symbol) is None:
            return []
        return generate_chart_data(symbol, range_, rng=self._rng)

    async def get_earnings(self, symbol: str, quarters: int = 8) -> Optional[List[EarningsData]]:
        return synthetic.get_earnings(symbol, self._rng, quarters=quarters)

    async def get_dividends(self, symbol: str, count: int = 8) -> Optional[List[DividendHistory]]:
        return synthetic.get_dividends(symbol, self._rng, count=count)

    async def get_insider_transactions(self, symbol: str, count: int = 10) -> Optional[List[InsiderTransaction]]:
        return synthetic.get_insider_transactions(symbol, self._rng, count=count)

    async def get_institutional_holders(self, symbol: str) -> Optional[List[InstitutionalHolder]]:
        return synthetic.get_institutional_holders(symbol, self._rng)

    async def get_indices(self) -> List[MarketIndex]:
        return synthetic.get_market_indices(self._rng)

    async def get_sector_performance(self) -> List[SectorPerformance]:
        return synthetic.get_sector_performance(self._rng)
