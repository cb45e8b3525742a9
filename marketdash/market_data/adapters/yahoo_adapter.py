# marketdash/market_data/adapters/yahoo_adapter.py
"""
Yahoo Finance market data provider adapter.
Uses yfinance library for free market data (no API key required).

Blocking yfinance calls run in worker threads. Responses are cached in a
TTLCache owned by the adapter instance.
"""
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import yfinance as yf
from pydantic import ValidationError

from ..cache import TTLCache
from ..catalog import DEFAULT_SYMBOLS, TRENDING_SYMBOLS
from ..market_data_provider import BaseMarketDataProvider
from ..symbol_utils import normalize_symbol, to_yahoo_symbol, validate_symbol
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
    MarketDataError,
)
from .yahoo_models import YahooQuoteInfo
from ...services.results import FailureReason, ServiceResult
from ...utils.logger import log_structured

# range -> (yfinance period, interval)
CHART_RANGES: Dict[str, Tuple[str, str]] = {
    "1D": ("1d", "5m"),
    "1W": ("5d", "1d"),
    "1M": ("1mo", "1d"),
    "3M": ("3mo", "1d"),
    "6M": ("6mo", "1wk"),
    "1Y": ("1y", "1wk"),
    "5Y": ("5y", "1mo"),
}
RANGE_ALIASES = {"ALL": "5Y"}
DEFAULT_RANGE = "1M"

INDEX_SYMBOLS = [
    ("^GSPC", "S&P 500"),
    ("^DJI", "Dow Jones"),
    ("^IXIC", "NASDAQ"),
    ("^RUT", "Russell 2000"),
    ("^VIX", "Volatility Index"),
]

SPARKLINE_POINTS = 12
SEARCH_LIMIT = 10


def resolve_range(range_: str) -> str:
    key = (range_ or DEFAULT_RANGE).upper()
    key = RANGE_ALIASES.get(key, key)
    return key if key in CHART_RANGES else DEFAULT_RANGE


def _num(value: Any, default: float = 0.0) -> float:
    if value is None or pd.isna(value):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _date_str(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc).date().isoformat()
    return pd.Timestamp(value).date().isoformat()


def _records(frame) -> List[Dict[str, Any]]:
    """DataFrame/Series -> list of row dicts with the index as a column."""
    if frame is None or getattr(frame, "empty", True):
        return []
    return frame.reset_index().to_dict("records")


def _pct(value: Optional[float]) -> float:
    return value * 100 if value else 0.0


def classify_error(error: Exception) -> FailureReason:
    """Map an upstream exception to a failure reason."""
    message = str(error).lower()
    if "rate limit" in message or "too many requests" in message or "429" in message:
        return FailureReason.RATE_LIMITED
    if isinstance(error, (ValidationError, MarketDataError, KeyError, TypeError, ValueError)):
        return FailureReason.INVALID_RESPONSE
    return FailureReason.UNAVAILABLE


class YahooDataProvider(BaseMarketDataProvider):
    """Yahoo Finance market data provider (free, no API key required)."""

    name = "yahoo"

    def __init__(self, cache: Optional[TTLCache] = None):
        self._cache = cache if cache is not None else TTLCache()

    @property
    def cache(self) -> TTLCache:
        return self._cache

    # ------------------------------------------------------------------
    # Blocking fetch hooks (run via asyncio.to_thread)
    # ------------------------------------------------------------------

    def _fetch_info(self, yahoo_symbol: str) -> Dict[str, Any]:
        info = yf.Ticker(yahoo_symbol).info
        if info is not None and not isinstance(info, dict):
            raise MarketDataError(f"unexpected info payload: {type(info).__name__}", yahoo_symbol)
        return info or {}

    def _fetch_history(self, yahoo_symbol: str, period: str, interval: str) -> List[Dict[str, Any]]:
        hist = yf.Ticker(yahoo_symbol).history(period=period, interval=interval)
        rows = []
        for row in _records(hist):
            rows.append({
                "date": row.get("Datetime", row.get("Date")),
                "open": row.get("Open"),
                "high": row.get("High"),
                "low": row.get("Low"),
                "close": row.get("Close"),
                "volume": row.get("Volume"),
            })
        return rows

    def _fetch_search(self, query: str) -> List[Dict[str, Any]]:
        return list(yf.Search(query, max_results=SEARCH_LIMIT * 2, news_count=0).quotes or [])

    def _fetch_earnings(self, yahoo_symbol: str, limit: int) -> List[Dict[str, Any]]:
        frame = yf.Ticker(yahoo_symbol).get_earnings_dates(limit=limit + 4)
        return [
            {
                "date": row.get("Earnings Date"),
                "estimate": row.get("EPS Estimate"),
                "reported": row.get("Reported EPS"),
            }
            for row in _records(frame)
        ]

    def _fetch_dividends(self, yahoo_symbol: str) -> List[Dict[str, Any]]:
        return [
            {"date": row.get("Date"), "amount": row.get("Dividends")}
            for row in _records(yf.Ticker(yahoo_symbol).dividends)
        ]

    def _fetch_insiders(self, yahoo_symbol: str) -> List[Dict[str, Any]]:
        return _records(yf.Ticker(yahoo_symbol).insider_transactions)

    def _fetch_institutions(self, yahoo_symbol: str) -> List[Dict[str, Any]]:
        return _records(yf.Ticker(yahoo_symbol).institutional_holders)

    # ------------------------------------------------------------------
    # Result-returning loaders
    # ------------------------------------------------------------------

    async def _call(self, func, *args) -> ServiceResult[Any]:
        try:
            return ServiceResult.success(await asyncio.to_thread(func, *args))
        except Exception as e:
            return ServiceResult.fail(classify_error(e), str(e))

    def _report(self, operation: str, symbol: str, result: ServiceResult) -> None:
        log_structured("provider_failure", {
            "provider": self.name,
            "operation": operation,
            "symbol": symbol,
            "reason": result.failure.value if result.failure else None,
            "detail": result.detail,
        }, level="WARNING")

    async def _load_info(self, symbol: str) -> ServiceResult[YahooQuoteInfo]:
        key = TTLCache.make_key("info", symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return ServiceResult.success(cached)
        if not validate_symbol(symbol):
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, f"malformed symbol {symbol!r}")

        raw = await self._call(self._fetch_info, to_yahoo_symbol(symbol))
        if not raw.ok:
            return raw
        try:
            info = YahooQuoteInfo.model_validate(raw.value or {})
        except ValidationError as e:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, str(e))
        if info.price is None:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, f"no price for {symbol}")

        self._cache.set(key, info)
        return ServiceResult.success(info)

    async def _load_quote(self, symbol: str) -> ServiceResult[Stock]:
        key = TTLCache.make_key("quote", symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return ServiceResult.success(cached)

        result = await self._load_info(symbol)
        if not result.ok:
            return result
        info = result.value
        stock = Stock(
            symbol=info.symbol or symbol,
            name=info.display_name or symbol,
            price=info.price or 0.0,
            change=info.regular_market_change or 0.0,
            change_percent=info.regular_market_change_percent or 0.0,
            volume=info.regular_market_volume or info.volume or 0,
            market_cap=info.market_cap or 0,
            sector=info.sector or "Unknown",
            exchange=info.exchange or "Unknown",
        )
        self._cache.set(key, stock)
        return ServiceResult.success(stock)

    async def _load_chart(self, symbol: str, range_: str) -> ServiceResult[List[ChartDataPoint]]:
        range_key = resolve_range(range_)
        key = TTLCache.make_key("chart", symbol, range_key)
        cached = self._cache.get(key)
        if cached is not None:
            return ServiceResult.success(cached)

        period, interval = CHART_RANGES[range_key]
        raw = await self._call(self._fetch_history, to_yahoo_symbol(symbol), period, interval)
        if not raw.ok:
            return raw

        bars = []
        for row in raw.value:
            if row.get("close") is None or pd.isna(row.get("close")):
                continue
            when = row.get("date")
            bars.append(ChartDataPoint(
                time=pd.Timestamp(when).isoformat() if when is not None else "",
                open=round(_num(row.get("open")), 2),
                high=round(_num(row.get("high")), 2),
                low=round(_num(row.get("low")), 2),
                close=round(_num(row.get("close")), 2),
                volume=int(_num(row.get("volume"))),
            ))
        self._cache.set(key, bars)
        return ServiceResult.success(bars)

    # ------------------------------------------------------------------
    # Provider interface
    # ------------------------------------------------------------------

    async def get_default_symbols(self) -> List[str]:
        return list(DEFAULT_SYMBOLS)

    async def get_sparkline(self, symbol: str) -> List[float]:
        """Last 12 closes of the 1M chart."""
        bars = await self.get_chart(symbol, "1M")
        return [bar.close for bar in bars[-SPARKLINE_POINTS:]]

    async def get_quote(self, symbol: str) -> Optional[Stock]:
        symbol = normalize_symbol(symbol)
        result, sparkline = await asyncio.gather(self._load_quote(symbol), self.get_sparkline(symbol))
        if not result.ok:
            self._report("quote", symbol, result)
            return None
        return result.value.model_copy(update={"sparkline_data": sparkline})

    async def get_multiple_quotes(self, symbols: List[str]) -> List[Stock]:
        quotes = await asyncio.gather(*(self.get_quote(s) for s in symbols))
        return [q for q in quotes if q is not None]

    async def get_trending_stocks(self) -> List[Stock]:
        return await self.get_multiple_quotes(TRENDING_SYMBOLS)

    async def search_stocks(self, query: str) -> List[Stock]:
        raw = await self._call(self._fetch_search, query.strip())
        if not raw.ok:
            self._report("search", query, raw)
            return []
        symbols = [
            q["symbol"] for q in raw.value
            if q.get("quoteType") == "EQUITY" and q.get("symbol")
        ][:SEARCH_LIMIT]
        if not symbols:
            return []
        return await self.get_multiple_quotes(symbols)

    async def get_chart(self, symbol: str, range_: str = DEFAULT_RANGE) -> List[ChartDataPoint]:
        symbol = normalize_symbol(symbol)
        result = await self._load_chart(symbol, range_)
        if not result.ok:
            self._report("chart", symbol, result)
            return []
        return result.value

    async def get_fundamentals(self, symbol: str) -> Optional[StockFundamentals]:
        symbol = normalize_symbol(symbol)
        key = TTLCache.make_key("fundamentals", symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = await self._load_info(symbol)
        if not result.ok:
            self._report("fundamentals", symbol, result)
            return None
        fundamentals = self._to_fundamentals(symbol, result.value)
        self._cache.set(key, fundamentals)
        return fundamentals

    def _to_fundamentals(self, symbol: str, info: YahooQuoteInfo) -> StockFundamentals:
        return StockFundamentals(
            symbol=info.symbol or symbol,
            name=info.display_name or symbol,
            description=info.long_business_summary or "",
            sector=info.sector or "Unknown",
            industry=info.industry or "Unknown",
            exchange=info.exchange or "Unknown",
            currency=info.currency or "USD",
            country=info.country or "Unknown",
            website=info.website or "",
            employees=info.full_time_employees or 0,
            ceo=info.ceo,
            price=info.price or 0.0,
            change=info.regular_market_change or 0.0,
            change_percent=info.regular_market_change_percent or 0.0,
            previous_close=info.regular_market_previous_close or info.previous_close or 0.0,
            open=info.regular_market_open or 0.0,
            day_high=info.regular_market_day_high or 0.0,
            day_low=info.regular_market_day_low or 0.0,
            fifty_two_week_high=info.fifty_two_week_high or 0.0,
            fifty_two_week_low=info.fifty_two_week_low or 0.0,
            fifty_two_week_change=_pct(info.fifty_two_week_change),
            volume=info.regular_market_volume or info.volume or 0,
            avg_volume=info.average_daily_volume_3_month or 0,
            avg_volume_10_day=info.average_daily_volume_10_day or 0,
            market_cap=info.market_cap or 0,
            shares_outstanding=info.shares_outstanding or 0,
            shares_float=info.float_shares or 0,
            shares_short=info.shares_short or 0,
            short_ratio=info.short_ratio or 0.0,
            pe_ratio=info.trailing_pe or 0.0,
            forward_pe=info.forward_pe or 0.0,
            peg_ratio=info.trailing_peg_ratio or 0.0,
            price_to_sales=info.price_to_sales_trailing_12_months or 0.0,
            price_to_book=info.price_to_book or 0.0,
            enterprise_value=info.enterprise_value or 0,
            ev_to_revenue=info.enterprise_to_revenue or 0.0,
            ev_to_ebitda=info.enterprise_to_ebitda or 0.0,
            profit_margin=_pct(info.profit_margins),
            operating_margin=_pct(info.operating_margins),
            gross_margin=_pct(info.gross_margins),
            return_on_assets=_pct(info.return_on_assets),
            return_on_equity=_pct(info.return_on_equity),
            revenue=info.total_revenue or 0,
            revenue_per_share=info.revenue_per_share or 0.0,
            revenue_growth=_pct(info.revenue_growth),
            gross_profit=info.gross_profits or 0,
            ebitda=info.ebitda or 0,
            net_income=info.net_income_to_common or 0,
            eps=info.trailing_eps or 0.0,
            eps_growth=_pct(info.earnings_quarterly_growth),
            total_cash=info.total_cash or 0,
            total_debt=info.total_debt or 0,
            debt_to_equity=info.debt_to_equity or 0.0,
            current_ratio=info.current_ratio or 0.0,
            quick_ratio=info.quick_ratio or 0.0,
            book_value=info.book_value or 0.0,
            dividend_rate=info.trailing_annual_dividend_rate or 0.0,
            dividend_yield=_pct(info.trailing_annual_dividend_yield),
            payout_ratio=_pct(info.payout_ratio),
            ex_dividend_date=_date_str(info.ex_dividend_date) or None,
            dividend_date=None,
            five_year_dividend_yield=info.five_year_avg_dividend_yield or 0.0,
            beta=info.beta or 0.0,
            fifty_day_ma=info.fifty_day_average or 0.0,
            two_hundred_day_ma=info.two_hundred_day_average or 0.0,
            target_high_price=info.target_high_price or 0.0,
            target_low_price=info.target_low_price or 0.0,
            target_mean_price=info.target_mean_price or 0.0,
            target_median_price=info.target_median_price or 0.0,
            recommendation_mean=info.recommendation_mean or 0.0,
            recommendation_key=info.recommendation_key or "hold",
            number_of_analysts=info.number_of_analyst_opinions or 0,
            institutional_ownership=_pct(info.held_percent_institutions),
            insider_ownership=_pct(info.held_percent_insiders),
            earnings_date=None,
            earnings_quarterly_growth=_pct(info.earnings_quarterly_growth),
            last_updated=datetime.now(timezone.utc).isoformat(),
        )

    async def _known(self, symbol: str) -> bool:
        result = await self._load_info(symbol)
        if not result.ok:
            self._report("lookup", symbol, result)
        return result.ok

    async def _load_rows(self, operation: str, symbol: str, func, *args) -> List[Dict[str, Any]]:
        key = TTLCache.make_key(operation, symbol, ":".join(str(a) for a in args) or None)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        raw = await self._call(func, to_yahoo_symbol(symbol), *args)
        if not raw.ok:
            self._report(operation, symbol, raw)
            return []
        self._cache.set(key, raw.value)
        return raw.value

    async def get_earnings(self, symbol: str, quarters: int = 8) -> Optional[List[EarningsData]]:
        symbol = normalize_symbol(symbol)
        if not await self._known(symbol):
            return None

        rows = await self._load_rows("earnings", symbol, self._fetch_earnings, quarters)
        results = []
        for row in rows:
            reported = row.get("reported")
            if reported is None or pd.isna(reported):
                continue  # upcoming report
            stamp = pd.Timestamp(row.get("date"))
            estimate = _num(row.get("estimate"))
            actual = _num(reported)
            surprise = actual - estimate
            results.append(EarningsData(
                symbol=symbol,
                quarter=f"Q{(stamp.month - 1) // 3 + 1} {stamp.year}",
                date=stamp.date().isoformat(),
                actual_eps=round(actual, 2),
                estimated_eps=round(estimate, 2),
                surprise=round(surprise, 2),
                surprise_percent=round(surprise / abs(estimate) * 100, 2) if estimate else 0.0,
                revenue=0,
                estimated_revenue=0,
            ))
        results.sort(key=lambda e: e.date, reverse=True)
        return results[:quarters]

    async def get_dividends(self, symbol: str, count: int = 8) -> Optional[List[DividendHistory]]:
        symbol = normalize_symbol(symbol)
        if not await self._known(symbol):
            return None

        rows = await self._load_rows("dividends", symbol, self._fetch_dividends)
        results = [
            DividendHistory(symbol=symbol, date=_date_str(row.get("date")),
                            amount=round(_num(row.get("amount")), 4), type="cash")
            for row in rows
        ]
        results.sort(key=lambda d: d.date, reverse=True)
        return results[:count]

    async def get_insider_transactions(self, symbol: str, count: int = 10) -> Optional[List[InsiderTransaction]]:
        symbol = normalize_symbol(symbol)
        if not await self._known(symbol):
            return None

        rows = await self._load_rows("insiders", symbol, self._fetch_insiders)
        results = []
        for row in rows:
            text = f"{row.get('Transaction') or ''} {row.get('Text') or ''}".lower()
            shares = int(_num(row.get("Shares")))
            value = int(_num(row.get("Value")))
            results.append(InsiderTransaction(
                symbol=symbol,
                name=str(row.get("Insider") or ""),
                title=str(row.get("Position") or ""),
                transaction_date=_date_str(row.get("Start Date")),
                transaction_type="sell" if ("sale" in text or "sell" in text) else "buy",
                shares=shares,
                price=round(value / shares, 2) if shares else 0.0,
                value=value,
            ))
        results.sort(key=lambda t: t.transaction_date, reverse=True)
        return results[:count]

    async def get_institutional_holders(self, symbol: str) -> Optional[List[InstitutionalHolder]]:
        symbol = normalize_symbol(symbol)
        if not await self._known(symbol):
            return None

        rows = await self._load_rows("institutions", symbol, self._fetch_institutions)
        results = [
            InstitutionalHolder(
                symbol=symbol,
                holder=str(row.get("Holder") or ""),
                shares=int(_num(row.get("Shares"))),
                date_reported=_date_str(row.get("Date Reported")),
                percent_held=round(_pct(_num(row.get("pctHeld"))), 2),
                value=int(_num(row.get("Value"))),
            )
            for row in rows
        ]
        results.sort(key=lambda h: h.percent_held, reverse=True)
        return results[:10]

    async def _index_quote(self, yahoo_symbol: str, name: str) -> MarketIndex:
        result = await self._load_info(yahoo_symbol)
        display = yahoo_symbol.replace("^", "")
        if not result.ok:
            self._report("index", yahoo_symbol, result)
            return MarketIndex(symbol=display, name=name, value=0, change=0, change_percent=0)
        info = result.value
        return MarketIndex(
            symbol=display,
            name=name,
            value=info.price or 0.0,
            change=info.regular_market_change or 0.0,
            change_percent=info.regular_market_change_percent or 0.0,
        )

    async def get_indices(self) -> List[MarketIndex]:
        """Failed indices are zero-filled rather than dropped."""
        key = TTLCache.make_key("indices")
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        indices = list(await asyncio.gather(*(self._index_quote(s, n) for s, n in INDEX_SYMBOLS)))
        self._cache.set(key, indices)
        return indices

    async def get_sector_performance(self) -> List[SectorPerformance]:
        """Aggregate trending quotes by their reported sector."""
        quotes = await self.get_trending_stocks()
        groups: Dict[str, List[Stock]] = {}
        for quote in quotes:
            groups.setdefault(quote.sector, []).append(quote)

        return [
            SectorPerformance(
                sector=sector,
                change=round(sum(q.change for q in members) / len(members), 2),
                change_percent=round(sum(q.change_percent for q in members) / len(members), 2),
                market_cap=sum(q.market_cap for q in members),
                volume=sum(q.volume for q in members),
            )
            for sector, members in groups.items()
        ]
