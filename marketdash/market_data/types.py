# marketdash/market_data/types.py
"""
Type definitions for market data.

Attributes are snake_case; the JSON wire format is camelCase.
"""
from typing import Optional, List, Literal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases, accepting either spelling on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Stock(CamelModel):
    """Quote snapshot for a tradeable symbol."""
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: int
    market_cap: int
    sector: str
    exchange: str
    sparkline_data: List[float] = Field(default_factory=list)


class MarketIndex(CamelModel):
    symbol: str
    name: str
    value: float
    change: float
    change_percent: float


class ChartDataPoint(CamelModel):
    """OHLCV bar. low <= min(open, close) and high >= max(open, close)."""
    time: str
    open: float
    high: float
    low: float
    close: float
    volume: int


class StockFundamentals(CamelModel):
    """Extended per-symbol financial, valuation and ownership metrics."""
    symbol: str
    name: str
    description: str = ""
    sector: str = "Unknown"
    industry: str = "Unknown"
    exchange: str = "Unknown"
    currency: str = "USD"
    country: str = "Unknown"
    website: str = ""
    employees: int = 0
    ceo: str = ""

    # Price
    price: float = 0.0
    change: float = 0.0
    change_percent: float = 0.0
    previous_close: float = 0.0
    open: float = 0.0
    day_high: float = 0.0
    day_low: float = 0.0

    # 52 week
    fifty_two_week_high: float = 0.0
    fifty_two_week_low: float = 0.0
    fifty_two_week_change: float = 0.0

    # Volume
    volume: int = 0
    avg_volume: int = 0
    avg_volume_10_day: int = 0

    # Shares
    market_cap: int = 0
    shares_outstanding: int = 0
    shares_float: int = 0
    shares_short: int = 0
    short_ratio: float = 0.0

    # Valuation
    pe_ratio: float = 0.0
    forward_pe: float = Field(default=0.0, alias="forwardPE")
    peg_ratio: float = 0.0
    price_to_sales: float = 0.0
    price_to_book: float = 0.0
    enterprise_value: int = 0
    ev_to_revenue: float = 0.0
    ev_to_ebitda: float = 0.0

    # Profitability (percent)
    profit_margin: float = 0.0
    operating_margin: float = 0.0
    gross_margin: float = 0.0
    return_on_assets: float = 0.0
    return_on_equity: float = 0.0

    # Income
    revenue: int = 0
    revenue_per_share: float = 0.0
    revenue_growth: float = 0.0
    gross_profit: int = 0
    ebitda: int = 0
    net_income: int = 0
    eps: float = 0.0
    eps_growth: float = 0.0

    # Balance sheet
    total_cash: int = 0
    total_debt: int = 0
    debt_to_equity: float = 0.0
    current_ratio: float = 0.0
    quick_ratio: float = 0.0
    book_value: float = 0.0

    # Dividends
    dividend_rate: float = 0.0
    dividend_yield: float = 0.0
    payout_ratio: float = 0.0
    ex_dividend_date: Optional[str] = None
    dividend_date: Optional[str] = None
    five_year_dividend_yield: float = 0.0

    # Technicals
    beta: float = 0.0
    fifty_day_ma: float = Field(default=0.0, alias="fiftyDayMA")
    two_hundred_day_ma: float = Field(default=0.0, alias="twoHundredDayMA")

    # Analyst targets
    target_high_price: float = 0.0
    target_low_price: float = 0.0
    target_mean_price: float = 0.0
    target_median_price: float = 0.0
    recommendation_mean: float = 0.0
    recommendation_key: str = "hold"
    number_of_analysts: int = 0

    # Ownership (percent)
    institutional_ownership: float = 0.0
    insider_ownership: float = 0.0

    # Earnings
    earnings_date: Optional[str] = None
    earnings_quarterly_growth: float = 0.0

    last_updated: str = ""


class EarningsData(CamelModel):
    symbol: str
    quarter: str
    date: str
    actual_eps: float = Field(alias="actualEPS")
    estimated_eps: float = Field(alias="estimatedEPS")
    surprise: float
    surprise_percent: float
    revenue: int
    estimated_revenue: int


class DividendHistory(CamelModel):
    symbol: str
    date: str
    amount: float
    type: str = "cash"


class InsiderTransaction(CamelModel):
    symbol: str
    name: str
    title: str
    transaction_date: str
    transaction_type: Literal["buy", "sell"]
    shares: int
    price: float
    value: int


class InstitutionalHolder(CamelModel):
    symbol: str
    holder: str
    shares: int
    date_reported: str
    percent_held: float
    value: int


class SectorPerformance(CamelModel):
    sector: str
    change: float
    change_percent: float
    market_cap: int
    volume: int


class NewsArticle(CamelModel):
    id: str
    title: str
    source: str
    timestamp: str
    summary: str
    sentiment: Literal["positive", "negative", "neutral"]
    sentiment_score: float
    url: str
    related_symbols: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None


class AIPrediction(CamelModel):
    symbol: str
    current_price: float
    predicted_price: float
    predicted_change: float
    confidence: int
    timeframe: str = "7 Days"
    reasoning: List[str] = Field(default_factory=list)
    last_updated: str
    sentiment: Literal["bullish", "bearish", "neutral"]


Recommendation = Literal["strong_buy", "buy", "hold", "sell", "strong_sell"]


class AIAnalysis(CamelModel):
    symbol: str
    summary: str
    technical_analysis: str
    fundamental_analysis: str
    risks: List[str] = Field(default_factory=list)
    opportunities: List[str] = Field(default_factory=list)
    recommendation: Recommendation
    confidence_score: int
    last_updated: str


class SentimentResult(CamelModel):
    sentiment: Literal["positive", "negative", "neutral"]
    score: float
    model: Optional[str] = None
    text: Optional[str] = None


class MarketDataError(Exception):
    """Custom exception for market data errors."""
    def __init__(self, message: str, symbol: Optional[str] = None):
        self.message = message
        self.symbol = symbol
        super().__init__(self.message)
