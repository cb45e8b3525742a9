# marketdash/market_data/adapters/yahoo_models.py
"""
Typed views over raw Yahoo Finance payloads.

Raw `Ticker.info` dictionaries are parsed once, at the adapter boundary.
Unknown keys are ignored and non-finite numbers become None.
"""
import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class YahooQuoteInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    symbol: Optional[str] = None
    short_name: Optional[str] = None
    long_name: Optional[str] = None
    long_business_summary: Optional[str] = None
    sector: Optional[str] = None
    industry: Optional[str] = None
    exchange: Optional[str] = None
    currency: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None
    full_time_employees: Optional[int] = None
    company_officers: List[Dict[str, Any]] = Field(default_factory=list)

    regular_market_price: Optional[float] = None
    current_price: Optional[float] = None
    regular_market_change: Optional[float] = None
    regular_market_change_percent: Optional[float] = None
    regular_market_previous_close: Optional[float] = None
    previous_close: Optional[float] = None
    regular_market_open: Optional[float] = None
    regular_market_day_high: Optional[float] = None
    regular_market_day_low: Optional[float] = None
    regular_market_volume: Optional[int] = None
    volume: Optional[int] = None
    average_daily_volume_3_month: Optional[int] = None
    average_daily_volume_10_day: Optional[int] = None
    market_cap: Optional[int] = None

    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    fifty_two_week_change: Optional[float] = Field(default=None, alias="52WeekChange")

    shares_outstanding: Optional[int] = None
    float_shares: Optional[int] = None
    shares_short: Optional[int] = None
    short_ratio: Optional[float] = None

    trailing_pe: Optional[float] = Field(default=None, alias="trailingPE")
    forward_pe: Optional[float] = Field(default=None, alias="forwardPE")
    trailing_peg_ratio: Optional[float] = None
    price_to_sales_trailing_12_months: Optional[float] = None
    price_to_book: Optional[float] = None
    enterprise_value: Optional[int] = None
    enterprise_to_revenue: Optional[float] = None
    enterprise_to_ebitda: Optional[float] = None

    profit_margins: Optional[float] = None
    operating_margins: Optional[float] = None
    gross_margins: Optional[float] = None
    return_on_assets: Optional[float] = None
    return_on_equity: Optional[float] = None

    total_revenue: Optional[int] = None
    revenue_per_share: Optional[float] = None
    revenue_growth: Optional[float] = None
    gross_profits: Optional[int] = None
    ebitda: Optional[int] = None
    net_income_to_common: Optional[int] = None
    trailing_eps: Optional[float] = None
    earnings_quarterly_growth: Optional[float] = None

    total_cash: Optional[int] = None
    total_debt: Optional[int] = None
    debt_to_equity: Optional[float] = None
    current_ratio: Optional[float] = None
    quick_ratio: Optional[float] = None
    book_value: Optional[float] = None

    trailing_annual_dividend_rate: Optional[float] = None
    trailing_annual_dividend_yield: Optional[float] = None
    payout_ratio: Optional[float] = None
    ex_dividend_date: Optional[int] = None
    five_year_avg_dividend_yield: Optional[float] = None

    beta: Optional[float] = None
    fifty_day_average: Optional[float] = None
    two_hundred_day_average: Optional[float] = None

    target_high_price: Optional[float] = None
    target_low_price: Optional[float] = None
    target_mean_price: Optional[float] = None
    target_median_price: Optional[float] = None
    recommendation_mean: Optional[float] = None
    recommendation_key: Optional[str] = None
    number_of_analyst_opinions: Optional[int] = None

    held_percent_institutions: Optional[float] = None
    held_percent_insiders: Optional[float] = None

    @field_validator("*", mode="before")
    @classmethod
    def _drop_non_finite(cls, value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if isinstance(value, str) and value.strip().lower() in ("infinity", "-infinity", "nan", ""):
            return None
        return value

    @field_validator(
        "full_time_employees", "regular_market_volume", "volume", "average_daily_volume_3_month",
        "average_daily_volume_10_day", "market_cap", "shares_outstanding", "float_shares",
        "shares_short", "enterprise_value", "total_revenue", "gross_profits", "ebitda",
        "net_income_to_common", "total_cash", "total_debt", "ex_dividend_date", "number_of_analyst_opinions",
        mode="before",
    )
    @classmethod
    def _whole_number(cls, value):
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return value

    @property
    def price(self) -> Optional[float]:
        if self.regular_market_price is not None:
            return self.regular_market_price
        return self.current_price

    @property
    def display_name(self) -> Optional[str]:
        return self.short_name or self.long_name

    @property
    def ceo(self) -> str:
        for officer in self.company_officers:
            title = str(officer.get("title", ""))
            if "CEO" in title or "Chief Executive" in title:
                return str(officer.get("name", ""))
        return ""
