# marketdash/market_data/synthetic.py
"""
Synthetic market data generator.

Every function takes an injectable random.Random so tests can seed it.
Values are illustrative only and re-randomized on every call.
"""
import math
import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .catalog import (
    CatalogStock,
    INDICES,
    INSIDER_FIRST_NAMES,
    INSIDER_LAST_NAMES,
    INSIDER_ROLES,
    INSTITUTION_POOL,
    NON_DIVIDEND_SECTORS,
    SECTOR_INDUSTRIES,
    STOCKS,
    find_stock,
    sectors,
)
from .types import (
    DividendHistory,
    EarningsData,
    InsiderTransaction,
    InstitutionalHolder,
    MarketIndex,
    SectorPerformance,
    Stock,
    StockFundamentals,
)

STOCK_VOLATILITY = 0.03
INDEX_VOLATILITY = 0.015
SPARKLINE_POINTS = 12


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def generate_random_change(base: float, volatility: float, rng: random.Random):
    """Return (value, change, change_percent) for a move of at most +/- volatility."""
    change_percent = (rng.random() - 0.5) * 2 * volatility * 100
    change = base * (change_percent / 100)
    value = base + change
    return round(value, 2), round(change, 2), round(change_percent, 2)


def generate_sparkline(base_price: float, rng: random.Random, points: int = SPARKLINE_POINTS) -> List[float]:
    data = []
    current = base_price * 0.98
    for _ in range(points):
        current = current + (rng.random() - 0.5) * (base_price * 0.02)
        data.append(round(current, 2))
    return data


def generate_quote(stock: CatalogStock, rng: random.Random) -> Stock:
    price, change, change_percent = generate_random_change(stock.base_price, STOCK_VOLATILITY, rng)
    market_cap_multiplier = rng.uniform(100, 1000)
    return Stock(
        symbol=stock.symbol,
        name=stock.name,
        price=price,
        change=change,
        change_percent=change_percent,
        volume=rng.randrange(1_000_000, 51_000_000),
        market_cap=math.floor(stock.base_price * market_cap_multiplier * 1_000_000),
        sector=stock.sector,
        exchange=stock.exchange,
        sparkline_data=generate_sparkline(stock.base_price, rng),
    )


def get_stocks(rng: random.Random) -> List[Stock]:
    """A fresh quote for every catalog stock."""
    return [generate_quote(stock, rng) for stock in STOCKS]


def get_stock_by_symbol(symbol: str, rng: random.Random) -> Optional[Stock]:
    stock = find_stock(symbol)
    if stock is None:
        return None
    return generate_quote(stock, rng)


def get_multiple_quotes(symbols: List[str], rng: random.Random) -> List[Stock]:
    """Quotes for the known symbols, in request order. Unknown symbols are dropped."""
    quotes = []
    for symbol in symbols:
        quote = get_stock_by_symbol(symbol, rng)
        if quote is not None:
            quotes.append(quote)
    return quotes


def get_market_indices(rng: random.Random) -> List[MarketIndex]:
    indices = []
    for index in INDICES:
        value, change, change_percent = generate_random_change(index.base_value, INDEX_VOLATILITY, rng)
        indices.append(MarketIndex(
            symbol=index.symbol,
            name=index.name,
            value=value,
            change=change,
            change_percent=change_percent,
        ))
    return indices


def search_stocks(query: str, rng: random.Random) -> List[Stock]:
    """Case-insensitive substring match over symbol, name and sector."""
    needle = query.strip().lower()
    matches = [
        stock for stock in STOCKS
        if needle in stock.symbol.lower()
        or needle in stock.name.lower()
        or needle in stock.sector.lower()
    ]
    return [generate_quote(stock, rng) for stock in matches]


def _recommendation_key(mean: float) -> str:
    if mean <= 1.5:
        return "strong_buy"
    if mean <= 2.5:
        return "buy"
    if mean <= 3.5:
        return "hold"
    if mean <= 4.5:
        return "sell"
    return "strong_sell"


def _website(name: str) -> str:
    slug = "".join(ch for ch in name.split()[0].lower() if ch.isalnum())
    return f"https://www.{slug}.com"


def get_fundamentals(symbol: str, rng: random.Random, now: Optional[datetime] = None) -> Optional[StockFundamentals]:
    """
    Fundamentals derived from the base price and a freshly generated quote.

    All figures are non-negative except change, change_percent, eps and the
    growth percentages (revenue_growth, eps_growth, earnings_quarterly_growth,
    fifty_two_week_change).
    """
    stock = find_stock(symbol)
    if stock is None:
        return None

    now = _now(now)
    quote = generate_quote(stock, rng)
    price = quote.price

    # Price
    previous_close = round(max(price - quote.change, 0.01), 2)
    day_open = round(previous_close * (1 + rng.uniform(-0.01, 0.01)), 2)
    day_high = round(max(price, day_open) * (1 + rng.uniform(0, 0.015)), 2)
    day_low = round(min(price, day_open) * (1 - rng.uniform(0, 0.015)), 2)

    # Per-share earnings, positive 80% of the time
    eps_magnitude = rng.uniform(1, 11)
    eps = round(eps_magnitude if rng.random() < 0.8 else -eps_magnitude, 2)
    pe_ratio = round(price / eps, 2) if eps > 0 else 0.0

    shares_outstanding = int(quote.market_cap / price) if price > 0 else 0
    shares_float = int(shares_outstanding * rng.uniform(0.85, 0.99))

    price_to_sales = rng.uniform(1, 15)
    revenue = int(quote.market_cap / price_to_sales)
    enterprise_value = int(quote.market_cap * rng.uniform(0.95, 1.15))
    ebitda = int(revenue * rng.uniform(0.1, 0.4))

    gross_margin = rng.uniform(30, 70)
    operating_margin = gross_margin * rng.uniform(0.3, 0.7)
    profit_margin = operating_margin * rng.uniform(0.5, 0.9)

    current_ratio = rng.uniform(0.8, 3.0)
    price_to_book = rng.uniform(1, 20)

    pays_dividend = stock.sector not in NON_DIVIDEND_SECTORS
    dividend_yield = rng.uniform(0.3, 4.0) if pays_dividend else 0.0
    ex_dividend = now + timedelta(days=rng.randint(5, 60))

    target_mean = price * rng.uniform(1.0, 1.25)
    recommendation_mean = rng.uniform(1.5, 3.5)

    return StockFundamentals(
        symbol=stock.symbol,
        name=stock.name,
        description=(
            f"{stock.name} is a {stock.sector.lower()} company listed on the {stock.exchange}. "
            "Figures shown are simulated for illustration."
        ),
        sector=stock.sector,
        industry=SECTOR_INDUSTRIES.get(stock.sector, "Unknown"),
        exchange=stock.exchange,
        currency="USD",
        country="United States",
        website=_website(stock.name),
        employees=rng.randint(5_000, 200_000),
        ceo="",
        price=price,
        change=quote.change,
        change_percent=quote.change_percent,
        previous_close=previous_close,
        open=day_open,
        day_high=day_high,
        day_low=day_low,
        fifty_two_week_high=round(price * rng.uniform(1.05, 1.4), 2),
        fifty_two_week_low=round(price * rng.uniform(0.6, 0.95), 2),
        fifty_two_week_change=round(rng.uniform(-30, 60), 2),
        volume=quote.volume,
        avg_volume=int(quote.volume * rng.uniform(0.8, 1.2)),
        avg_volume_10_day=int(quote.volume * rng.uniform(0.8, 1.2)),
        market_cap=quote.market_cap,
        shares_outstanding=shares_outstanding,
        shares_float=shares_float,
        shares_short=int(shares_float * rng.uniform(0.005, 0.05)),
        short_ratio=round(rng.uniform(0.5, 6), 2),
        pe_ratio=pe_ratio,
        forward_pe=round(pe_ratio * rng.uniform(0.75, 0.95), 2) if pe_ratio > 0 else 0.0,
        peg_ratio=round(rng.uniform(0.5, 3), 2),
        price_to_sales=round(price_to_sales, 2),
        price_to_book=round(price_to_book, 2),
        enterprise_value=enterprise_value,
        ev_to_revenue=round(enterprise_value / revenue, 2) if revenue else 0.0,
        ev_to_ebitda=round(enterprise_value / ebitda, 2) if ebitda else 0.0,
        profit_margin=round(profit_margin, 2),
        operating_margin=round(operating_margin, 2),
        gross_margin=round(gross_margin, 2),
        return_on_assets=round(rng.uniform(2, 20), 2),
        return_on_equity=round(rng.uniform(5, 45), 2),
        revenue=revenue,
        revenue_per_share=round(revenue / shares_outstanding, 2) if shares_outstanding else 0.0,
        revenue_growth=round(rng.uniform(-10, 30), 2),
        gross_profit=int(revenue * gross_margin / 100),
        ebitda=ebitda,
        net_income=int(revenue * profit_margin / 100),
        eps=eps,
        eps_growth=round(rng.uniform(-20, 40), 2),
        total_cash=int(quote.market_cap * rng.uniform(0.02, 0.15)),
        total_debt=int(quote.market_cap * rng.uniform(0.01, 0.2)),
        debt_to_equity=round(rng.uniform(10, 200), 2),
        current_ratio=round(current_ratio, 2),
        quick_ratio=round(current_ratio * rng.uniform(0.6, 0.95), 2),
        book_value=round(price / price_to_book, 2),
        dividend_rate=round(price * dividend_yield / 100, 2),
        dividend_yield=round(dividend_yield, 2),
        payout_ratio=round(rng.uniform(10, 70), 2) if pays_dividend else 0.0,
        ex_dividend_date=ex_dividend.date().isoformat() if pays_dividend else None,
        dividend_date=(ex_dividend + timedelta(days=14)).date().isoformat() if pays_dividend else None,
        five_year_dividend_yield=round(dividend_yield * rng.uniform(0.8, 1.2), 2),
        beta=round(rng.uniform(0.5, 2.0), 2),
        fifty_day_ma=round(price * rng.uniform(0.92, 1.08), 2),
        two_hundred_day_ma=round(price * rng.uniform(0.85, 1.15), 2),
        target_high_price=round(target_mean * rng.uniform(1.1, 1.3), 2),
        target_low_price=round(target_mean * rng.uniform(0.7, 0.9), 2),
        target_mean_price=round(target_mean, 2),
        target_median_price=round(target_mean * rng.uniform(0.97, 1.03), 2),
        recommendation_mean=round(recommendation_mean, 2),
        recommendation_key=_recommendation_key(recommendation_mean),
        number_of_analysts=rng.randint(10, 50),
        institutional_ownership=round(rng.uniform(50, 85), 2),
        insider_ownership=round(rng.uniform(0.1, 5), 2),
        earnings_date=(now + timedelta(days=rng.randint(10, 90))).date().isoformat(),
        earnings_quarterly_growth=round(rng.uniform(-15, 40), 2),
        last_updated=now.isoformat(),
    )


def _last_completed_quarter(now: datetime):
    """(year, quarter) of the most recently completed calendar quarter."""
    quarter = (now.month - 1) // 3  # 0 means the previous year's Q4
    if quarter == 0:
        return now.year - 1, 4
    return now.year, quarter


def _quarter_end(year: int, quarter: int) -> datetime:
    month = quarter * 3
    next_month_start = datetime(year + (month // 12), month % 12 + 1, 1, tzinfo=timezone.utc)
    return next_month_start - timedelta(days=1)


def get_earnings(symbol: str, rng: random.Random, quarters: int = 8,
                 now: Optional[datetime] = None) -> Optional[List[EarningsData]]:
    """Most recent quarters first."""
    stock = find_stock(symbol)
    if stock is None:
        return None

    year, quarter = _last_completed_quarter(_now(now))
    revenue_base = stock.base_price * rng.uniform(50, 300) * 1_000_000
    results = []
    for _ in range(quarters):
        estimated_eps = stock.base_price / 100 * rng.uniform(0.5, 2.5)
        actual_eps = estimated_eps * (1 + rng.uniform(-0.15, 0.2))
        surprise = actual_eps - estimated_eps
        estimated_revenue = revenue_base * rng.uniform(0.9, 1.1)
        revenue = estimated_revenue * (1 + rng.uniform(-0.05, 0.08))
        reported = _quarter_end(year, quarter) + timedelta(days=rng.randint(20, 35))

        results.append(EarningsData(
            symbol=stock.symbol,
            quarter=f"Q{quarter} {year}",
            date=reported.date().isoformat(),
            actual_eps=round(actual_eps, 2),
            estimated_eps=round(estimated_eps, 2),
            surprise=round(surprise, 2),
            surprise_percent=round(surprise / estimated_eps * 100, 2),
            revenue=int(revenue),
            estimated_revenue=int(estimated_revenue),
        ))

        quarter -= 1
        if quarter == 0:
            year, quarter = year - 1, 4
    return results


def get_dividends(symbol: str, rng: random.Random, count: int = 8,
                  now: Optional[datetime] = None) -> Optional[List[DividendHistory]]:
    """Quarterly cash dividends, newest first. Non-dividend sectors return []."""
    stock = find_stock(symbol)
    if stock is None:
        return None
    if stock.sector in NON_DIVIDEND_SECTORS:
        return []

    paid = _now(now) - timedelta(days=rng.randint(1, 90))
    amount = stock.base_price * rng.uniform(0.002, 0.008)
    results = []
    for _ in range(count):
        results.append(DividendHistory(
            symbol=stock.symbol,
            date=paid.date().isoformat(),
            amount=round(amount, 2),
            type="cash",
        ))
        paid -= timedelta(days=91)
        # Older payouts were slightly smaller
        amount = amount / (1 + rng.uniform(0, 0.03))
    return results


def get_insider_transactions(symbol: str, rng: random.Random, count: int = 10,
                             now: Optional[datetime] = None) -> Optional[List[InsiderTransaction]]:
    """Newest first."""
    stock = find_stock(symbol)
    if stock is None:
        return None

    when = _now(now)
    results = []
    for _ in range(count):
        when -= timedelta(days=rng.randint(1, 20))
        shares = rng.randint(1_000, 100_000)
        price = round(stock.base_price * rng.uniform(0.9, 1.1), 2)
        results.append(InsiderTransaction(
            symbol=stock.symbol,
            name=f"{rng.choice(INSIDER_FIRST_NAMES)} {rng.choice(INSIDER_LAST_NAMES)}",
            title=rng.choice(INSIDER_ROLES),
            transaction_date=when.date().isoformat(),
            transaction_type="buy" if rng.random() < 0.3 else "sell",
            shares=shares,
            price=price,
            value=int(shares * price),
        ))
    return results


def get_institutional_holders(symbol: str, rng: random.Random,
                              now: Optional[datetime] = None) -> Optional[List[InstitutionalHolder]]:
    """Top 10 holders from the fixed pool, highest percent held first."""
    stock = find_stock(symbol)
    if stock is None:
        return None

    market_cap = math.floor(stock.base_price * rng.uniform(100, 1000) * 1_000_000)
    shares_outstanding = market_cap / stock.base_price
    year, quarter = _last_completed_quarter(_now(now))
    reported = _quarter_end(year, quarter).date().isoformat()

    results = []
    for holder in rng.sample(INSTITUTION_POOL, 10):
        percent_held = rng.uniform(0.5, 9.0)
        shares = int(shares_outstanding * percent_held / 100)
        results.append(InstitutionalHolder(
            symbol=stock.symbol,
            holder=holder,
            shares=shares,
            date_reported=reported,
            percent_held=round(percent_held, 2),
            value=int(shares * stock.base_price),
        ))
    results.sort(key=lambda h: h.percent_held, reverse=True)
    return results


def get_sector_performance(rng: random.Random) -> List[SectorPerformance]:
    """One row per catalog sector."""
    results = []
    for sector in sectors():
        quotes = [generate_quote(stock, rng) for stock in STOCKS if stock.sector == sector]
        avg_price = sum(q.price for q in quotes) / len(quotes)
        change_percent = (rng.random() - 0.5) * 2 * 0.02 * 100
        results.append(SectorPerformance(
            sector=sector,
            change=round(avg_price * change_percent / 100, 2),
            change_percent=round(change_percent, 2),
            market_cap=sum(q.market_cap for q in quotes),
            volume=sum(q.volume for q in quotes),
        ))
    return results
