# marketdash/services/heuristics.py
"""
Local fallbacks used when an AI service is unavailable or misbehaves.
"""
import random
from datetime import datetime, timezone
from typing import Optional

from ..market_data.types import AIAnalysis, AIPrediction, SentimentResult, Stock, StockFundamentals

BULLISH_REASONS = [
    "Strong recent momentum suggests continued upward movement",
    "Sector performance has been positive this quarter",
    "Technical indicators show bullish patterns",
    "Volume trends suggest institutional buying interest",
]

BEARISH_REASONS = [
    "Recent price action shows signs of weakness",
    "Market volatility may pressure the stock",
    "Technical resistance levels may limit upside",
    "Sector rotation could affect near-term performance",
]

NEUTRAL_REASONS = [
    "Price appears to be consolidating at current levels",
    "Mixed market signals suggest sideways movement",
    "Awaiting upcoming earnings for clearer direction",
    "Current valuation appears fairly priced",
]

POSITIVE_WORDS = [
    "growth", "profit", "beat", "surge", "gain", "rise", "strong", "positive",
    "upgrade", "outperform", "bullish", "record", "success",
]

NEGATIVE_WORDS = [
    "loss", "drop", "fall", "decline", "miss", "weak", "negative",
    "downgrade", "underperform", "bearish", "concern", "risk", "cut",
]

FALLBACK_ANALYSIS_CONFIDENCE = 70


def format_market_cap(value: float) -> str:
    if value >= 1e12:
        return f"{value / 1e12:.2f}T"
    if value >= 1e9:
        return f"{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{value / 1e6:.2f}M"
    return f"{value:,.0f}"


def format_volume(value: float) -> str:
    if value >= 1e9:
        return f"{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{value / 1e6:.2f}M"
    if value >= 1e3:
        return f"{value / 1e3:.2f}K"
    return f"{value:,.0f}"


def fallback_prediction(stock: Stock, rng: Optional[random.Random] = None) -> AIPrediction:
    """Random move in [-5%, +5%) labelled by its size; confidence in [60, 85)."""
    rng = rng or random.Random()
    change_percent = (rng.random() - 0.5) * 10
    predicted_price = stock.price * (1 + change_percent / 100)

    if change_percent > 2:
        sentiment, reasons = "bullish", BULLISH_REASONS
    elif change_percent < -2:
        sentiment, reasons = "bearish", BEARISH_REASONS
    else:
        sentiment, reasons = "neutral", NEUTRAL_REASONS

    return AIPrediction(
        symbol=stock.symbol,
        current_price=stock.price,
        predicted_price=round(predicted_price, 2),
        predicted_change=round(predicted_price - stock.price, 2),
        confidence=rng.randrange(60, 85),
        timeframe="7 Days",
        reasoning=reasons[:3],
        last_updated=datetime.now(timezone.utc).isoformat(),
        sentiment=sentiment,
    )


def fallback_analysis(fundamentals: StockFundamentals) -> AIAnalysis:
    """
    Rule-based analysis from valuation, growth and balance-sheet health.

    growth and healthy -> strong_buy; value and healthy -> buy;
    unhealthy with P/E above 40 -> sell; otherwise hold.
    """
    f = fundamentals
    is_value = 0 < f.pe_ratio < 20
    is_growth = f.revenue_growth > 10
    is_healthy = f.current_ratio > 1.5 and f.debt_to_equity < 100

    if is_growth and is_healthy:
        recommendation = "strong_buy"
    elif is_value and is_healthy:
        recommendation = "buy"
    elif not is_healthy and f.pe_ratio > 40:
        recommendation = "sell"
    else:
        recommendation = "hold"

    trend = "above" if f.price >= f.fifty_day_ma else "below"
    summary = (
        f"{f.name} ({f.symbol}) trades at ${f.price:.2f} in the {f.sector} sector "
        f"with a market cap of ${format_market_cap(f.market_cap)}. "
        f"This rule-based review rates the stock {recommendation.replace('_', ' ')}."
    )
    technical = (
        f"The stock is trading {trend} its 50-day moving average of ${f.fifty_day_ma:.2f} "
        f"and versus a 200-day average of ${f.two_hundred_day_ma:.2f}. "
        f"The 52-week range spans ${f.fifty_two_week_low:.2f} to ${f.fifty_two_week_high:.2f} "
        f"with a beta of {f.beta:.2f}."
    )
    fundamental = (
        f"P/E ratio is {f.pe_ratio:.2f}, revenue growth is {f.revenue_growth:.1f}%, "
        f"profit margin is {f.profit_margin:.1f}%. Current ratio of {f.current_ratio:.2f} "
        f"and debt-to-equity of {f.debt_to_equity:.1f} indicate "
        f"{'a healthy' if is_healthy else 'a stretched'} balance sheet."
    )

    risks = []
    if f.pe_ratio > 40:
        risks.append(f"Elevated valuation at {f.pe_ratio:.1f}x earnings")
    if f.debt_to_equity >= 100:
        risks.append(f"High leverage with debt-to-equity of {f.debt_to_equity:.1f}")
    if f.current_ratio <= 1.5:
        risks.append(f"Limited liquidity with a current ratio of {f.current_ratio:.2f}")
    if f.beta > 1.3:
        risks.append(f"Above-market volatility (beta {f.beta:.2f})")
    if f.revenue_growth < 0:
        risks.append(f"Revenue contracting at {f.revenue_growth:.1f}%")
    if not risks:
        risks.append("General market and sector risk")

    opportunities = []
    if is_growth:
        opportunities.append(f"Revenue growing at {f.revenue_growth:.1f}%")
    if is_value:
        opportunities.append(f"Attractive valuation at {f.pe_ratio:.1f}x earnings")
    if is_healthy:
        opportunities.append("Solid balance sheet supports investment flexibility")
    if f.target_mean_price > f.price > 0:
        upside = (f.target_mean_price / f.price - 1) * 100
        opportunities.append(f"Analyst mean target implies {upside:.1f}% upside")
    if f.dividend_yield > 2:
        opportunities.append(f"Dividend yield of {f.dividend_yield:.2f}%")
    if not opportunities:
        opportunities.append("Potential re-rating if fundamentals improve")

    return AIAnalysis(
        symbol=f.symbol,
        summary=summary,
        technical_analysis=technical,
        fundamental_analysis=fundamental,
        risks=risks[:5],
        opportunities=opportunities[:5],
        recommendation=recommendation,
        confidence_score=FALLBACK_ANALYSIS_CONFIDENCE,
        last_updated=datetime.now(timezone.utc).isoformat(),
    )


def keyword_sentiment(text: str) -> SentimentResult:
    """Deterministic sentiment from financial keyword counts."""
    lower = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lower)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lower)

    if positive > negative + 1:
        return SentimentResult(sentiment="positive", score=min(0.9, 0.5 + positive * 0.1))
    if negative > positive + 1:
        return SentimentResult(sentiment="negative", score=max(-0.9, -0.5 - negative * 0.1))
    return SentimentResult(sentiment="neutral", score=round((positive - negative) * 0.1, 2))
