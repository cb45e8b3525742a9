# marketdash/market_data/news.py
"""
Synthetic market news feed built from fixed headline templates.
"""
import random
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .types import NewsArticle

DEFAULT_NEWS_LIMIT = 20
DEFAULT_SYMBOL_NEWS_LIMIT = 10


@dataclass(frozen=True)
class NewsTemplate:
    title: str
    summary: str
    sentiment: str
    score: float


NEWS_TEMPLATES: List[NewsTemplate] = [
    NewsTemplate(
        "{company} Reports Strong Q4 Earnings, Beats Estimates",
        "{company} announced quarterly earnings that exceeded analyst expectations, with revenue growth "
        "driven by strong demand in its core business segments. The company also raised its full-year guidance.",
        "positive", 0.85,
    ),
    NewsTemplate(
        "{company} Announces Major Partnership with Tech Giant",
        "In a strategic move, {company} has entered into a significant partnership that analysts believe "
        "will strengthen its market position and open new revenue streams in the coming quarters.",
        "positive", 0.78,
    ),
    NewsTemplate(
        "Analysts Upgrade {company} Stock on Growth Prospects",
        "Multiple Wall Street analysts have upgraded their ratings on {company}, citing improved fundamentals "
        "and positive market momentum. Price targets have been revised upward by an average of 15%.",
        "positive", 0.72,
    ),
    NewsTemplate(
        "{company} Faces Regulatory Scrutiny Over Business Practices",
        "Federal regulators have announced an investigation into {company}'s business practices, raising "
        "concerns among investors about potential fines and operational restrictions.",
        "negative", -0.65,
    ),
    NewsTemplate(
        "{company} Stock Drops After Missing Revenue Targets",
        "Shares of {company} fell sharply after the company reported quarterly revenue below expectations. "
        "Management cited challenging market conditions and supply chain issues.",
        "negative", -0.72,
    ),
    NewsTemplate(
        "{company} Announces Workforce Reduction Amid Restructuring",
        "{company} revealed plans to cut approximately 5% of its workforce as part of a broader cost-cutting "
        "initiative. The company expects to save $500 million annually.",
        "negative", -0.55,
    ),
    NewsTemplate(
        "Market Watch: {company} Trading Sideways Amid Economic Uncertainty",
        "{company} shares remained relatively flat as investors await more clarity on economic conditions "
        "and the company's strategic direction for the coming year.",
        "neutral", 0.05,
    ),
    NewsTemplate(
        "{company} Expands Into New Markets with Product Launch",
        "{company} has announced the expansion of its product line into new geographic markets, signaling "
        "confidence in long-term growth despite near-term headwinds.",
        "positive", 0.68,
    ),
    NewsTemplate(
        "Investors Eye {company} as Sector Rotation Continues",
        "Institutional investors are increasingly looking at {company} as market dynamics shift. "
        "Trading volume has increased significantly over the past week.",
        "neutral", 0.15,
    ),
    NewsTemplate(
        "{company} CEO Discusses AI Strategy in Investor Call",
        "During the latest investor call, {company}'s CEO outlined ambitious plans for artificial "
        "intelligence integration across the company's product portfolio.",
        "positive", 0.62,
    ),
]

NEWS_COMPANIES = [
    ("Apple", "AAPL"),
    ("Microsoft", "MSFT"),
    ("Google", "GOOGL"),
    ("Amazon", "AMZN"),
    ("Tesla", "TSLA"),
    ("NVIDIA", "NVDA"),
    ("Meta", "META"),
    ("Netflix", "NFLX"),
    ("JPMorgan", "JPM"),
    ("Goldman Sachs", "GS"),
]

NEWS_SOURCES = [
    "Reuters",
    "Bloomberg",
    "CNBC",
    "Wall Street Journal",
    "Financial Times",
    "MarketWatch",
    "Yahoo Finance",
    "Barron's",
    "Investor's Business Daily",
    "The Motley Fool",
]

_MIN_SCORE_MAGNITUDE = 0.01


def _jittered_score(template: NewsTemplate, rng: random.Random) -> float:
    score = template.score + (rng.random() - 0.5) * 0.2
    # Sign always matches the label
    if template.sentiment == "positive":
        score = max(score, _MIN_SCORE_MAGNITUDE)
    elif template.sentiment == "negative":
        score = min(score, -_MIN_SCORE_MAGNITUDE)
    return round(max(-1.0, min(1.0, score)), 4)


def get_news(limit: int = DEFAULT_NEWS_LIMIT, rng: Optional[random.Random] = None,
             now: Optional[datetime] = None) -> List[NewsArticle]:
    """Generate `limit` articles, newest first."""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    stamp = int(time.time() * 1000)

    articles = []
    for i in range(limit):
        template = rng.choice(NEWS_TEMPLATES)
        company, symbol = rng.choice(NEWS_COMPANIES)
        source = rng.choice(NEWS_SOURCES)
        published = now - timedelta(hours=rng.randint(0, 47))

        related = [symbol]
        if rng.random() < 0.5:
            others = [s for _, s in NEWS_COMPANIES if s != symbol]
            related.append(rng.choice(others))

        articles.append(NewsArticle(
            id=f"news-{i}-{stamp}",
            title=template.title.replace("{company}", company),
            source=source,
            timestamp=published.isoformat(),
            summary=template.summary.replace("{company}", company),
            sentiment=template.sentiment,
            sentiment_score=_jittered_score(template, rng),
            url=f"https://example.com/news/{i}",
            related_symbols=related,
        ))

    articles.sort(key=lambda a: a.timestamp, reverse=True)
    return articles


def get_news_by_symbol(symbol: str, limit: int = DEFAULT_SYMBOL_NEWS_LIMIT,
                       rng: Optional[random.Random] = None,
                       now: Optional[datetime] = None) -> List[NewsArticle]:
    """
    Over-generate 3 * limit articles and keep those related to `symbol`.
    May return fewer than `limit`; never retries.
    """
    symbol = symbol.upper()
    candidates = get_news(limit * 3, rng=rng, now=now)
    return [a for a in candidates if symbol in a.related_symbols][:limit]
