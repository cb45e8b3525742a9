# marketdash/api/routes.py
"""
Dashboard API router.

Every route answers with the camelCase wire models from market_data.types.
Errors leave as HTTPException and are rendered as {"error": ...} by the
handlers registered in main.create_app().
"""
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from ..market_data import news
from ..market_data.charts import DEFAULT_RANGE
from ..market_data.market_data_provider import BaseMarketDataProvider
from ..market_data.symbol_utils import normalize_symbol
from ..market_data.types import (
    AIAnalysis,
    AIPrediction,
    ChartDataPoint,
    DividendHistory,
    EarningsData,
    InsiderTransaction,
    InstitutionalHolder,
    MarketIndex,
    NewsArticle,
    SectorPerformance,
    SentimentResult,
    Stock,
    StockFundamentals,
)
from ..services.gemini_service import GeminiService
from ..services.huggingface_service import HuggingFaceService
from ..utils.error_handler import handle_internal_error, handle_not_found_error, handle_validation_error
from .dependencies import get_gemini, get_huggingface, get_market_provider
from .schemas import (
    BatchSentimentRequest,
    SEARCH_QUERY_MAX_LENGTH,
    SentimentRequest,
    clamp_count,
    parse_limit,
)

router = APIRouter(tags=["market"])


def _found(value, message: str = "Stock not found"):
    if value is None:
        raise handle_not_found_error(message)
    return value


# ---------------------------------------------------------------------------
# Quotes and symbols
# ---------------------------------------------------------------------------

@router.get("/stocks", response_model=List[Stock])
async def list_trending_stocks(provider: BaseMarketDataProvider = Depends(get_market_provider)):
    """Trending quotes, each with a sparkline."""
    try:
        return await provider.get_trending_stocks()
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch stocks")


@router.get("/symbols", response_model=List[str])
async def list_default_symbols(provider: BaseMarketDataProvider = Depends(get_market_provider)):
    try:
        return await provider.get_default_symbols()
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch symbols")


@router.get("/stocks/search", response_model=List[Stock])
async def search_stocks(
    q: Optional[str] = Query(None, description="Symbol or company name fragment"),
    provider: BaseMarketDataProvider = Depends(get_market_provider),
):
    """
    Search by symbol or name.

    q is required and must be 1-100 characters once trimmed.
    """
    if not q:
        raise handle_validation_error("Query parameter 'q' is required")
    query = q.strip()
    if not query or len(query) > SEARCH_QUERY_MAX_LENGTH:
        raise handle_validation_error("Invalid search query")

    try:
        return await provider.search_stocks(query)
    except Exception as e:
        raise handle_internal_error(e, "Failed to search stocks", {"query": query})


@router.get("/stocks/{symbol}", response_model=Stock)
async def get_stock(symbol: str, provider: BaseMarketDataProvider = Depends(get_market_provider)):
    symbol = normalize_symbol(symbol)
    try:
        return _found(await provider.get_quote(symbol))
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch stock", {"symbol": symbol})


# ---------------------------------------------------------------------------
# Per-symbol detail
# ---------------------------------------------------------------------------

@router.get("/stocks/{symbol}/fundamentals", response_model=StockFundamentals)
async def get_fundamentals(symbol: str, provider: BaseMarketDataProvider = Depends(get_market_provider)):
    symbol = normalize_symbol(symbol)
    try:
        return _found(await provider.get_fundamentals(symbol))
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch fundamentals", {"symbol": symbol})


@router.get("/stocks/{symbol}/chart", response_model=List[ChartDataPoint])
async def get_chart(
    symbol: str,
    range_: str = Query(DEFAULT_RANGE, alias="range", description="1D, 1W, 1M, 3M, 1Y or ALL"),
    provider: BaseMarketDataProvider = Depends(get_market_provider),
):
    """OHLCV bars for the requested range. Unknown ranges use 1M."""
    symbol = normalize_symbol(symbol)
    try:
        points = await provider.get_chart(symbol, range_.upper())
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch chart data", {"symbol": symbol, "range": range_})
    if not points:
        raise handle_not_found_error("Chart data not found")
    return points


@router.get("/stocks/{symbol}/earnings", response_model=List[EarningsData])
async def get_earnings(
    symbol: str,
    quarters: Optional[str] = Query(None),
    provider: BaseMarketDataProvider = Depends(get_market_provider),
):
    symbol = normalize_symbol(symbol)
    count = clamp_count(quarters, default=8, minimum=1, maximum=20)
    try:
        return _found(await provider.get_earnings(symbol, count))
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch earnings", {"symbol": symbol})


@router.get("/stocks/{symbol}/dividends", response_model=List[DividendHistory])
async def get_dividends(
    symbol: str,
    count: Optional[str] = Query(None),
    provider: BaseMarketDataProvider = Depends(get_market_provider),
):
    symbol = normalize_symbol(symbol)
    n = clamp_count(count, default=8, minimum=1, maximum=40)
    try:
        return _found(await provider.get_dividends(symbol, n))
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch dividends", {"symbol": symbol})


@router.get("/stocks/{symbol}/insiders", response_model=List[InsiderTransaction])
async def get_insider_transactions(
    symbol: str,
    count: Optional[str] = Query(None),
    provider: BaseMarketDataProvider = Depends(get_market_provider),
):
    symbol = normalize_symbol(symbol)
    n = clamp_count(count, default=10, minimum=1, maximum=50)
    try:
        return _found(await provider.get_insider_transactions(symbol, n))
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch insider transactions", {"symbol": symbol})


@router.get("/stocks/{symbol}/institutions", response_model=List[InstitutionalHolder])
async def get_institutional_holders(symbol: str, provider: BaseMarketDataProvider = Depends(get_market_provider)):
    symbol = normalize_symbol(symbol)
    try:
        return _found(await provider.get_institutional_holders(symbol))
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch institutional holders", {"symbol": symbol})


# ---------------------------------------------------------------------------
# Market-wide
# ---------------------------------------------------------------------------

@router.get("/indices", response_model=List[MarketIndex])
async def get_indices(provider: BaseMarketDataProvider = Depends(get_market_provider)):
    try:
        return await provider.get_indices()
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch indices")


@router.get("/sectors", response_model=List[SectorPerformance])
async def get_sectors(provider: BaseMarketDataProvider = Depends(get_market_provider)):
    try:
        return await provider.get_sector_performance()
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch sector performance")


@router.get("/news", response_model=List[NewsArticle])
async def get_news(limit: Optional[str] = Query(None)):
    try:
        return news.get_news(parse_limit(limit, news.DEFAULT_NEWS_LIMIT))
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch news")


@router.get("/news/{symbol}", response_model=List[NewsArticle])
async def get_news_by_symbol(symbol: str, limit: Optional[str] = Query(None)):
    symbol = normalize_symbol(symbol)
    try:
        return news.get_news_by_symbol(symbol, parse_limit(limit, news.DEFAULT_SYMBOL_NEWS_LIMIT))
    except Exception as e:
        raise handle_internal_error(e, "Failed to fetch news", {"symbol": symbol})


# ---------------------------------------------------------------------------
# AI
# ---------------------------------------------------------------------------

@router.get("/prediction/{symbol}", response_model=AIPrediction)
async def get_prediction(
    symbol: str,
    provider: BaseMarketDataProvider = Depends(get_market_provider),
    gemini: GeminiService = Depends(get_gemini),
):
    """7-day price outlook. Falls back to a heuristic when Gemini is unavailable."""
    symbol = normalize_symbol(symbol)
    try:
        stock = _found(await provider.get_quote(symbol))
        return await gemini.predict(stock)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to generate prediction", {"symbol": symbol})


@router.get("/analysis/{symbol}", response_model=AIAnalysis)
async def get_analysis(
    symbol: str,
    provider: BaseMarketDataProvider = Depends(get_market_provider),
    gemini: GeminiService = Depends(get_gemini),
):
    symbol = normalize_symbol(symbol)
    try:
        fundamentals = _found(await provider.get_fundamentals(symbol))
        return await gemini.analyze(fundamentals)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_internal_error(e, "Failed to generate analysis", {"symbol": symbol})


def _sentiment_request(body: Any) -> SentimentRequest:
    try:
        return SentimentRequest.model_validate(body)
    except ValidationError:
        raise handle_validation_error("Invalid request body")


@router.post("/sentiment/gemini", response_model=SentimentResult, response_model_exclude_none=True)
async def gemini_sentiment(body: Any = Body(None), gemini: GeminiService = Depends(get_gemini)):
    request = _sentiment_request(body)
    try:
        result = await gemini.sentiment(request.text)
        return result.model_copy(update={"model": None, "text": None})
    except Exception as e:
        raise handle_internal_error(e, "Failed to analyze sentiment")


@router.post("/sentiment/huggingface", response_model=SentimentResult, response_model_exclude_none=True)
async def huggingface_sentiment(body: Any = Body(None), hf: HuggingFaceService = Depends(get_huggingface)):
    request = _sentiment_request(body)
    try:
        return await hf.analyze(request.text)
    except Exception as e:
        raise handle_internal_error(e, "Failed to analyze sentiment")


@router.post("/sentiment/batch", response_model=List[SentimentResult], response_model_exclude_none=True)
async def batch_sentiment(body: Any = Body(None), hf: HuggingFaceService = Depends(get_huggingface)):
    """Classify up to 10 texts; extra texts are ignored."""
    try:
        request = BatchSentimentRequest.model_validate(body)
    except ValidationError:
        raise handle_validation_error("texts array is required")
    try:
        return await hf.analyze_batch(request.texts)
    except Exception as e:
        raise handle_internal_error(e, "Failed to analyze sentiment")
