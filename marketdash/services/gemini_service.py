# marketdash/services/gemini_service.py
"""
Google Gemini client for stock predictions, comprehensive analysis and
generative sentiment.

Every failure (missing key, transport error, HTTP error, unusable payload)
is carried as a ServiceResult and replaced by a local fallback. No retries.
"""
import json
import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from ..market_data.types import AIAnalysis, AIPrediction, Recommendation, SentimentResult, Stock, StockFundamentals
from ..utils.config import get_gemini_api_key, get_settings
from ..utils.logger import log_structured
from .heuristics import fallback_analysis, fallback_prediction, format_market_cap, format_volume
from .results import FailureReason, ServiceResult

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", allow_inf_nan=False)


class PredictionPayload(_Payload):
    predicted_price: float
    confidence: float
    sentiment: Literal["bullish", "bearish", "neutral"]
    reasoning: List[str]


class AnalysisPayload(_Payload):
    summary: str
    technical_analysis: str
    fundamental_analysis: str
    risks: List[str]
    opportunities: List[str]
    recommendation: Recommendation
    confidence_score: float


class SentimentPayload(_Payload):
    sentiment: Literal["positive", "negative", "neutral"]
    score: float


class _Part(BaseModel):
    text: Optional[str] = None


class _Content(BaseModel):
    parts: List[_Part] = []


class _Candidate(BaseModel):
    content: Optional[_Content] = None


class GenerateContentResponse(BaseModel):
    """Subset of the generateContent response body."""
    candidates: List[_Candidate] = []

    @property
    def text(self) -> str:
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(part.text or "" for part in self.candidates[0].content.parts)


PREDICTION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "predictedPrice": {"type": "NUMBER"},
        "confidence": {"type": "NUMBER"},
        "sentiment": {"type": "STRING", "enum": ["bullish", "bearish", "neutral"]},
        "reasoning": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["predictedPrice", "confidence", "sentiment", "reasoning"],
}

ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "technicalAnalysis": {"type": "STRING"},
        "fundamentalAnalysis": {"type": "STRING"},
        "risks": {"type": "ARRAY", "items": {"type": "STRING"}},
        "opportunities": {"type": "ARRAY", "items": {"type": "STRING"}},
        "recommendation": {
            "type": "STRING",
            "enum": ["strong_buy", "buy", "hold", "sell", "strong_sell"],
        },
        "confidenceScore": {"type": "NUMBER"},
    },
    "required": [
        "summary", "technicalAnalysis", "fundamentalAnalysis",
        "risks", "opportunities", "recommendation", "confidenceScore",
    ],
}

SENTIMENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "sentiment": {"type": "STRING", "enum": ["positive", "negative", "neutral"]},
        "score": {"type": "NUMBER"},
    },
    "required": ["sentiment", "score"],
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _signed(value: float) -> str:
    return f"+{value:.2f}" if value >= 0 else f"{value:.2f}"


def build_prediction_prompt(stock: Stock) -> str:
    return f"""You are a financial analyst AI. Analyze the following stock and provide a prediction:

Stock: {stock.symbol} ({stock.name})
Current Price: ${stock.price:.2f}
Daily Change: {_signed(stock.change)} ({_signed(stock.change_percent)}%)
Sector: {stock.sector}
Market Cap: ${format_market_cap(stock.market_cap)}
Volume: {format_volume(stock.volume)}

Provide a JSON response with the following structure:
{{
  "predictedPrice": <number - predicted price in 7 days>,
  "confidence": <number - confidence percentage between 50 and 95>,
  "sentiment": "<string - one of: bullish, bearish, neutral>",
  "reasoning": ["<string - reason 1>", "<string - reason 2>", "<string - reason 3>"]
}}

Base your analysis on typical market patterns, sector performance, and the provided metrics. \
Be realistic with predictions (usually within 5-15% of current price for a week timeframe)."""


def build_analysis_prompt(f: StockFundamentals) -> str:
    return f"""You are a senior equity research analyst. Write a comprehensive analysis of the following company.

Company: {f.name} ({f.symbol})
Sector: {f.sector}
Industry: {f.industry}
Price: ${f.price:.2f} ({_signed(f.change_percent)}% today)
Market Cap: ${format_market_cap(f.market_cap)}
P/E Ratio: {f.pe_ratio:.2f} (forward {f.forward_pe:.2f})
PEG Ratio: {f.peg_ratio:.2f}
Price/Book: {f.price_to_book:.2f}
Profit Margin: {f.profit_margin:.2f}%
Revenue Growth: {f.revenue_growth:.2f}%
Return on Equity: {f.return_on_equity:.2f}%
Debt/Equity: {f.debt_to_equity:.2f}
Current Ratio: {f.current_ratio:.2f}
Dividend Yield: {f.dividend_yield:.2f}%
Beta: {f.beta:.2f}
52-Week Range: ${f.fifty_two_week_low:.2f} - ${f.fifty_two_week_high:.2f}
50/200-Day MA: ${f.fifty_day_ma:.2f} / ${f.two_hundred_day_ma:.2f}
Analyst Mean Target: ${f.target_mean_price:.2f}

Respond with JSON containing summary, technicalAnalysis, fundamentalAnalysis, risks (up to 5), \
opportunities (up to 5), recommendation (one of strong_buy, buy, hold, sell, strong_sell) and \
confidenceScore (60-95)."""


def build_sentiment_prompt(text: str) -> str:
    return f"""Analyze the sentiment of the following financial news text.
Respond with JSON: {{"sentiment": "positive" | "negative" | "neutral", "score": <number between -1 and 1>}}

Text: {text}"""


class GeminiService:
    """Thin REST client for Gemini generateContent with structured JSON output."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        settings = get_settings()
        self._api_key = api_key
        self.model = model or settings.gemini_model
        self._timeout = timeout if timeout is not None else settings.ai_request_timeout
        self._transport = transport
        self._rng = rng or random.Random()

    @property
    def api_key(self) -> Optional[str]:
        # Read at call time so a key added to the environment is picked up
        return self._api_key or get_gemini_api_key()

    @property
    def url(self) -> str:
        return f"{GEMINI_BASE_URL}/{self.model}:generateContent"

    async def generate_json(self, prompt: str, schema: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        """Send a prompt and return the decoded JSON object from the first candidate."""
        api_key = self.api_key
        if not api_key:
            return ServiceResult.fail(FailureReason.UNAVAILABLE, "GEMINI_API_KEY not configured")

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    json=body,
                    headers={"x-goog-api-key": api_key},
                )
        except httpx.HTTPError as e:
            return ServiceResult.fail(FailureReason.UNAVAILABLE, f"transport error: {e}")

        if response.status_code == 429:
            return ServiceResult.fail(FailureReason.RATE_LIMITED, "HTTP 429")
        if response.status_code >= 400:
            return ServiceResult.fail(FailureReason.UNAVAILABLE, f"HTTP {response.status_code}")

        try:
            envelope = GenerateContentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, f"bad envelope: {e}")

        text = envelope.text.strip()
        if not text:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, "empty response")
        try:
            data = json.loads(text)
        except ValueError as e:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, f"bad JSON: {e}")
        if not isinstance(data, dict):
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, "expected a JSON object")
        return ServiceResult.success(data)

    async def _structured(self, prompt: str, schema: Dict[str, Any], payload_model):
        result = await self.generate_json(prompt, schema)
        if not result.ok:
            return result
        try:
            return ServiceResult.success(payload_model.model_validate(result.value))
        except ValidationError as e:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, f"schema mismatch: {e.error_count()} errors")

    def _log_fallback(self, operation: str, result: ServiceResult, symbol: Optional[str] = None) -> None:
        log_structured("ai_fallback", {
            "service": "gemini",
            "operation": operation,
            "symbol": symbol,
            "reason": result.failure.value if result.failure else None,
            "detail": result.detail,
        }, level="WARNING")

    async def predict(self, stock: Stock) -> AIPrediction:
        """7-day price prediction, falling back to a local heuristic."""
        result = await self._structured(build_prediction_prompt(stock), PREDICTION_SCHEMA, PredictionPayload)
        if not result.ok:
            self._log_fallback("prediction", result, stock.symbol)
            return fallback_prediction(stock, self._rng)

        data: PredictionPayload = result.value
        return AIPrediction(
            symbol=stock.symbol,
            current_price=stock.price,
            predicted_price=round(data.predicted_price, 2),
            predicted_change=round(data.predicted_price - stock.price, 2),
            confidence=round(_clamp(data.confidence, 50, 95)),
            timeframe="7 Days",
            reasoning=data.reasoning[:4],
            last_updated=datetime.now(timezone.utc).isoformat(),
            sentiment=data.sentiment,
        )

    async def analyze(self, fundamentals: StockFundamentals) -> AIAnalysis:
        """Comprehensive analysis, falling back to rule-based analysis."""
        result = await self._structured(build_analysis_prompt(fundamentals), ANALYSIS_SCHEMA, AnalysisPayload)
        if not result.ok:
            self._log_fallback("analysis", result, fundamentals.symbol)
            return fallback_analysis(fundamentals)

        data: AnalysisPayload = result.value
        return AIAnalysis(
            symbol=fundamentals.symbol,
            summary=data.summary,
            technical_analysis=data.technical_analysis,
            fundamental_analysis=data.fundamental_analysis,
            risks=data.risks[:5],
            opportunities=data.opportunities[:5],
            recommendation=data.recommendation,
            confidence_score=round(_clamp(data.confidence_score, 60, 95)),
            last_updated=datetime.now(timezone.utc).isoformat(),
        )

    async def sentiment(self, text: str) -> SentimentResult:
        """Generative sentiment; neutral with score 0 on any failure."""
        result = await self._structured(build_sentiment_prompt(text), SENTIMENT_SCHEMA, SentimentPayload)
        if not result.ok:
            self._log_fallback("sentiment", result)
            return SentimentResult(sentiment="neutral", score=0)

        data: SentimentPayload = result.value
        return SentimentResult(sentiment=data.sentiment, score=_clamp(data.score, -1.0, 1.0))


_gemini_service: Optional[GeminiService] = None


def get_gemini_service() -> GeminiService:
    """Get global Gemini service instance."""
    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiService()
    return _gemini_service
