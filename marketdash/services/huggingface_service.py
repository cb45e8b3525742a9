# marketdash/services/huggingface_service.py
"""
Financial sentiment via the Hugging Face hosted FinBERT classifier.
Falls back to deterministic keyword counting when the API cannot be used.
"""
import asyncio
from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..market_data.types import SentimentResult
from ..utils.config import get_huggingface_api_key, get_settings
from ..utils.logger import log_structured
from .heuristics import keyword_sentiment
from .results import FailureReason, ServiceResult

FINBERT_MODEL = "ProsusAI/finbert"
HF_API_URL = f"https://api-inference.huggingface.co/models/{FINBERT_MODEL}"
MAX_BATCH_SIZE = 10


class LabelScore(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    label: str
    score: float


# FinBERT returns [[{label, score}, ...]] for a single input
_classifier_response = TypeAdapter(List[List[LabelScore]])


class HuggingFaceService:
    """Client for the FinBERT inference endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._timeout = timeout if timeout is not None else get_settings().ai_request_timeout
        self._transport = transport

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key or get_huggingface_api_key()

    async def classify(self, text: str) -> ServiceResult[SentimentResult]:
        """Call FinBERT and return the top label as a signed score."""
        api_key = self.api_key
        if not api_key:
            return ServiceResult.fail(FailureReason.UNAVAILABLE, "HUGGINGFACE_API_KEY not configured")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    HF_API_URL,
                    json={"inputs": text},
                    headers={"Authorization": f"Bearer {api_key}"},
                )
        except httpx.HTTPError as e:
            return ServiceResult.fail(FailureReason.UNAVAILABLE, f"transport error: {e}")

        if response.status_code == 429:
            return ServiceResult.fail(FailureReason.RATE_LIMITED, "HTTP 429")
        if response.status_code == 503:
            return ServiceResult.fail(FailureReason.UNAVAILABLE, "model loading")
        if response.status_code >= 400:
            return ServiceResult.fail(FailureReason.UNAVAILABLE, f"HTTP {response.status_code}")

        try:
            results = _classifier_response.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, f"bad payload: {e}")
        if not results or not results[0]:
            return ServiceResult.fail(FailureReason.INVALID_RESPONSE, "empty classification")

        top = max(results[0], key=lambda r: r.score)
        label = top.label.lower()
        if label == "positive":
            return ServiceResult.success(SentimentResult(sentiment="positive", score=top.score))
        if label == "negative":
            return ServiceResult.success(SentimentResult(sentiment="negative", score=-top.score))
        if label == "neutral":
            return ServiceResult.success(SentimentResult(sentiment="neutral", score=0))
        return ServiceResult.fail(FailureReason.INVALID_RESPONSE, f"unknown label {top.label!r}")

    async def analyze(self, text: str) -> SentimentResult:
        """Classify one text, using the keyword fallback on any failure."""
        result = await self.classify(text)
        if result.ok:
            sentiment = result.value
        else:
            log_structured("sentiment_fallback", {
                "service": "huggingface",
                "reason": result.failure.value if result.failure else None,
                "detail": result.detail,
            }, level="WARNING")
            sentiment = keyword_sentiment(text)
        return sentiment.model_copy(update={"model": FINBERT_MODEL})

    async def analyze_batch(self, texts: List[str]) -> List[SentimentResult]:
        """Classify up to MAX_BATCH_SIZE texts concurrently; each result echoes its text."""
        texts = texts[:MAX_BATCH_SIZE]
        results = await asyncio.gather(*(self.analyze(text) for text in texts))
        return [r.model_copy(update={"text": t}) for t, r in zip(texts, results)]


_huggingface_service: Optional[HuggingFaceService] = None


def get_huggingface_service() -> HuggingFaceService:
    """Get global Hugging Face service instance."""
    global _huggingface_service
    if _huggingface_service is None:
        _huggingface_service = HuggingFaceService()
    return _huggingface_service
