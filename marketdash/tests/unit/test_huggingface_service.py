# marketdash/tests/unit/test_huggingface_service.py
"""Unit tests for the FinBERT client and keyword fallback."""
import asyncio

import httpx

from marketdash.services.huggingface_service import FINBERT_MODEL, HuggingFaceService
from marketdash.services.results import FailureReason


def finbert(*scores):
    return [[{"label": label, "score": score} for label, score in scores]]


def service_for(handler, api_key="hf-test") -> HuggingFaceService:
    return HuggingFaceService(api_key=api_key, transport=httpx.MockTransport(handler))


class TestClassify:
    """Test FinBERT response handling."""

    def test_positive(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json=finbert(("positive", 0.91), ("negative", 0.04), ("neutral", 0.05)))

        result = asyncio.run(service_for(handler).classify("Profits soar"))
        assert result.ok
        assert result.value.sentiment == "positive"
        assert result.value.score == 0.91
        assert seen["auth"] == "Bearer hf-test"

    def test_negative_is_signed(self):
        body = finbert(("positive", 0.1), ("negative", 0.8), ("neutral", 0.1))
        result = asyncio.run(service_for(lambda r: httpx.Response(200, json=body)).classify("x"))
        assert result.value.sentiment == "negative"
        assert result.value.score == -0.8

    def test_neutral_scores_zero(self):
        body = finbert(("neutral", 0.7), ("positive", 0.2), ("negative", 0.1))
        result = asyncio.run(service_for(lambda r: httpx.Response(200, json=body)).classify("x"))
        assert result.value.sentiment == "neutral"
        assert result.value.score == 0

    def test_model_loading(self):
        result = asyncio.run(service_for(lambda r: httpx.Response(503)).classify("x"))
        assert result.failure == FailureReason.UNAVAILABLE

    def test_rate_limited(self):
        result = asyncio.run(service_for(lambda r: httpx.Response(429)).classify("x"))
        assert result.failure == FailureReason.RATE_LIMITED

    def test_bad_payload(self):
        result = asyncio.run(service_for(lambda r: httpx.Response(200, json={"error": "?"})).classify("x"))
        assert result.failure == FailureReason.INVALID_RESPONSE

    def test_empty_payload(self):
        result = asyncio.run(service_for(lambda r: httpx.Response(200, json=[[]])).classify("x"))
        assert result.failure == FailureReason.INVALID_RESPONSE

    def test_non_finite_score(self):
        def handler(request):
            return httpx.Response(
                200,
                content=b'[[{"label": "positive", "score": NaN}]]',
                headers={"Content-Type": "application/json"},
            )

        result = asyncio.run(service_for(handler).classify("x"))
        assert result.failure == FailureReason.INVALID_RESPONSE


class TestAnalyze:
    """Test fallback behaviour."""

    def test_no_key_uses_keywords(self, monkeypatch):
        monkeypatch.delenv("HUGGINGFACE_API_KEY", raising=False)
        service = HuggingFaceService()
        result = asyncio.run(service.analyze("Company reports record profit and strong growth"))
        assert result.sentiment == "positive"
        assert result.score > 0
        assert result.model == FINBERT_MODEL

    def test_upstream_failure_uses_keywords(self):
        service = service_for(lambda r: httpx.Response(503))
        result = asyncio.run(service.analyze("Shares drop on weak outlook and earnings miss"))
        assert result.sentiment == "negative"
        assert result.model == FINBERT_MODEL

    def test_batch_limit_and_text_echo(self):
        body = finbert(("positive", 0.6), ("neutral", 0.3), ("negative", 0.1))
        service = service_for(lambda r: httpx.Response(200, json=body))
        texts = [f"headline {i}" for i in range(12)]
        results = asyncio.run(service.analyze_batch(texts))
        assert len(results) == 10
        assert [r.text for r in results] == texts[:10]
        assert all(r.sentiment == "positive" and r.model == FINBERT_MODEL for r in results)
