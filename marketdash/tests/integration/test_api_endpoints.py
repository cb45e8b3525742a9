# marketdash/tests/integration/test_api_endpoints.py
"""Integration tests for API endpoints."""
from marketdash.api.dependencies import get_market_provider
from marketdash.market_data.adapters.synthetic_adapter import SyntheticDataProvider
from marketdash.market_data.catalog import DEFAULT_SYMBOLS, TRENDING_SYMBOLS


class ExplodingProvider(SyntheticDataProvider):
    """Provider whose every quote lookup fails unexpectedly."""

    async def get_quote(self, symbol):
        raise RuntimeError("connection pool exhausted")

    async def get_trending_stocks(self):
        raise RuntimeError("connection pool exhausted")


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_health_endpoint(self, client):
        """Test /api/health endpoint."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["services"] == {
            "gemini": False,
            "huggingface": False,
            "yahooFinance": False,
            "dataSource": "synthetic",
        }


class TestStockEndpoints:
    """Test quote, search and per-symbol endpoints."""

    def test_trending(self, client):
        response = client.get("/api/stocks")
        assert response.status_code == 200
        data = response.json()
        assert [s["symbol"] for s in data] == TRENDING_SYMBOLS
        assert {"changePercent", "marketCap", "sparklineData"} <= set(data[0])

    def test_symbols(self, client):
        response = client.get("/api/symbols")
        assert response.status_code == 200
        assert response.json() == DEFAULT_SYMBOLS

    def test_known_stock(self, client):
        response = client.get("/api/stocks/AAPL")
        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["price"] > 0

    def test_symbol_is_upper_cased(self, client):
        response = client.get("/api/stocks/aapl")
        assert response.status_code == 200
        assert response.json()["symbol"] == "AAPL"

    def test_unknown_stock(self, client):
        response = client.get("/api/stocks/ZZZZ")
        assert response.status_code == 404
        assert response.json() == {"error": "Stock not found"}

    def test_search(self, client):
        response = client.get("/api/stocks/search", params={"q": "apple"})
        assert response.status_code == 200
        assert "AAPL" in [s["symbol"] for s in response.json()]

    def test_search_empty_query(self, client):
        response = client.get("/api/stocks/search?q=")
        assert response.status_code == 400
        assert response.json() == {"error": "Query parameter 'q' is required"}

    def test_search_missing_query(self, client):
        response = client.get("/api/stocks/search")
        assert response.status_code == 400

    def test_search_blank_or_long_query(self, client):
        assert client.get("/api/stocks/search", params={"q": "   "}).json() == {"error": "Invalid search query"}
        response = client.get("/api/stocks/search", params={"q": "x" * 101})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid search query"}

    def test_fundamentals(self, client):
        response = client.get("/api/stocks/MSFT/fundamentals")
        assert response.status_code == 200
        data = response.json()
        assert {"forwardPE", "fiftyDayMA", "twoHundredDayMA", "peRatio"} <= set(data)

    def test_fundamentals_unknown(self, client):
        response = client.get("/api/stocks/ZZZZ/fundamentals")
        assert response.status_code == 404
        assert response.json() == {"error": "Stock not found"}

    def test_chart(self, client):
        response = client.get("/api/stocks/AAPL/chart", params={"range": "1D"})
        assert response.status_code == 200
        assert len(response.json()) == 78

    def test_chart_default_range(self, client):
        assert len(client.get("/api/stocks/AAPL/chart").json()) == 22

    def test_chart_unknown_symbol(self, client):
        response = client.get("/api/stocks/ZZZZ/chart")
        assert response.status_code == 404
        assert response.json() == {"error": "Chart data not found"}

    def test_earnings_quarters_clamped(self, client):
        response = client.get("/api/stocks/AAPL/earnings", params={"quarters": "99"})
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 20
        assert {"actualEPS", "estimatedEPS", "surprisePercent"} <= set(data[0])

    def test_earnings_invalid_quarters(self, client):
        assert len(client.get("/api/stocks/AAPL/earnings", params={"quarters": "many"}).json()) == 8

    def test_dividends(self, client):
        response = client.get("/api/stocks/JNJ/dividends", params={"count": "0"})
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_crypto_dividends_empty(self, client):
        response = client.get("/api/stocks/COIN/dividends")
        assert response.status_code == 200
        assert response.json() == []

    def test_insiders(self, client):
        response = client.get("/api/stocks/TSLA/insiders", params={"count": "5"})
        assert response.status_code == 200
        assert len(response.json()) == 5

    def test_institutions(self, client):
        response = client.get("/api/stocks/AAPL/institutions")
        assert response.status_code == 200
        assert len(response.json()) == 10

    def test_institutions_unknown(self, client):
        assert client.get("/api/stocks/ZZZZ/institutions").status_code == 404


class TestMarketEndpoints:
    """Test indices, sectors and news."""

    def test_indices(self, client):
        response = client.get("/api/indices")
        assert response.status_code == 200
        assert [i["symbol"] for i in response.json()] == ["SPX", "DJI", "IXIC", "RUT"]

    def test_sectors(self, client):
        response = client.get("/api/sectors")
        assert response.status_code == 200
        assert "Technology" in [s["sector"] for s in response.json()]

    def test_news_default_limit(self, client):
        response = client.get("/api/news")
        assert response.status_code == 200
        assert len(response.json()) == 20

    def test_news_invalid_limit_falls_back(self, client):
        assert len(client.get("/api/news", params={"limit": "abc"}).json()) == 20
        assert len(client.get("/api/news", params={"limit": "-3"}).json()) == 20
        assert len(client.get("/api/news", params={"limit": "5"}).json()) == 5

    def test_news_by_symbol(self, client):
        response = client.get("/api/news/nvda")
        assert response.status_code == 200
        data = response.json()
        assert len(data) <= 10
        assert all("NVDA" in a["relatedSymbols"] for a in data)


class TestAIEndpoints:
    """Test prediction, analysis and sentiment without API keys."""

    def test_prediction_fallback(self, client):
        response = client.get("/api/prediction/AAPL")
        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["timeframe"] == "7 Days"
        assert data["sentiment"] in ("bullish", "bearish", "neutral")
        assert 60 <= data["confidence"] < 85

    def test_prediction_unknown(self, client):
        response = client.get("/api/prediction/ZZZZ")
        assert response.status_code == 404
        assert response.json() == {"error": "Stock not found"}

    def test_analysis_fallback(self, client):
        response = client.get("/api/analysis/MSFT")
        assert response.status_code == 200
        data = response.json()
        assert data["confidenceScore"] == 70
        assert data["recommendation"] in ("strong_buy", "buy", "hold", "sell", "strong_sell")

    def test_analysis_unknown(self, client):
        assert client.get("/api/analysis/ZZZZ").status_code == 404

    def test_huggingface_sentiment_fallback(self, client):
        response = client.post(
            "/api/sentiment/huggingface",
            json={"text": "Company reports record profit and strong growth"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["sentiment"] == "positive"
        assert data["score"] > 0
        assert data["model"] == "ProsusAI/finbert"

    def test_gemini_sentiment_without_key(self, client):
        response = client.post("/api/sentiment/gemini", json={"text": "Great quarter"})
        assert response.status_code == 200
        assert response.json() == {"sentiment": "neutral", "score": 0}

    def test_sentiment_invalid_body(self, client):
        for body in ({}, {"text": ""}, {"text": "x" * 5001}, {"text": 5}):
            response = client.post("/api/sentiment/huggingface", json=body)
            assert response.status_code == 400
            assert response.json() == {"error": "Invalid request body"}

    def test_sentiment_malformed_json(self, client):
        response = client.post(
            "/api/sentiment/gemini",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_batch(self, client):
        texts = [f"Stock {i} posts strong growth and record profit" for i in range(12)]
        response = client.post("/api/sentiment/batch", json={"texts": texts})
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 10
        assert data[0]["text"] == texts[0]
        assert {"text", "sentiment", "score", "model"} == set(data[0])

    def test_batch_requires_texts(self, client):
        for body in ({}, {"texts": []}, {"texts": "nope"}):
            response = client.post("/api/sentiment/batch", json=body)
            assert response.status_code == 400
            assert response.json() == {"error": "texts array is required"}


class TestErrorHandling:
    """Unexpected failures become static 500 messages."""

    def test_internal_error_message(self, client):
        client.app.dependency_overrides[get_market_provider] = lambda: ExplodingProvider()
        response = client.get("/api/stocks/AAPL")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch stock"}

        response = client.get("/api/stocks")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch stocks"}

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert "error" in response.json()
