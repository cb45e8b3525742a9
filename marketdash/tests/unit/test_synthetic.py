# marketdash/tests/unit/test_synthetic.py
"""Unit tests for the synthetic market data generator."""
import asyncio
import random
from datetime import datetime, timezone

import pytest

from marketdash.market_data import synthetic
from marketdash.market_data.adapters.synthetic_adapter import SyntheticDataProvider
from marketdash.market_data.catalog import DEFAULT_SYMBOLS, STOCKS, TRENDING_SYMBOLS, find_stock

NOW = datetime(2025, 5, 14, 15, 0, tzinfo=timezone.utc)

# Fields allowed to go negative
SIGNED_FIELDS = {
    "change", "change_percent", "eps", "revenue_growth", "eps_growth",
    "earnings_quarterly_growth", "fifty_two_week_change",
}


class TestQuotes:
    """Test quote generation."""

    def test_seeded_generation_is_deterministic(self):
        """The same seed yields the same quote."""
        a = synthetic.get_stock_by_symbol("AAPL", random.Random(1))
        b = synthetic.get_stock_by_symbol("AAPL", random.Random(1))
        assert a == b

    def test_quote_stays_within_volatility(self, rng):
        """A quote moves at most 3% from its base price."""
        base = find_stock("AAPL").base_price
        for _ in range(50):
            quote = synthetic.get_stock_by_symbol("AAPL", rng)
            assert abs(quote.price - base) <= base * 0.03 + 0.01
            assert 1_000_000 <= quote.volume <= 50_999_999
            assert len(quote.sparkline_data) == 12

    def test_unknown_symbol(self, rng):
        assert synthetic.get_stock_by_symbol("ZZZZ", rng) is None

    def test_lookup_is_case_insensitive(self, rng):
        assert synthetic.get_stock_by_symbol("aapl", rng).symbol == "AAPL"

    def test_multiple_quotes_drop_unknown(self, rng):
        """Unknown symbols are dropped and order is preserved."""
        quotes = synthetic.get_multiple_quotes(["MSFT", "ZZZZ", "AAPL"], rng)
        assert [q.symbol for q in quotes] == ["MSFT", "AAPL"]

    def test_search_matches_symbol_name_and_sector(self, rng):
        assert "AAPL" in [q.symbol for q in synthetic.search_stocks("apple", rng)]
        assert "JPM" in [q.symbol for q in synthetic.search_stocks("JPM", rng)]
        healthcare = synthetic.search_stocks("healthcare", rng)
        assert healthcare and all(q.sector == "Healthcare" for q in healthcare)
        assert synthetic.search_stocks("no-such-company", rng) == []

    def test_indices(self, rng):
        indices = synthetic.get_market_indices(rng)
        assert [i.symbol for i in indices] == ["SPX", "DJI", "IXIC", "RUT"]
        assert all(i.value > 0 for i in indices)

    def test_catalog_contains_trending_symbols(self):
        """Every default and trending symbol resolves in the catalog."""
        for symbol in TRENDING_SYMBOLS:
            assert find_stock(symbol) is not None
        assert set(DEFAULT_SYMBOLS) <= set(TRENDING_SYMBOLS)


class TestFundamentals:
    """Test fundamentals generation."""

    def test_unknown_symbol(self, rng):
        assert synthetic.get_fundamentals("ZZZZ", rng) is None

    @pytest.mark.parametrize("symbol", [s.symbol for s in STOCKS[::7]])
    def test_non_negative_figures(self, symbol):
        """Everything except change and growth figures is non-negative."""
        rng = random.Random(3)
        for _ in range(5):
            fundamentals = synthetic.get_fundamentals(symbol, rng, now=NOW)
            for field, value in fundamentals.model_dump().items():
                if field in SIGNED_FIELDS or isinstance(value, bool):
                    continue
                if isinstance(value, (int, float)):
                    assert value >= 0, field

    def test_pe_ratio_follows_eps(self, rng):
        """P/E is price over EPS for profitable companies and 0 otherwise."""
        for _ in range(30):
            f = synthetic.get_fundamentals("MSFT", rng, now=NOW)
            if f.eps > 0:
                assert f.pe_ratio == pytest.approx(f.price / f.eps, abs=0.01)
            else:
                assert f.pe_ratio == 0

    def test_day_range_brackets_price(self, rng):
        f = synthetic.get_fundamentals("NVDA", rng, now=NOW)
        assert f.day_low <= f.price <= f.day_high
        assert f.fifty_two_week_low < f.price < f.fifty_two_week_high

    def test_crypto_has_no_dividend(self, rng):
        f = synthetic.get_fundamentals("COIN", rng, now=NOW)
        assert f.dividend_yield == 0
        assert f.ex_dividend_date is None

    def test_camel_case_wire_format(self, rng):
        """Serialized keys are camelCase, including the irregular ones."""
        body = synthetic.get_fundamentals("AAPL", rng, now=NOW).model_dump(by_alias=True)
        for key in ("changePercent", "forwardPE", "fiftyDayMA", "twoHundredDayMA", "peRatio"):
            assert key in body


class TestCorporateActions:
    """Test earnings, dividends, insiders and institutional holders."""

    def test_earnings_newest_first(self, rng):
        earnings = synthetic.get_earnings("AAPL", rng, quarters=8, now=NOW)
        assert len(earnings) == 8
        assert earnings[0].quarter == "Q1 2025"
        assert earnings[1].quarter == "Q4 2024"
        dates = [e.date for e in earnings]
        assert dates == sorted(dates, reverse=True)

    def test_earnings_surprise(self, rng):
        for e in synthetic.get_earnings("MSFT", rng, now=NOW):
            assert e.surprise == pytest.approx(e.actual_eps - e.estimated_eps, abs=0.011)

    def test_earnings_unknown_symbol(self, rng):
        assert synthetic.get_earnings("ZZZZ", rng) is None

    def test_dividends(self, rng):
        dividends = synthetic.get_dividends("JNJ", rng, count=4, now=NOW)
        assert len(dividends) == 4
        assert all(d.type == "cash" and d.amount > 0 for d in dividends)
        dates = [d.date for d in dividends]
        assert dates == sorted(dates, reverse=True)

    def test_crypto_dividends_empty(self, rng):
        assert synthetic.get_dividends("COIN", rng, now=NOW) == []

    def test_insider_transactions(self, rng):
        transactions = synthetic.get_insider_transactions("TSLA", rng, count=10, now=NOW)
        assert len(transactions) == 10
        for t in transactions:
            assert t.transaction_type in ("buy", "sell")
            assert t.value == int(t.shares * t.price)

    def test_institutional_holders(self, rng):
        holders = synthetic.get_institutional_holders("AAPL", rng, now=NOW)
        assert len(holders) == 10
        assert len({h.holder for h in holders}) == 10
        percents = [h.percent_held for h in holders]
        assert percents == sorted(percents, reverse=True)
        assert all(h.date_reported == "2025-03-31" for h in holders)

    def test_sector_performance(self, rng):
        rows = synthetic.get_sector_performance(rng)
        assert "Technology" in [r.sector for r in rows]
        for row in rows:
            assert -2.0 <= row.change_percent <= 2.0
            assert row.market_cap > 0


class TestSyntheticDataProvider:
    """Test the provider adapter over the generator."""

    def test_trending(self, synthetic_provider):
        stocks = asyncio.run(synthetic_provider.get_trending_stocks())
        assert [s.symbol for s in stocks] == TRENDING_SYMBOLS
        assert all(s.sparkline_data for s in stocks)

    def test_default_symbols(self, synthetic_provider):
        assert asyncio.run(synthetic_provider.get_default_symbols()) == DEFAULT_SYMBOLS

    def test_chart_for_unknown_symbol_is_empty(self, synthetic_provider):
        assert asyncio.run(synthetic_provider.get_chart("ZZZZ", "1M")) == []

    def test_chart_for_known_symbol(self, synthetic_provider):
        assert len(asyncio.run(synthetic_provider.get_chart("AAPL", "3M"))) == 65
