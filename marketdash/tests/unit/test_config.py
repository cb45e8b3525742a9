# marketdash/tests/unit/test_config.py
"""Unit tests for settings, environment validation and provider selection."""
from marketdash.market_data.market_data_provider import create_provider, get_provider, reset_provider
from marketdash.market_data.symbol_utils import normalize_symbol, to_yahoo_symbol, validate_symbol
from marketdash.utils.config import get_settings
from marketdash.utils import sentry_setup
from marketdash.utils.env_validator import get_env_summary, validate_env_vars


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for var in ("MARKET_DATA_SOURCE", "CACHE_TTL_SECONDS", "ALLOWED_ORIGINS", "PORT"):
            monkeypatch.delenv(var, raising=False)
        settings = get_settings()
        assert settings.market_data_source == "synthetic"
        assert settings.cache_ttl_seconds == 60.0
        assert settings.allowed_origins == ["*"]
        assert settings.port == 8000

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("MARKET_DATA_SOURCE", " Yahoo ")
        monkeypatch.setenv("CACHE_TTL_SECONDS", "15")
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test")
        settings = get_settings()
        assert settings.market_data_source == "yahoo"
        assert settings.cache_ttl_seconds == 15.0
        assert settings.allowed_origins == ["http://a.test", "http://b.test"]

    def test_bad_number_uses_default(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_SECONDS", "soon")
        assert get_settings().cache_ttl_seconds == 60.0


class TestEnvValidator:
    """Test startup validation and the health summary."""

    def test_missing_keys_are_recommendations(self, mock_env_vars):
        result = validate_env_vars()
        assert result["valid"] is True
        assert "GEMINI_API_KEY" in result["missing_recommended"]
        assert "HUGGINGFACE_API_KEY" in result["missing_recommended"]

    def test_unknown_source_warns(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("MARKET_DATA_SOURCE", "bloomberg")
        result = validate_env_vars()
        assert result["warnings"]

    def test_summary(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "g-key")
        assert get_env_summary() == {
            "gemini": True,
            "huggingface": False,
            "yahooFinance": False,
            "dataSource": "synthetic",
        }


class TestProviderSelection:
    """Test the provider registry."""

    def test_create_known_providers(self):
        assert create_provider("synthetic").name == "synthetic"
        assert create_provider("YAHOO").name == "yahoo"

    def test_unknown_falls_back_to_synthetic(self):
        assert create_provider("bloomberg").name == "synthetic"

    def test_yahoo_cache_uses_configured_limits(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_SECONDS", "5")
        monkeypatch.setenv("CACHE_MAX_SIZE", "3")
        cache = create_provider("yahoo").cache
        assert cache.ttl_seconds == 5.0
        assert cache.max_size == 3

    def test_singleton_follows_environment(self, monkeypatch):
        monkeypatch.setenv("MARKET_DATA_SOURCE", "yahoo")
        reset_provider()
        try:
            first = get_provider()
            assert first.name == "yahoo"
            assert get_provider() is first
        finally:
            reset_provider()


class TestSymbols:
    def test_normalize(self):
        assert normalize_symbol("$msft ") == "MSFT"
        assert normalize_symbol("brk.b") == "BRK.B"
        assert normalize_symbol("") == ""

    def test_yahoo_spelling(self):
        assert to_yahoo_symbol("spx") == "^GSPC"
        assert to_yahoo_symbol("BTCUSD") == "BTC-USD"
        assert to_yahoo_symbol("AAPL") == "AAPL"

    def test_validate(self):
        assert validate_symbol("AAPL")
        assert validate_symbol("^GSPC")
        assert not validate_symbol("not a symbol")


class TestSentrySetup:
    """Test that Sentry is configured from settings."""

    def test_disabled_without_dsn(self, mock_env_vars, monkeypatch):
        monkeypatch.setattr(sentry_setup, "_initialized", False)
        assert sentry_setup.init_sentry() is False

    def test_uses_settings_environment(self, mock_env_vars, monkeypatch):
        seen = {}
        monkeypatch.setattr(sentry_setup, "_initialized", False)
        monkeypatch.setattr(sentry_setup.sentry_sdk, "init", lambda **kwargs: seen.update(kwargs))
        monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example/1")
        monkeypatch.setenv("ENVIRONMENT", "staging")

        assert sentry_setup.init_sentry() is True
        assert seen["dsn"] == "https://key@sentry.example/1"
        assert seen["environment"] == "staging"
        assert seen["release"] == "0.1.0"
