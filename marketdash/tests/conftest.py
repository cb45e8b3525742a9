# marketdash/tests/conftest.py
"""
Pytest configuration and fixtures for MarketDash tests.
"""
import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketdash.api.dependencies import get_gemini, get_huggingface, get_market_provider
from marketdash.db.session import Base
from marketdash.db import models  # noqa: F401
from marketdash.main import create_app
from marketdash.market_data.adapters.synthetic_adapter import SyntheticDataProvider
from marketdash.services.gemini_service import GeminiService
from marketdash.services.huggingface_service import HuggingFaceService


# Test database URL (in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite:///:memory:"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="function")
def db_session():
    """Create a test database session."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def mock_env_vars(monkeypatch):
    """No AI keys, synthetic data, no Sentry."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("MARKET_DATA_SOURCE", "synthetic")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("HUGGINGFACE_API_KEY", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def synthetic_provider(rng):
    return SyntheticDataProvider(rng=rng)


@pytest.fixture
def client(mock_env_vars, synthetic_provider):
    """Test client over a seeded synthetic provider and key-less AI services."""
    app = create_app()
    app.dependency_overrides[get_market_provider] = lambda: synthetic_provider
    app.dependency_overrides[get_gemini] = lambda: GeminiService(rng=random.Random(7))
    app.dependency_overrides[get_huggingface] = lambda: HuggingFaceService()
    return TestClient(app)
