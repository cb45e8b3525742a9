# marketdash/utils/config.py
"""
Process configuration loaded from the environment (and an optional .env file).
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

# Real environment variables win over .env values
load_dotenv(find_dotenv(usecwd=True), override=False)

SUPPORTED_DATA_SOURCES = ("synthetic", "yahoo")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Runtime settings. Built fresh by get_settings() so tests can monkeypatch the env."""
    market_data_source: str = "synthetic"
    cache_ttl_seconds: float = 60.0
    cache_max_size: int = 1000
    gemini_model: str = "gemini-2.5-flash"
    ai_request_timeout: float = 30.0
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    database_url: str = "sqlite:///marketdash.db"
    environment: str = "development"
    sentry_dsn: Optional[str] = None
    port: int = 8000


def get_settings() -> Settings:
    origins = os.getenv("ALLOWED_ORIGINS", "*")
    return Settings(
        market_data_source=os.getenv("MARKET_DATA_SOURCE", "synthetic").strip().lower(),
        cache_ttl_seconds=_env_float("CACHE_TTL_SECONDS", 60.0),
        cache_max_size=_env_int("CACHE_MAX_SIZE", 1000),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        ai_request_timeout=_env_float("AI_REQUEST_TIMEOUT", 30.0),
        allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
        database_url=os.getenv("DATABASE_URL", "sqlite:///marketdash.db"),
        environment=os.getenv("ENVIRONMENT", "development"),
        sentry_dsn=os.getenv("SENTRY_DSN") or None,
        port=_env_int("PORT", 8000),
    )


def get_gemini_api_key() -> Optional[str]:
    """Read at call time; absence degrades the AI endpoints to fallbacks."""
    return os.getenv("GEMINI_API_KEY") or None


def get_huggingface_api_key() -> Optional[str]:
    return os.getenv("HUGGINGFACE_API_KEY") or None
