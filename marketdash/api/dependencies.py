# marketdash/api/dependencies.py
"""FastAPI dependencies. Tests swap these through app.dependency_overrides."""
from ..market_data.market_data_provider import BaseMarketDataProvider, get_provider
from ..services.gemini_service import GeminiService, get_gemini_service
from ..services.huggingface_service import HuggingFaceService, get_huggingface_service


def get_market_provider() -> BaseMarketDataProvider:
    return get_provider()


def get_gemini() -> GeminiService:
    return get_gemini_service()


def get_huggingface() -> HuggingFaceService:
    return get_huggingface_service()
