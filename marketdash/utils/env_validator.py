# marketdash/utils/env_validator.py
"""
Environment variable validation on startup.
Nothing is strictly required: missing AI keys degrade to local fallbacks.
"""
import os
from typing import Dict, Any

from .config import SUPPORTED_DATA_SOURCES, get_settings
from .logger import log_info, log_warning

# Required environment variables (must be set)
REQUIRED_ENV_VARS: list = []

# Optional but recommended environment variables
RECOMMENDED_ENV_VARS = [
    "GEMINI_API_KEY",  # AI prediction / analysis / generative sentiment
    "HUGGINGFACE_API_KEY",  # FinBERT sentiment classification
]

# Environment variable descriptions
ENV_VAR_DESCRIPTIONS: Dict[str, str] = {
    "GEMINI_API_KEY": "Google Gemini API key (predictions and analysis fall back to heuristics without it)",
    "HUGGINGFACE_API_KEY": "Hugging Face inference API key (sentiment falls back to keyword counting without it)",
    "MARKET_DATA_SOURCE": "Market data source: synthetic (default) or yahoo",
    "CACHE_TTL_SECONDS": "Provider cache time-to-live in seconds (default: 60)",
    "SENTRY_DSN": "Sentry error tracking DSN (optional)",
    "ALLOWED_ORIGINS": "Comma-separated CORS origins (default: *)",
}


def validate_env_vars() -> Dict[str, Any]:
    """
    Validate environment variables on startup.

    Returns:
        Dictionary with validation results:
        {
            "valid": bool,
            "missing_required": List[str],
            "missing_recommended": List[str],
            "warnings": List[str]
        }
    """
    result = {
        "valid": True,
        "missing_required": [],
        "missing_recommended": [],
        "warnings": []
    }

    for var in REQUIRED_ENV_VARS:
        if not os.getenv(var):
            result["missing_required"].append(var)
            result["valid"] = False

    for var in RECOMMENDED_ENV_VARS:
        if not os.getenv(var):
            result["missing_recommended"].append(var)

    source = get_settings().market_data_source
    if source not in SUPPORTED_DATA_SOURCES:
        result["warnings"].append(
            f"MARKET_DATA_SOURCE={source!r} is not supported; using 'synthetic'"
        )

    return result


def print_env_validation(validation_result: Dict[str, Any]) -> None:
    """Log environment variable validation results."""
    if not validation_result["valid"]:
        log_warning(f"Environment validation failed, missing: {', '.join(validation_result['missing_required'])}")
    else:
        log_info("Environment validation passed")

    for var in validation_result["missing_recommended"]:
        desc = ENV_VAR_DESCRIPTIONS.get(var, "No description")
        log_warning(f"Missing recommended variable {var}: {desc}")

    for warning in validation_result["warnings"]:
        log_warning(warning)


def get_env_summary() -> Dict[str, Any]:
    """Service flags for the health endpoint (no secret values)."""
    settings = get_settings()
    source = settings.market_data_source if settings.market_data_source in SUPPORTED_DATA_SOURCES else "synthetic"
    return {
        "gemini": bool(os.getenv("GEMINI_API_KEY")),
        "huggingface": bool(os.getenv("HUGGINGFACE_API_KEY")),
        "yahooFinance": source == "yahoo",
        "dataSource": source,
    }
