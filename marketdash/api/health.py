# marketdash/api/health.py
from __future__ import annotations
from fastapi import APIRouter
from typing import Dict, Any
from datetime import datetime, timezone

from ..utils.env_validator import get_env_summary

health_router = APIRouter()


@health_router.get("/health")
def health() -> Dict[str, Any]:
    """Liveness check plus which optional services are configured."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": get_env_summary(),
    }
