# marketdash/api/__init__.py
"""HTTP layer: dashboard routes and the health check."""

from .routes import router
from .health import health_router

__all__ = ["router", "health_router"]
