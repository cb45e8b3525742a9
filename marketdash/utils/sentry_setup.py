# marketdash/utils/sentry_setup.py
"""
Sentry error monitoring setup.
"""
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.httpx import HttpxIntegration

from .. import __version__
from .config import get_settings
from .logger import log_info, log_warning

_initialized = False


def init_sentry() -> bool:
    """Initialize Sentry error monitoring when SENTRY_DSN is set."""
    global _initialized

    settings = get_settings()
    sentry_dsn = settings.sentry_dsn
    if not sentry_dsn:
        log_info("SENTRY_DSN not set. Error monitoring disabled.")
        return False

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                HttpxIntegration(),
            ],
            traces_sample_rate=0.1,  # 10% of transactions
            environment=settings.environment,
            release=__version__,
        )
    except Exception as e:
        log_warning(f"Failed to initialize Sentry: {e}")
        return False

    _initialized = True
    log_info("Sentry error monitoring initialized")
    return True


def capture_exception(error: Exception, **context) -> None:
    """Capture an exception with context. No-op until init_sentry() succeeded."""
    if not _initialized:
        return
    with sentry_sdk.new_scope() as scope:
        for key, value in context.items():
            scope.set_context(key, value)
        sentry_sdk.capture_exception(error)
