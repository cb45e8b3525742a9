# marketdash/utils/error_handler.py
"""
Centralized error handling utilities.
Provides consistent {"error": ...} responses for the HTTP layer.
"""
from typing import Dict, Any, Optional
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the uniform error body."""
    return JSONResponse(status_code=status_code, content={"error": message})


def handle_validation_error(message: str) -> HTTPException:
    """
    Handle request validation errors.

    Args:
        message: Client-facing error message

    Returns:
        HTTPException with 400 status
    """
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=message
    )


def handle_not_found_error(message: str = "Stock not found") -> HTTPException:
    """Handle not found errors."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=message
    )


def handle_internal_error(e: Exception, message: str, context: Optional[Dict[str, Any]] = None) -> HTTPException:
    """
    Log an unexpected error with its traceback, report it, and hide the details.

    Args:
        e: The exception that occurred
        message: Static message returned to the client
        context: Extra context attached to the error report

    Returns:
        HTTPException with 500 status
    """
    from .sentry_setup import capture_exception

    logger.error(f"{message}: {e}", exc_info=e)
    capture_exception(e, **({"request": context} if context else {}))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message
    )


def safe_execute(func, *args, default_return=None, error_message: str = "Operation failed", **kwargs):
    """
    Safely execute a function and return default value on error.
    Useful for non-critical operations.

    Args:
        func: Function to execute
        *args: Positional arguments
        default_return: Value to return on error
        error_message: Error message to log
        **kwargs: Keyword arguments

    Returns:
        Function result or default_return on error
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        logger.warning(f"{error_message}: {e}")
        return default_return
