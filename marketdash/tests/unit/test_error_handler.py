# marketdash/tests/unit/test_error_handler.py
"""Unit tests for error handler utilities."""
import json

from fastapi import HTTPException, status

from marketdash.utils.error_handler import (
    error_response,
    handle_internal_error,
    handle_not_found_error,
    handle_validation_error,
    safe_execute,
)


class TestErrorHandler:
    """Test error handler utilities."""

    def test_error_response_shape(self):
        """Error bodies are {"error": message}."""
        response = error_response("Stock not found", 404)
        assert response.status_code == 404
        assert json.loads(response.body) == {"error": "Stock not found"}

    def test_handle_validation_error(self):
        result = handle_validation_error("Invalid search query")
        assert isinstance(result, HTTPException)
        assert result.status_code == status.HTTP_400_BAD_REQUEST
        assert result.detail == "Invalid search query"

    def test_handle_not_found_error_default(self):
        result = handle_not_found_error()
        assert result.status_code == status.HTTP_404_NOT_FOUND
        assert result.detail == "Stock not found"

    def test_handle_internal_error_hides_details(self):
        """The client sees only the static message."""
        result = handle_internal_error(RuntimeError("db password leaked"), "Failed to fetch stocks")
        assert result.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert result.detail == "Failed to fetch stocks"

    def test_safe_execute_success(self):
        assert safe_execute(lambda x: x * 2, 5) == 10

    def test_safe_execute_failure(self):
        """Errors return the default value."""
        def boom():
            raise ValueError("nope")

        assert safe_execute(boom, default_return="fallback") == "fallback"
