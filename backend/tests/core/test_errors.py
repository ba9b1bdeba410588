"""Error Hierarchy: status codes, categories, and client-facing bodies."""

from product_api.core.errors import (
    ErrorCategory, NotFoundError, RateLimitExceededError, StoreError, ValidationError,
)


def test_validation_error_is_400_with_message_only():
    exc = ValidationError("Invalid product ID", field="id")
    assert exc.http_status == 400
    assert exc.category is ErrorCategory.VALIDATION
    assert exc.to_response() == {"message": "Invalid product ID"}


def test_not_found_defaults_to_product_message():
    exc = NotFoundError()
    assert exc.http_status == 404
    assert exc.to_response() == {"message": "Product not found"}


def test_store_error_carries_cause_as_diagnostic_text():
    exc = StoreError("connection reset by peer", "insert")
    assert exc.http_status == 500
    assert exc.context.operation == "insert"
    assert exc.to_response() == {
        "message": "Server error", "error": "connection reset by peer",
    }


def test_rate_limit_error_records_retry_after():
    exc = RateLimitExceededError(30)
    assert exc.http_status == 429
    assert exc.context.retry_after_seconds == 30
    assert exc.to_response() == {"message": "Too many requests, please try again later."}
