"""Tests for the exception hierarchy and HTTP status mapping."""

import pytest

from breach_check.core.exceptions import (
    BreachCheckError,
    CacheError,
    CacheSerializationError,
    ConfigurationError,
    HttpStatusMapper,
    IdentifierValidationError,
    StoreConnectionError,
    StoreError,
    StoreQueryError,
    StoreTimeoutError,
    ValidationReason,
    create_error_response,
    get_http_status_code,
)


class TestHttpStatusMapping:
    """Status codes for typed errors."""

    @pytest.mark.parametrize("exc, expected", [
        (IdentifierValidationError(ValidationReason.EMPTY), 400),
        (IdentifierValidationError(ValidationReason.MALFORMED), 400),
        (StoreConnectionError("down"), 503),
        (StoreTimeoutError(5.0), 503),
        (StoreQueryError("bad query"), 500),
        (StoreError("generic"), 500),
        (CacheSerializationError("garbage"), 500),
        (ConfigurationError("bad config"), 500),
        (BreachCheckError("anything"), 500),
        (RuntimeError("not ours"), 500),
    ])
    def test_status_codes(self, exc, expected):
        assert get_http_status_code(exc) == expected

    def test_unmapped_subclass_inherits_parent_status(self):
        class ReplicaLagError(StoreConnectionError):
            pass

        assert get_http_status_code(ReplicaLagError("lagging")) == 503

    def test_overrides_take_precedence(self):
        mapper = HttpStatusMapper(overrides={StoreTimeoutError: 504})

        assert mapper.get_status_code(StoreTimeoutError(1.0)) == 504
        assert mapper.get_status_code(StoreConnectionError("down")) == 503

    def test_clear_cache(self):
        mapper = HttpStatusMapper()
        mapper.get_status_code(CacheError("x"))
        mapper.clear_cache()
        assert mapper.get_status_code(CacheError("x")) == 500


class TestErrorPayloads:
    """Error details and response bodies."""

    def test_default_error_code_is_class_name(self):
        assert StoreQueryError("boom").error_code == "StoreQueryError"

    def test_store_error_carries_identifier(self):
        error = StoreConnectionError("down", identifier="a@example.com")

        assert error.identifier == "a@example.com"
        assert error.details == {"identifier": "a@example.com"}

    def test_timeout_message(self):
        error = StoreTimeoutError(2.5, identifier="a@example.com")

        assert error.timeout_seconds == 2.5
        assert error.message == "Record store query timed out after 2.5 seconds"

    def test_validation_error_response(self):
        response = create_error_response(IdentifierValidationError(ValidationReason.EMPTY))

        assert response == {
            "error": "Email is required",
            "code": "VALIDATION_EMPTY",
            "details": {"reason": "EMPTY"},
        }

    def test_store_errors_are_breach_check_errors(self):
        assert issubclass(StoreTimeoutError, StoreError)
        assert issubclass(StoreError, BreachCheckError)
        assert not issubclass(CacheError, StoreError)
