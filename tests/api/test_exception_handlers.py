"""Tests for FastAPI exception handler registration."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from breach_check.api import register_exception_handlers
from breach_check.core.exceptions import (
    IdentifierValidationError,
    StoreConnectionError,
    StoreQueryError,
    StoreTimeoutError,
    ValidationReason,
)


def build_app(error: Exception, is_production: bool = True, **kwargs) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app, is_production=is_production, **kwargs)

    @app.get("/check")
    async def check():
        raise error

    return app


@pytest.mark.parametrize("error, status_code, message", [
    (IdentifierValidationError(ValidationReason.EMPTY), 400, "Email is required"),
    (IdentifierValidationError(ValidationReason.MALFORMED), 400, "Invalid email format"),
    (StoreConnectionError("Record store unavailable"), 503, "Record store unavailable"),
    (StoreTimeoutError(5.0), 503, "Record store query timed out after 5.0 seconds"),
    (StoreQueryError("Record store query failed"), 500, "Record store query failed"),
])
def test_typed_errors_map_to_status(error, status_code, message):
    client = TestClient(build_app(error))

    response = client.get("/check")

    assert response.status_code == status_code
    assert response.json()["error"] == message
    assert response.json()["code"] == error.error_code


def test_custom_response_formatter():
    client = TestClient(build_app(
        IdentifierValidationError(ValidationReason.EMPTY),
        response_formatter=lambda exc: {"error": exc.message},
    ))

    assert client.get("/check").json() == {"error": "Email is required"}


def test_unexpected_errors_are_hidden_in_production():
    client = TestClient(build_app(RuntimeError("secret internals")), raise_server_exceptions=False)

    response = client.get("/check")

    assert response.status_code == 500
    assert response.json() == {"error": "An unexpected error occurred"}


def test_unexpected_errors_shown_outside_production():
    client = TestClient(build_app(RuntimeError("boom"), is_production=False), raise_server_exceptions=False)

    assert client.get("/check").json() == {"error": "boom"}
