"""Exception hierarchy for breach-check."""

from .base import BreachCheckError, create_error_response, get_http_status_code
from .domain import ConfigurationError, IdentifierValidationError, ValidationReason
from .infrastructure import (
    CacheError,
    CacheSerializationError,
    StoreConnectionError,
    StoreError,
    StoreQueryError,
    StoreTimeoutError,
)
from .http_mapping import HTTP_STATUS_MAP, HttpStatusMapper

__all__ = [
    "BreachCheckError",
    "ConfigurationError",
    "IdentifierValidationError",
    "ValidationReason",
    "StoreError",
    "StoreConnectionError",
    "StoreTimeoutError",
    "StoreQueryError",
    "CacheError",
    "CacheSerializationError",
    "HTTP_STATUS_MAP",
    "HttpStatusMapper",
    "get_http_status_code",
    "create_error_response",
]
