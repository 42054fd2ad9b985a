"""HTTP status code mapping for exceptions.

Lookup of the most specific mapped class along the exception's MRO, so
subclasses inherit their parent's status unless mapped explicitly.
"""

from typing import Dict, Optional, Type

from .base import BreachCheckError
from .domain import ConfigurationError, IdentifierValidationError
from .infrastructure import (
    CacheError,
    StoreConnectionError,
    StoreError,
    StoreQueryError,
    StoreTimeoutError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    IdentifierValidationError: 400,

    # 500 Internal Server Error
    StoreError: 500,
    StoreQueryError: 500,
    CacheError: 500,
    ConfigurationError: 500,

    # 503 Service Unavailable
    StoreConnectionError: 503,
    StoreTimeoutError: 503,

    # Default for BreachCheckError
    BreachCheckError: 500,
}


class HttpStatusMapper:
    """Maps exceptions to HTTP status codes with optional overrides."""

    def __init__(self, overrides: Optional[Dict[Type[Exception], int]] = None):
        self._overrides = dict(overrides or {})
        self._cache: Dict[Type[Exception], int] = {}

    def get_status_code(self, exception: Exception) -> int:
        exception_type = type(exception)

        if exception_type in self._cache:
            return self._cache[exception_type]

        status_code = 500
        for klass in exception_type.__mro__:
            if klass in self._overrides:
                status_code = self._overrides[klass]
                break
            if klass in HTTP_STATUS_MAP:
                status_code = HTTP_STATUS_MAP[klass]
                break

        self._cache[exception_type] = status_code
        return status_code

    def clear_cache(self) -> None:
        """Clear the status code cache."""
        self._cache.clear()


_global_mapper: Optional[HttpStatusMapper] = None


def get_mapper() -> HttpStatusMapper:
    """Get or create the global HTTP status mapper."""
    global _global_mapper
    if _global_mapper is None:
        _global_mapper = HttpStatusMapper()
    return _global_mapper


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception using the global mapper."""
    return get_mapper().get_status_code(exception)
