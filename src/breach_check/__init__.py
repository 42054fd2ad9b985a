"""Breach-Check - cache-aside lookup of email addresses in a breach corpus.

The library answers "has this email appeared in a known breach?" from a
PostgreSQL record store, with Redis in front of it as a volatile cache.
Logging is configured by the hosting application via ``setup_logging()``.
"""

from .__version__ import __version__

from .config import BreachCheckSettings, get_settings, setup_logging

from .core.exceptions import (
    BreachCheckError,
    ConfigurationError,
    IdentifierValidationError,
    ValidationReason,
    StoreError,
    StoreConnectionError,
    StoreTimeoutError,
    StoreQueryError,
    CacheError,
    get_http_status_code,
    create_error_response,
)

from .core.value_objects import EmailIdentifier, normalize

from .features.cache import Cache, MemoryAdapter, RedisAdapter, RedisCacheConfig
from .features.database import (
    CompromisedEmailRepository,
    CompromisedRecord,
    DatabaseManager,
    RecordStore,
    RetryPolicy,
)
from .features.lookup import LookupResult, LookupService

__all__ = [
    "__version__",
    # Configuration
    "BreachCheckSettings",
    "get_settings",
    "setup_logging",
    # Exceptions
    "BreachCheckError",
    "ConfigurationError",
    "IdentifierValidationError",
    "ValidationReason",
    "StoreError",
    "StoreConnectionError",
    "StoreTimeoutError",
    "StoreQueryError",
    "CacheError",
    "get_http_status_code",
    "create_error_response",
    # Identifiers
    "EmailIdentifier",
    "normalize",
    # Cache
    "Cache",
    "MemoryAdapter",
    "RedisAdapter",
    "RedisCacheConfig",
    # Record store
    "CompromisedEmailRepository",
    "CompromisedRecord",
    "DatabaseManager",
    "RecordStore",
    "RetryPolicy",
    # Lookup
    "LookupResult",
    "LookupService",
]
