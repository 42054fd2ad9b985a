"""Lookup feature: cache-aside breach lookups.

- entities/: lookup result and its cache wire format
- services/: the coordinator combining cache and record store
"""

from .entities import LookupResult, cache_key, decode_result, encode_result
from .services import LookupService

__all__ = [
    "LookupResult",
    "LookupService",
    "cache_key",
    "decode_result",
    "encode_result",
]
