"""Lookup entities."""

from .lookup_result import (
    CACHE_FORMAT_VERSION,
    CACHE_KEY_PREFIX,
    LookupResult,
    cache_key,
    decode_result,
    encode_result,
)

__all__ = [
    "CACHE_FORMAT_VERSION",
    "CACHE_KEY_PREFIX",
    "LookupResult",
    "cache_key",
    "decode_result",
    "encode_result",
]
