"""Cache entities."""

from .protocols import Cache, CacheBackend
from .config import RedisCacheConfig

__all__ = ["Cache", "CacheBackend", "RedisCacheConfig"]
