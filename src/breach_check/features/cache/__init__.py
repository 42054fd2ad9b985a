"""Cache feature for breach-check.

Feature-First layout:
- entities/: cache protocol and configuration
- adapters/: Redis and in-memory implementations
"""

from .entities.protocols import Cache, CacheBackend
from .entities.config import RedisCacheConfig
from .adapters.redis_adapter import RedisAdapter
from .adapters.memory_adapter import MemoryAdapter

__all__ = [
    "Cache",
    "CacheBackend",
    "RedisCacheConfig",
    "RedisAdapter",
    "MemoryAdapter",
]
