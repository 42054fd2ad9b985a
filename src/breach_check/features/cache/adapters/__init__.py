"""Cache adapters."""

from .redis_adapter import RedisAdapter
from .memory_adapter import MemoryAdapter

__all__ = ["RedisAdapter", "MemoryAdapter"]
