"""Cache configuration for breach-check."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RedisCacheConfig:
    """Connection and behaviour settings for the Redis adapter."""

    url: Optional[str] = None
    max_connections: int = 10
    key_prefix: str = ""
    command_timeout: float = 0.5
    connect_timeout: float = 2.0
    health_check_interval: int = 30
    reconnect_interval: float = 30.0

    def __post_init__(self):
        if self.max_connections < 1:
            raise ValueError("max_connections must be positive")
        if self.command_timeout <= 0:
            raise ValueError("command_timeout must be positive")

    @property
    def is_enabled(self) -> bool:
        """Whether a Redis URL was configured."""
        return bool(self.url)

    def to_pool_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ConnectionPool.from_url (url excluded)."""
        return {
            "max_connections": self.max_connections,
            "decode_responses": True,
            "socket_timeout": self.command_timeout,
            "socket_connect_timeout": self.connect_timeout,
            "health_check_interval": self.health_check_interval,
        }

    @classmethod
    def from_settings(cls, settings) -> "RedisCacheConfig":
        """Build from a BreachCheckSettings instance."""
        return cls(
            url=settings.redis_url,
            max_connections=settings.redis_pool_size,
            key_prefix=settings.redis_key_prefix,
            command_timeout=settings.cache_timeout,
            reconnect_interval=settings.cache_reconnect_interval,
        )
