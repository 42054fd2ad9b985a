"""
Configuration management for breach-check.

Settings are read from the environment (and an optional ``.env`` file) by
pydantic-settings. Services construct the lookup pipeline from a single
settings object instead of reading environment variables ad hoc.
"""
from functools import lru_cache
from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from ..features.cache.entities.protocols import CacheBackend


class BreachCheckSettings(BaseSettings):
    """Settings for the breach lookup pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Core Application Settings
    app_name: str = Field(default="breach-check")
    environment: str = Field(default="development")

    # Database Configuration
    database_url: Optional[str] = Field(default=None)
    db_host: str = Field(default="db")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="postgres")
    db_password: SecretStr = Field(default=SecretStr("postgres"))
    db_name: str = Field(default="breachdb")
    db_pool_min_size: int = Field(default=5, ge=0)
    db_pool_max_size: int = Field(default=25, ge=1)
    db_pool_max_inactive_lifetime: float = Field(default=300.0, ge=0)
    db_connect_max_retries: int = Field(default=5, ge=1)
    db_connect_retry_delay_ms: int = Field(default=1000, ge=0)
    db_connect_backoff: str = Field(default="linear")
    store_timeout: float = Field(default=5.0, gt=0)
    compromised_table: str = Field(default="compromised_emails")

    # Cache Configuration
    cache_backend: CacheBackend = Field(default=CacheBackend.REDIS)
    redis_url: Optional[str] = Field(default=None)
    redis_pool_size: int = Field(default=10, ge=1)
    redis_key_prefix: str = Field(default="")
    cache_timeout: float = Field(default=0.5, gt=0)
    cache_ttl: int = Field(default=3600, gt=0)  # 1 hour
    cache_reconnect_interval: float = Field(default=30.0, ge=0)

    # Lookup behaviour
    lookup_include_source: bool = Field(default=False)

    @field_validator("db_connect_backoff")
    @classmethod
    def validate_backoff(cls, v: str) -> str:
        value = v.lower()
        if value not in ("fixed", "linear", "exponential"):
            raise ValueError(f"Unsupported backoff type: {v}")
        return value

    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "BreachCheckSettings":
        if self.db_pool_max_size < self.db_pool_min_size:
            raise ValueError("db_pool_max_size must be greater than or equal to db_pool_min_size")
        return self

    def get_database_url(self) -> str:
        """DATABASE_URL if given, otherwise a DSN built from the DB_* fields."""
        if self.database_url:
            return self.database_url.replace("+asyncpg", "")
        password = quote(self.db_password.get_secret_value(), safe="")
        return (
            f"postgresql://{quote(self.db_user, safe='')}:{password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def is_cache_enabled(self) -> bool:
        """Check if Redis caching is configured."""
        return bool(self.redis_url)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_pool_config(self) -> Dict[str, Any]:
        """Keyword arguments for asyncpg.create_pool."""
        return {
            "min_size": self.db_pool_min_size,
            "max_size": self.db_pool_max_size,
            "max_inactive_connection_lifetime": self.db_pool_max_inactive_lifetime,
            "command_timeout": self.store_timeout,
        }


@lru_cache()
def get_settings() -> BreachCheckSettings:
    """Get the process-wide settings instance."""
    try:
        return BreachCheckSettings()
    except ValueError as e:
        raise ConfigurationError(f"Invalid breach-check configuration: {e}") from e
