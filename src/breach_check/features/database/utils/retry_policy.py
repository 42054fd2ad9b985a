"""Retry policy for record store connection establishment."""

import random
from dataclasses import dataclass
from enum import Enum


class BackoffType(Enum):
    """Types of backoff strategies."""

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    FIXED = "fixed"


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently to retry opening the database pool.

    Applies to connection establishment only. Individual queries are never
    retried by the lookup pipeline.
    """

    max_attempts: int = 5
    backoff_type: BackoffType = BackoffType.LINEAR
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    jitter: bool = False

    def __post_init__(self):
        """Validate retry policy parameters."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay_ms < 0:
            raise ValueError("initial_delay_ms must be non-negative")
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError("max_delay_ms must be >= initial_delay_ms")

    def calculate_delay(self, attempt: int) -> int:
        """
        Calculate the delay after a failed attempt.

        Args:
            attempt: Failed attempt number (1-based)

        Returns:
            Delay in milliseconds
        """
        if attempt <= 0:
            return 0

        if self.backoff_type == BackoffType.EXPONENTIAL:
            delay = self.initial_delay_ms * (2 ** (attempt - 1))
        elif self.backoff_type == BackoffType.LINEAR:
            delay = self.initial_delay_ms * attempt
        else:  # FIXED
            delay = self.initial_delay_ms

        delay = min(delay, self.max_delay_ms)

        if self.jitter and delay > 0:
            jitter_range = int(delay * 0.1)  # 10% jitter
            delay += random.randint(-jitter_range, jitter_range)
            delay = max(0, delay)

        return delay

    def should_retry(self, attempt: int) -> bool:
        """Whether another attempt follows failed attempt number ``attempt``."""
        return attempt < self.max_attempts

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        """Build from a BreachCheckSettings instance."""
        initial = settings.db_connect_retry_delay_ms
        return cls(
            max_attempts=settings.db_connect_max_retries,
            backoff_type=BackoffType(settings.db_connect_backoff),
            initial_delay_ms=initial,
            max_delay_ms=max(30000, initial),
        )


DEFAULT_CONNECT_POLICY = RetryPolicy()
