"""Configuration for breach-check: settings and logging."""

from .settings import BreachCheckSettings, get_settings
from .logging_config import LoggingConfig, LogFormat, LogLevel, setup_logging

__all__ = [
    "BreachCheckSettings",
    "get_settings",
    "LoggingConfig",
    "LogFormat",
    "LogLevel",
    "setup_logging",
]
