"""Centralized logging configuration for breach-check.

Provides consistent, environment-controlled logging for the lookup
pipeline and quiets chatty driver loggers.
"""

import logging
import logging.config
import os
from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def resolve_log_level(value: str) -> str:
    """Map an arbitrary LOG_LEVEL value to a supported level name."""
    try:
        return LogLevel(value.upper()).value
    except ValueError:
        return LogLevel.INFO.value


def resolve_log_format(value: str) -> LogFormat:
    try:
        return LogFormat(value.lower())
    except ValueError:
        return LogFormat.SIMPLE


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Modules that should only log warnings and above
    QUIET_MODULES = [
        "asyncpg",
        "redis",
        "asyncio",
    ]

    @classmethod
    def build(cls, log_level: str, log_format: str) -> dict:
        """Build a dictConfig mapping for the given level and format."""
        effective_log_level = resolve_log_level(log_level)
        format_string = FORMAT_STRINGS[resolve_log_format(log_format)]

        logging_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "breach_check": {
                    "level": effective_log_level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

        for module in cls.QUIET_MODULES:
            logging_config["loggers"][module] = {
                "level": "WARNING" if effective_log_level != "DEBUG" else "DEBUG",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls) -> None:
        """Configure logging based on environment variables."""
        log_level = os.getenv("LOG_LEVEL", "INFO")
        log_format = os.getenv("LOG_FORMAT", "simple")

        logging.config.dictConfig(cls.build(log_level, log_format))

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={resolve_log_level(log_level)}, format={log_format}")

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module.

        Args:
            module_name: Name of the module
            level: Log level to set
        """
        logging.getLogger(module_name).setLevel(resolve_log_level(level))


def setup_logging() -> None:
    """Setup logging configuration from environment variables.

    Call once at application startup; library code only ever asks for
    ``logging.getLogger(__name__)``.
    """
    LoggingConfig.configure()
