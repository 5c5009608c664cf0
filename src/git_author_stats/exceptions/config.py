"""Configuration errors: invalid settings and malformed user input."""

from typing import Any

from .base import AuthorStatsError


class ConfigurationError(AuthorStatsError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidDateError(ConfigurationError):
    """Raised when a date bound is not in YYYY-MM-DD form."""

    def __init__(self, value: str):
        super().__init__(
            f"Invalid date: {value}", details={"expected": "YYYY-MM-DD"}
        )
        self.value = value
