"""Configuration exceptions: config files, env vars and CLI overrides."""

from typing import Any

from .base import MonorepoHealthError


class ConfigurationError(MonorepoHealthError):
    """Base class for configuration-related errors."""

    hint = "Check monorepo-health.toml and MONOREPO_HEALTH_* environment variables"


class InvalidConfigError(ConfigurationError):
    """A single configuration key has an unusable value."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
