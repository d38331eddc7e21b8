"""Configuration schema, persistence and runtime settings."""

from lazypr.config.errors import (
    ConfigError,
    ConfigValidationError,
    MissingRequiredKeyError,
    UnknownKeyError,
)
from lazypr.config.schema import (
    CONFIG_KEYS,
    CONFIG_SCHEMA,
    ConfigEntry,
    ensure_known_key,
    validate_value,
)
from lazypr.config.settings import AppSettings
from lazypr.config.store import ConfigStore, ValidationReport

__all__ = [
    "AppSettings",
    "ConfigStore",
    "ValidationReport",
    "ConfigEntry",
    "CONFIG_SCHEMA",
    "CONFIG_KEYS",
    "ensure_known_key",
    "validate_value",
    "ConfigError",
    "ConfigValidationError",
    "MissingRequiredKeyError",
    "UnknownKeyError",
]
