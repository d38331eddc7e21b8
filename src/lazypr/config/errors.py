"""Configuration error types."""


class ConfigError(Exception):
    """Base class for configuration errors."""


class ConfigValidationError(ConfigError):
    """A configuration value is malformed or out of range."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.message = message


class MissingRequiredKeyError(ConfigError):
    """A required setting is absent and has no default."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required configuration key: {key}")
        self.key = key


class UnknownKeyError(ConfigError):
    """A key is not part of the configuration registry."""

    def __init__(self, key: str, known_keys) -> None:
        super().__init__(
            f"Unknown config key '{key}'. Valid keys: {', '.join(known_keys)}"
        )
        self.key = key
