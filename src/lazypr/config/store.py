"""Persistent key/value configuration store."""

from pathlib import Path
from typing import Dict, List, Mapping

import structlog
from pydantic import BaseModel, Field

from lazypr.config.errors import ConfigError, ConfigValidationError, MissingRequiredKeyError
from lazypr.config.schema import CONFIG_SCHEMA, ConfigEntry

logger = structlog.get_logger(__name__)


class ValidationReport(BaseModel):
    """Outcome of validating every registered key."""

    valid: bool = Field(..., description="Whether every key validated")
    errors: List[str] = Field(default_factory=list, description="One message per failing key")


def parse_config_text(text: str) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines.

    Comments and blank lines are skipped. Lines are split on the first ``=``
    only, so values may themselves contain ``=``. Later lines win.

    Args:
        text: Raw file content

    Returns:
        Ordered mapping of keys to raw values
    """
    values: Dict[str, str] = {}
    for line in text.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        values[key.strip()] = value.strip()
    return values


def serialize_config(values: Mapping[str, str]) -> str:
    """Serialize a mapping back to ``KEY=VALUE`` lines without quoting."""
    return "\n".join(f"{key}={value}" for key, value in values.items())


class ConfigStore:
    """Configuration backed by a single user-scoped file.

    The file is read lazily on first access and cached for the lifetime of
    the instance. Every mutation rewrites the whole file. Concurrent processes
    are not coordinated; the last writer wins.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the configuration file
        """
        self.path = Path(path)
        self._values: Dict[str, str] = {}
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read config file {self.path}: {e}") from e
        self._values = parse_config_text(text)
        self._loaded = True
        logger.debug("config_loaded", path=str(self.path), keys=list(self._values))

    def _persist(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(serialize_config(self._values), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to write config file {self.path}: {e}") from e
        logger.debug("config_saved", path=str(self.path), keys=list(self._values))

    def _entry(self, key: str) -> ConfigEntry:
        try:
            return CONFIG_SCHEMA[key]
        except KeyError:
            raise ConfigError(f"Key '{key}' is not a registered config key") from None

    def reload(self) -> None:
        """Drop the cached values so the next access re-reads the file."""
        self._values = {}
        self._loaded = False

    def stored_keys(self) -> List[str]:
        """Keys currently present in the file (as loaded)."""
        self._ensure_loaded()
        return list(self._values)

    def get(self, key: str) -> str:
        """Get the canonical value of a key.

        Args:
            key: Registered config key

        Returns:
            The stored value, or the default, after validation

        Raises:
            ConfigValidationError: If the stored or default value is invalid
            MissingRequiredKeyError: If the key is required and has no value
        """
        entry = self._entry(key)
        self._ensure_loaded()

        if key in self._values:
            return entry.validate(self._values[key])

        default = entry.resolve_default(self.get)
        if default is not None:
            return entry.validate(default)
        if entry.required:
            raise MissingRequiredKeyError(key)
        return entry.validate("")

    def set(self, key: str, value: str) -> None:
        """Validate and persist a value.

        Nothing is written if validation fails. Line breaks are rejected for
        every key since the file holds one entry per line.

        Raises:
            ConfigValidationError: If the value is invalid
        """
        entry = self._entry(key)
        if "\n" in value or "\r" in value:
            raise ConfigValidationError(key, f"{key} cannot contain line breaks")
        canonical = entry.validate(value)
        self._ensure_loaded()
        self._values[key] = canonical
        self._persist()

    def remove(self, key: str) -> None:
        """Remove a key so that its default applies again."""
        self._entry(key)
        self._ensure_loaded()
        self._values.pop(key, None)
        self._persist()

    def clear(self) -> None:
        """Remove every stored key."""
        self._ensure_loaded()
        self._values.clear()
        self._persist()

    def get_all(self) -> Dict[str, str]:
        """Canonical values of every registered key."""
        return {key: self.get(key) for key in CONFIG_SCHEMA}

    def validate_all(self) -> ValidationReport:
        """Validate every registered key without stopping at the first failure."""
        errors = []
        for key in CONFIG_SCHEMA:
            try:
                self.get(key)
            except ConfigError as e:
                errors.append(f"{key}: {e}")
        return ValidationReport(valid=not errors, errors=errors)
