"""Registry of every recognized configuration setting.

Each entry owns its default and a validate function that both checks the
raw string and returns its canonical form.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from lazypr.config.errors import ConfigValidationError, UnknownKeyError

Validator = Callable[[str], str]
DefaultFactory = Callable[[Callable[[str], str]], str]

SUPPORTED_PROVIDERS = ("groq", "cerebras", "openai")
SUPPORTED_LOCALES = ("en", "es", "pt", "fr", "de", "it", "ja", "ko", "zh")

# Default model per provider, used when MODEL is not set
DEFAULT_MODELS = {
    "groq": "llama-3.3-70b",
    "cerebras": "llama3.1-8b",
    "openai": "gpt-4o-mini",
}

MAX_CONTEXT_LENGTH = 200
MAX_CUSTOM_LABELS = 17

API_KEY_PATTERN = re.compile(r"^[A-Za-z0-9._-]{20,}$")
LABEL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]{0,49}$")
INTEGER_PATTERN = re.compile(r"^[0-9]+$")

_url_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class ConfigEntry:
    """Schema for a single configuration key."""

    key: str
    validate: Validator
    default: Optional[str] = None
    required: bool = False
    default_factory: Optional[DefaultFactory] = None
    description: str = ""

    @property
    def has_default(self) -> bool:
        return self.default is not None or self.default_factory is not None

    def resolve_default(self, get: Callable[[str], str]) -> Optional[str]:
        """Compute the default, consulting other keys through ``get`` if needed."""
        if self.default_factory is not None:
            return self.default_factory(get)
        return self.default


def _api_key(key: str) -> Validator:
    def validate(value: str) -> str:
        value = value.strip()
        if not value:
            return ""
        if not API_KEY_PATTERN.match(value):
            raise ConfigValidationError(
                key,
                f"Invalid {key} format. Expected at least 20 letters, digits, '.', '_' or '-'",
            )
        return value

    return validate


def _any_api_key(value: str) -> str:
    # Local and self-hosted OpenAI-compatible servers accept arbitrary keys
    return value.strip()


def _base_url(key: str) -> Validator:
    def validate(value: str) -> str:
        value = value.strip()
        if not value:
            return ""
        try:
            _url_adapter.validate_python(value)
        except PydanticValidationError as e:
            raise ConfigValidationError(
                key, f"Invalid {key} format. Expected an absolute URL like http://localhost:11434/v1"
            ) from e
        return value

    return validate


def _choice(key: str, choices, default: str) -> Validator:
    def validate(value: str) -> str:
        value = value.strip().lower()
        if not value:
            return default
        if value not in choices:
            raise ConfigValidationError(key, f"{key} must be one of: {', '.join(choices)}")
        return value

    return validate


def _non_negative_int(key: str) -> Validator:
    def validate(value: str) -> str:
        value = value.strip()
        if not INTEGER_PATTERN.match(value):
            raise ConfigValidationError(key, f"{key} must be a non-negative number")
        return str(int(value))

    return validate


def _lowercase_or_default(default: str) -> Validator:
    def validate(value: str) -> str:
        return value.strip().lower() or default

    return validate


def _validate_model(value: str) -> str:
    value = value.strip()
    if not value:
        raise ConfigValidationError("MODEL", "MODEL cannot be empty")
    return value


def _validate_filter_commits(value: str) -> str:
    value = value.strip().lower()
    if value not in ("true", "false"):
        raise ConfigValidationError(
            "FILTER_COMMITS", "FILTER_COMMITS must be either 'true' or 'false'"
        )
    return value


def _validate_context(value: str) -> str:
    value = value.strip()
    if len(value) > MAX_CONTEXT_LENGTH:
        raise ConfigValidationError(
            "CONTEXT", f"CONTEXT must be {MAX_CONTEXT_LENGTH} characters or less"
        )
    return value


def _validate_custom_labels(value: str) -> str:
    labels = [label.strip() for label in value.split(",")]
    labels = [label for label in labels if label]
    if len(labels) > MAX_CUSTOM_LABELS:
        raise ConfigValidationError(
            "CUSTOM_LABELS", f"CUSTOM_LABELS cannot exceed {MAX_CUSTOM_LABELS} labels"
        )
    for label in labels:
        if not LABEL_PATTERN.match(label):
            raise ConfigValidationError(
                "CUSTOM_LABELS",
                f"Invalid label '{label}'. Labels must start with a letter and contain "
                "only letters, digits, '-' or '_' (max 50 characters)",
            )
    return ",".join(labels)


def _default_model(get: Callable[[str], str]) -> str:
    return DEFAULT_MODELS.get(get("PROVIDER"), DEFAULT_MODELS["groq"])


CONFIG_SCHEMA: Dict[str, ConfigEntry] = {
    entry.key: entry
    for entry in [
        ConfigEntry(
            "PROVIDER",
            _choice("PROVIDER", SUPPORTED_PROVIDERS, "groq"),
            default="groq",
            description="AI provider used for generation",
        ),
        ConfigEntry("GROQ_API_KEY", _api_key("GROQ_API_KEY"), description="Groq API key"),
        ConfigEntry(
            "CEREBRAS_API_KEY", _api_key("CEREBRAS_API_KEY"), description="Cerebras API key"
        ),
        ConfigEntry(
            "OPENAI_API_KEY",
            _any_api_key,
            description="API key for OpenAI or any OpenAI-compatible server",
        ),
        ConfigEntry(
            "OPENAI_BASE_URL",
            _base_url("OPENAI_BASE_URL"),
            description="Base URL of an OpenAI-compatible server",
        ),
        ConfigEntry(
            "LOCALE",
            _choice("LOCALE", SUPPORTED_LOCALES, "en"),
            default="en",
            description="Language of the generated content",
        ),
        ConfigEntry(
            "MAX_RETRIES",
            _non_negative_int("MAX_RETRIES"),
            default="2",
            description="Provider retries on transient failures",
        ),
        ConfigEntry(
            "TIMEOUT",
            _non_negative_int("TIMEOUT"),
            default="10000",
            description="Provider request timeout in milliseconds (0 disables it)",
        ),
        ConfigEntry(
            "DEFAULT_BRANCH",
            _lowercase_or_default("main"),
            default="main",
            description="Target branch when none is given",
        ),
        ConfigEntry(
            "MODEL",
            _validate_model,
            default_factory=_default_model,
            description="Model name, defaults per provider",
        ),
        ConfigEntry(
            "FILTER_COMMITS",
            _validate_filter_commits,
            default="true",
            description="Skip merge, dependency and formatting commits",
        ),
        ConfigEntry(
            "CONTEXT",
            _validate_context,
            default="",
            description="Extra guidance for tone and structure",
        ),
        ConfigEntry(
            "CUSTOM_LABELS",
            _validate_custom_labels,
            default="",
            description="Comma-separated labels offered besides the defaults",
        ),
    ]
}

CONFIG_KEYS: List[str] = list(CONFIG_SCHEMA)


def ensure_known_key(key: str) -> str:
    """Return the key unchanged, or raise UnknownKeyError if it is not registered."""
    if key not in CONFIG_SCHEMA:
        raise UnknownKeyError(key, CONFIG_KEYS)
    return key


def validate_value(key: str, value: str) -> str:
    """Validate and normalize a raw value for a registered key."""
    return CONFIG_SCHEMA[key].validate(value)
