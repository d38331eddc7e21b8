"""Registry of supported AI providers."""

from dataclasses import dataclass
from typing import Dict, Optional

from lazypr.config import ConfigStore
from lazypr.llm.base import LLMError
from lazypr.llm.openai_provider import OpenAIProvider


@dataclass(frozen=True)
class ProviderSpec:
    """How to reach one provider and which config key holds its API key."""

    name: str
    api_key_config_key: str
    base_url: Optional[str] = None
    api_key_optional: bool = False
    base_url_config_key: Optional[str] = None


PROVIDERS: Dict[str, ProviderSpec] = {
    "groq": ProviderSpec(
        name="groq",
        api_key_config_key="GROQ_API_KEY",
        base_url="https://api.groq.com/openai/v1",
    ),
    "cerebras": ProviderSpec(
        name="cerebras",
        api_key_config_key="CEREBRAS_API_KEY",
        base_url="https://api.cerebras.ai/v1",
    ),
    # The key is optional so local servers such as Ollama or LM Studio work
    "openai": ProviderSpec(
        name="openai",
        api_key_config_key="OPENAI_API_KEY",
        api_key_optional=True,
        base_url_config_key="OPENAI_BASE_URL",
    ),
}


def get_provider_spec(config: ConfigStore) -> ProviderSpec:
    """Spec of the provider selected by PROVIDER.

    Raises:
        LLMError: If the provider is not registered
    """
    name = config.get("PROVIDER")
    try:
        return PROVIDERS[name]
    except KeyError:
        raise LLMError(f"Unknown provider: {name}") from None


def validate_provider_api_key(config: ConfigStore) -> ProviderSpec:
    """Ensure the selected provider has an API key when it needs one.

    Returns:
        The selected provider spec

    Raises:
        LLMError: If a required API key is missing
    """
    spec = get_provider_spec(config)
    if spec.api_key_optional:
        return spec
    if not config.get(spec.api_key_config_key):
        raise LLMError(
            f"{spec.api_key_config_key} is required for provider '{spec.name}'. "
            f"Set it with: lazypr config set {spec.api_key_config_key}=<your-api-key>"
        )
    return spec


def create_provider(config: ConfigStore) -> OpenAIProvider:
    """Build the provider client selected by the configuration."""
    spec = validate_provider_api_key(config)
    base_url = spec.base_url
    if spec.base_url_config_key:
        base_url = config.get(spec.base_url_config_key) or base_url
    return OpenAIProvider(
        api_key=config.get(spec.api_key_config_key),
        model=config.get("MODEL"),
        base_url=base_url,
    )
