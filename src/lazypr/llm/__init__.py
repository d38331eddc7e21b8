"""LLM integration for pull request generation."""

from lazypr.llm.base import BaseLLMProvider, LLMError
from lazypr.llm.generator import PullRequestGenerator
from lazypr.llm.openai_provider import OpenAIProvider
from lazypr.llm.prompts import PromptTemplates
from lazypr.llm.providers import (
    PROVIDERS,
    ProviderSpec,
    create_provider,
    validate_provider_api_key,
)

__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "OpenAIProvider",
    "PromptTemplates",
    "PullRequestGenerator",
    "PROVIDERS",
    "ProviderSpec",
    "create_provider",
    "validate_provider_api_key",
]
