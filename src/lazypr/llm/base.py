"""Base class for LLM providers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from lazypr.models import TokenUsage

ModelT = TypeVar("ModelT", bound=BaseModel)


class LLMError(Exception):
    """Raised when a provider cannot produce a valid result."""


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, api_key: str, model: str) -> None:
        """Initialize the LLM provider.

        Args:
            api_key: API key for the provider
            model: Model name to use
        """
        self.api_key = api_key
        self.model = model

    @abstractmethod
    async def complete_structured(
        self,
        system_prompt: str,
        prompt: str,
        response_model: Type[ModelT],
        max_retries: int = 2,
        timeout_ms: int = 10000,
        validation_context: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ModelT, TokenUsage, Optional[str]]:
        """Generate an object matching response_model.

        Args:
            system_prompt: Instructions for the model
            prompt: Input data for this request
            response_model: Pydantic model the response must validate against
            max_retries: Retries on transient failures
            timeout_ms: Request timeout in milliseconds (0 disables it)
            validation_context: Context passed to pydantic validation

        Returns:
            Tuple of (validated object, token usage, finish reason)

        Raises:
            LLMError: If the call fails or the response is invalid
        """
        pass
