"""OpenAI-compatible LLM provider implementation."""

from typing import Any, Dict, Optional, Tuple, Type

import openai
import structlog
from openai import AsyncOpenAI
from pydantic import ValidationError

from lazypr.llm.base import BaseLLMProvider, LLMError, ModelT
from lazypr.models import TokenUsage

logger = structlog.get_logger(__name__)

# Some local servers ignore the key, but the SDK insists on one
PLACEHOLDER_API_KEY = "not-needed"


class OpenAIProvider(BaseLLMProvider):
    """Chat completions provider for any OpenAI-compatible endpoint.

    Groq, Cerebras, OpenAI itself and local servers (Ollama, LM Studio) all
    speak this API; only the base URL and key differ.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        temperature: float = 0.3,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: API key (may be empty for local servers)
            model: Model for completions
            base_url: Endpoint root, None for api.openai.com
            temperature: Sampling temperature
        """
        super().__init__(api_key, model)
        self.base_url = base_url or None
        self.temperature = temperature
        self.client = AsyncOpenAI(api_key=api_key or PLACEHOLDER_API_KEY, base_url=self.base_url)

    async def complete_structured(
        self,
        system_prompt: str,
        prompt: str,
        response_model: Type[ModelT],
        max_retries: int = 2,
        timeout_ms: int = 10000,
        validation_context: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ModelT, TokenUsage, Optional[str]]:
        """Request a JSON object and validate it against response_model.

        Raises:
            LLMError: If the API call fails or the response does not validate
        """
        timeout = timeout_ms / 1000 if timeout_ms > 0 else None
        client = self.client.with_options(max_retries=max_retries, timeout=timeout)

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
            )
        except openai.APITimeoutError as e:
            raise LLMError(f"Request timed out after {timeout_ms} ms") from e
        except openai.OpenAIError as e:
            raise LLMError(f"Provider API error: {e}") from e

        usage = TokenUsage()
        if getattr(response, "usage", None) is not None:
            usage = TokenUsage(
                input_tokens=response.usage.prompt_tokens or 0,
                output_tokens=response.usage.completion_tokens or 0,
                total_tokens=response.usage.total_tokens or 0,
            )

        choice = response.choices[0]
        content = choice.message.content or ""
        try:
            result = response_model.model_validate_json(content, context=validation_context)
        except ValidationError as e:
            logger.debug("invalid_structured_response", model=self.model, content=content[:500])
            raise LLMError(f"Model returned an invalid response: {e}") from e

        logger.debug(
            "structured_completion",
            model=self.model,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
        )
        return result, usage, choice.finish_reason
