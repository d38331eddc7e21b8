"""Pull request generation from commits."""

from typing import Optional, Sequence

import structlog

from lazypr.config import ConfigStore, validate_value
from lazypr.labels import get_available_labels
from lazypr.llm.base import BaseLLMProvider
from lazypr.llm.prompts import PromptTemplates
from lazypr.llm.providers import create_provider
from lazypr.models import Commit, GeneratedPullRequest, PullRequestContent

logger = structlog.get_logger(__name__)


class PullRequestGenerator:
    """Turns a branch and its commits into pull request content."""

    def __init__(
        self,
        config: ConfigStore,
        provider: Optional[BaseLLMProvider] = None,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Configuration store
            provider: LLM provider (built from the configuration if omitted)
        """
        self.config = config
        self.provider = provider or create_provider(config)
        self.prompts = PromptTemplates()

    async def generate(
        self,
        branch: str,
        commits: Sequence[Commit],
        template: Optional[str] = None,
        locale: Optional[str] = None,
        context: Optional[str] = None,
    ) -> GeneratedPullRequest:
        """Generate a title, description and labels.

        Args:
            branch: Branch being merged
            commits: Commits of the pull request, oldest first
            template: Optional pull request template markdown
            locale: Locale override (validated like LOCALE)
            context: Context override (validated like CONTEXT)

        Returns:
            Generated content with usage information

        Raises:
            ConfigValidationError: If an override or setting is invalid
            LLMError: If the provider fails
        """
        locale = validate_value("LOCALE", locale) if locale else self.config.get("LOCALE")
        context = validate_value("CONTEXT", context) if context else self.config.get("CONTEXT")
        available_labels = get_available_labels(self.config.get("CUSTOM_LABELS"))

        prompt = self.prompts.user_prompt(
            branch,
            commits,
            locale=locale,
            available_labels=available_labels,
            context=context,
            template=template,
        )

        logger.info(
            "generating_pull_request",
            branch=branch,
            commits=len(commits),
            locale=locale,
            model=self.provider.model,
        )
        content, usage, finish_reason = await self.provider.complete_structured(
            self.prompts.system_prompt(),
            prompt,
            PullRequestContent,
            max_retries=int(self.config.get("MAX_RETRIES")),
            timeout_ms=int(self.config.get("TIMEOUT")),
            validation_context={"available_labels": available_labels},
        )
        logger.info(
            "pull_request_generated",
            title=content.title,
            labels=content.labels,
            total_tokens=usage.total_tokens,
        )
        return GeneratedPullRequest(content=content, usage=usage, finish_reason=finish_reason)
