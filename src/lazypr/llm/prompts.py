"""Prompt templates for pull request generation."""

import json
from typing import List, Optional, Sequence

from lazypr.models import Commit, PullRequestContent


class PromptTemplates:
    """Collection of prompt templates for pull request content."""

    @staticmethod
    def system_prompt() -> str:
        """Instructions shared by every generation request."""
        return """You generate professional pull request titles and descriptions for code review.

Return ONLY a JSON object, with no surrounding prose.

Instructions:
1. Use the target branch name to understand the overall intent.
2. Use the commit messages as concrete evidence of what changed.
3. Write the title and description in the requested locale; fall back to English if it is not supported.
4. If a pull request template is provided, follow it strictly and keep its sections, headers and checkboxes.
   Ignore any frontmatter delimited by --- at the top of the template.
5. If additional guidance is provided, apply it to tone, style and structure.

Title: 5-50 characters, imperative mood, first letter capitalized, no trailing period.

Description: at least 100 characters of markdown. Start with an overview paragraph, then
sections covering key changes, impact and technical details.

Labels: choose one or more labels from the available list only.
enhancement = new features or improvements, bug = bug fixes, documentation = documentation changes."""

    @staticmethod
    def user_prompt(
        branch: str,
        commits: Sequence[Commit],
        locale: str,
        available_labels: List[str],
        context: str = "",
        template: Optional[str] = None,
    ) -> str:
        """Generate the per-request input.

        Args:
            branch: Branch being merged
            commits: Commits of the pull request, oldest first
            locale: Output language code
            available_labels: Labels the model may choose from
            context: Optional user guidance
            template: Optional pull request template markdown

        Returns:
            Formatted prompt
        """
        commit_lines = "\n".join(commit.message for commit in commits)
        schema = json.dumps(PullRequestContent.model_json_schema())

        sections = [
            f"Locale: {locale}",
            f"Target Branch: {branch}",
        ]
        if context:
            sections.append(f"Additional Guidance: {context}")
        sections.append(f"Available Labels: {', '.join(available_labels)}")
        sections.append(f"Commit History (most recent last):\n```\n{commit_lines}\n```")
        if template and template.strip():
            sections.append(f"Pull Request Template to Follow:\n```markdown\n{template}\n```")
        sections.append(f"Respond with JSON matching this schema:\n{schema}")

        return "\n\n".join(sections)
