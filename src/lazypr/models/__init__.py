"""Data models for pull request generation."""

from lazypr.models.commit import (
    Commit,
    GeneratedPullRequest,
    PullRequestContent,
    TokenUsage,
)

__all__ = [
    "Commit",
    "TokenUsage",
    "PullRequestContent",
    "GeneratedPullRequest",
]
