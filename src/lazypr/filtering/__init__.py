"""Noise commit classification."""

from lazypr.filtering.commit_filter import (
    CommitFilter,
    filter_commits,
    should_filter_commit,
)
from lazypr.filtering.rules import (
    DEFAULT_RULES,
    DEPENDENCY_UPDATE_RULE,
    FORMATTING_RULE,
    MERGE_RULE,
    FilterRule,
)

__all__ = [
    "CommitFilter",
    "FilterRule",
    "filter_commits",
    "should_filter_commit",
    "DEFAULT_RULES",
    "MERGE_RULE",
    "DEPENDENCY_UPDATE_RULE",
    "FORMATTING_RULE",
]
