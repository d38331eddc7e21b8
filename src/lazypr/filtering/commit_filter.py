"""Classification and filtering of noise commits."""

from typing import Iterable, List, Optional, Sequence

import structlog

from lazypr.filtering.rules import DEFAULT_RULES, FilterRule
from lazypr.models import Commit

logger = structlog.get_logger(__name__)


class CommitFilter:
    """Flags merge, dependency-update and formatting-only commits.

    Categories are independent and combined with a logical OR, so a message
    matching more than one category is simply filtered.
    """

    def __init__(self, rules: Sequence[FilterRule] = DEFAULT_RULES) -> None:
        """Initialize the filter.

        Args:
            rules: Rule categories to evaluate, in order
        """
        self.rules = tuple(rules)

    def matched_category(self, commit: Commit) -> Optional[str]:
        """Return the name of the first category matching the commit.

        Args:
            commit: Commit to classify

        Returns:
            Category name, or None if the commit is not noise
        """
        message = commit.message.strip()
        for rule in self.rules:
            if rule.matches(message):
                return rule.name
        return None

    def should_filter(self, commit: Commit) -> bool:
        """Check whether a commit should be excluded from summarization.

        An empty message matches none of the anchored patterns and is kept.
        """
        return self.matched_category(commit) is not None

    def filter(self, commits: Iterable[Commit]) -> List[Commit]:
        """Drop noise commits, keeping the remaining ones in their original order.

        Args:
            commits: Commits to filter

        Returns:
            Commits for which should_filter is False
        """
        kept = []
        for commit in commits:
            category = self.matched_category(commit)
            if category is None:
                kept.append(commit)
            else:
                logger.debug(
                    "commit_filtered",
                    short_hash=commit.short_hash,
                    category=category,
                    message=commit.message,
                )
        return kept


default_filter = CommitFilter()


def should_filter_commit(commit: Commit) -> bool:
    """Classify a commit with the default rule set."""
    return default_filter.should_filter(commit)


def filter_commits(commits: Iterable[Commit]) -> List[Commit]:
    """Filter commits with the default rule set."""
    return default_filter.filter(commits)
