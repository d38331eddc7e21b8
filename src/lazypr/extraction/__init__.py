"""Git data extraction."""

from lazypr.extraction.git_runner import GitError, GitRunner

__all__ = ["GitRunner", "GitError"]
