"""lazypr - generate pull request titles and descriptions from git commits."""

__version__ = "0.1.0"

from lazypr.config import AppSettings, ConfigStore
from lazypr.filtering import CommitFilter, filter_commits, should_filter_commit
from lazypr.models import Commit

__all__ = [
    "AppSettings",
    "Commit",
    "CommitFilter",
    "ConfigStore",
    "filter_commits",
    "should_filter_commit",
]
