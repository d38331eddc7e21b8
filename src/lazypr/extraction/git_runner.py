"""Git plumbing for collecting pull request commits."""

from pathlib import Path
from typing import List, Optional

import git
import structlog
from git import Repo

from lazypr.config import ConfigStore
from lazypr.filtering import CommitFilter
from lazypr.models import Commit

logger = structlog.get_logger(__name__)

# ASCII unit separator; cannot appear in a commit subject
FIELD_SEPARATOR = "\x1f"
LOG_FORMAT = FIELD_SEPARATOR.join(["%H", "%h", "%an", "%ad", "%s"])


class GitError(Exception):
    """Raised when a git operation fails."""


class GitRunner:
    """Runs git commands against a working tree.

    Commands are executed through GitPython with an argument vector, so
    branch names are never interpreted by a shell.
    """

    def __init__(self, repo_path: Optional[Path] = None) -> None:
        """Initialize the runner.

        Args:
            repo_path: Path inside the repository (default: current directory)
        """
        self.repo_path = Path(repo_path) if repo_path is not None else Path.cwd()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """The underlying repository.

        Raises:
            GitError: If the path is not inside a git repository
        """
        if self._repo is None:
            try:
                self._repo = Repo(self.repo_path, search_parent_directories=True)
            except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
                raise GitError(f"Not a git repository: {self.repo_path}") from e
        return self._repo

    def is_repo(self) -> bool:
        """Check whether the path is inside a git work tree."""
        try:
            return self.repo.git.rev_parse("--is-inside-work-tree").strip() == "true"
        except GitError:
            return False
        except git.exc.GitCommandError:
            return False

    def current_branch(self) -> str:
        """Name of the checked-out branch, or an empty string on a detached HEAD."""
        try:
            return self.repo.git.branch("--show-current").strip()
        except git.exc.GitCommandError as e:
            raise GitError(f"Failed to get the current branch: {e}") from e

    def all_branches(self) -> List[str]:
        """All local and remote branch names, without duplicates or symbolic refs."""
        try:
            output = self.repo.git.branch("-a")
        except git.exc.GitCommandError as e:
            raise GitError(f"Failed to list branches: {e}") from e

        branches: List[str] = []
        for line in output.split("\n"):
            name = line.strip()
            if name.startswith("*"):
                name = name[1:].strip()
            if not name or "->" in name or name in branches:
                continue
            branches.append(name)
        return branches

    def commits_between(self, base: str, head: str = "HEAD") -> List[Commit]:
        """Commits reachable from head but not from base, oldest first.

        Args:
            base: Branch the pull request targets
            head: Branch or revision being merged

        Returns:
            List of commits in chronological order

        Raises:
            GitError: If git cannot resolve the range
        """
        try:
            output = self.repo.git.log(
                f"{base}..{head}",
                "--reverse",
                f"--pretty=format:{LOG_FORMAT}",
                "--date=short",
            )
        except git.exc.GitCommandError as e:
            raise GitError(f"Failed to list commits between '{base}' and '{head}'") from e

        commits = []
        for line in output.strip().split("\n"):
            fields = line.split(FIELD_SEPARATOR, 4)
            if len(fields) != 5 or not fields[0]:
                continue
            hexsha, short_hash, author, date, message = fields
            commits.append(
                Commit(
                    hash=hexsha,
                    short_hash=short_hash,
                    author=author,
                    date=date,
                    message=message,
                )
            )

        logger.debug("commits_collected", base=base, head=head, count=len(commits))
        return commits

    def pull_request_commits(
        self,
        target_branch: str,
        config: ConfigStore,
        no_filter: bool = False,
        commit_filter: Optional[CommitFilter] = None,
    ) -> List[Commit]:
        """Commits a pull request into target_branch would contain.

        Noise commits are dropped when FILTER_COMMITS is enabled, unless
        no_filter is set.

        Args:
            target_branch: Branch the pull request targets
            config: Configuration store
            no_filter: Disable commit filtering for this call
            commit_filter: Filter to apply (default rule set if omitted)

        Returns:
            List of commits, oldest first
        """
        commits = self.commits_between(target_branch)
        if no_filter or config.get("FILTER_COMMITS") != "true":
            return commits

        kept = (commit_filter or CommitFilter()).filter(commits)
        logger.info(
            "commits_filtered",
            total=len(commits),
            kept=len(kept),
            skipped=len(commits) - len(kept),
        )
        return kept
