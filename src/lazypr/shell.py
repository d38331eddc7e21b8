"""Building a ready-to-paste ``gh pr create`` command."""

import shlex

from lazypr.models import PullRequestContent


def escape_shell_arg(value: str) -> str:
    """Escape a string for use inside bash ``$'...'`` quoting."""
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("`", "\\`")
        .replace("$", "\\$")
        .replace("\n", "\\n")
    )


def build_gh_pr_command(target_branch: str, pull_request: PullRequestContent) -> str:
    """Build a GitHub CLI command creating the pull request.

    Args:
        target_branch: Base branch of the pull request
        pull_request: Generated title, description and labels

    Returns:
        Shell command line
    """
    parts = ["gh", "pr", "create", "-B", shlex.quote(target_branch)]
    if pull_request.labels:
        parts.append(f'-l "{", ".join(pull_request.labels)}"')
    parts.append(f"-t $'{escape_shell_arg(pull_request.title)}'")
    parts.append(f"-b $'{escape_shell_arg(pull_request.description)}'")
    return " ".join(parts)
