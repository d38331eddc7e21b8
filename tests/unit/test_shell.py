"""Tests for the gh command builder."""

from lazypr.models import PullRequestContent
from lazypr.shell import build_gh_pr_command, escape_shell_arg

DESCRIPTION = "## Overview\n\n" + "This change adds login support and covers it with tests. " * 3


def make_content(title: str = "Add login support", labels=None) -> PullRequestContent:
    return PullRequestContent(title=title, description=DESCRIPTION, labels=labels or [])


def test_escape_shell_arg():
    assert escape_shell_arg("it's") == "it\\'s"
    assert escape_shell_arg("a\nb") == "a\\nb"
    assert escape_shell_arg("$HOME `id`") == "\\$HOME \\`id\\`"
    assert escape_shell_arg("back\\slash") == "back\\\\slash"


def test_build_command():
    command = build_gh_pr_command("main", make_content(labels=["enhancement", "bug"]))

    assert command.startswith("gh pr create -B main -l \"enhancement, bug\" -t $'Add login support' -b $'")
    assert "\\n\\n" in command
    assert "\n" not in command


def test_build_command_without_labels():
    command = build_gh_pr_command("develop", make_content())

    assert " -l " not in command
    assert command.startswith("gh pr create -B develop -t $'Add login support'")


def test_build_command_quotes_branch():
    """Test branch names with shell metacharacters are quoted."""
    command = build_gh_pr_command("main; rm -rf ~", make_content())

    assert "-B 'main; rm -rf ~'" in command


def test_build_command_escapes_title():
    command = build_gh_pr_command("main", make_content(title="Fix user's $PATH"))

    assert "-t $'Fix user\\'s \\$PATH'" in command
