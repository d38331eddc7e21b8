"""Tests for the command-line interface."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from lazypr import __version__
from lazypr.cli import app
from lazypr.extraction import GitError
from lazypr.llm import LLMError
from lazypr.models import Commit, GeneratedPullRequest, PullRequestContent, TokenUsage

GROQ_KEY = "gsk_1234567890abcdefghijklmnop"

CONTENT = PullRequestContent(
    title="Add login support",
    description="## Overview\n\n" + "Adds a login endpoint with session handling and tests. " * 3,
    labels=["enhancement"],
)

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / ".lazypr"


@pytest.fixture
def env(config_path):
    return {"LAZYPR_CONFIG_PATH": str(config_path), "COLUMNS": "200"}


@pytest.fixture
def configured(config_path):
    """Configuration file with a provider API key."""
    config_path.write_text(f"GROQ_API_KEY={GROQ_KEY}")
    return config_path


@pytest.fixture
def mock_git(tmp_path):
    """GitRunner replaced by a mock on a feature branch with two commits."""
    with patch("lazypr.cli.GitRunner") as mock_cls:
        git_runner = MagicMock()
        git_runner.is_repo.return_value = True
        git_runner.current_branch.return_value = "feature/login"
        git_runner.all_branches.return_value = ["feature/login", "main", "remotes/origin/main"]
        git_runner.pull_request_commits.return_value = [
            Commit(hash="a" * 40, short_hash="aaaaaaa", message="feat: add login"),
            Commit(hash="b" * 40, short_hash="bbbbbbb", message="test: cover login"),
        ]
        git_runner.repo.working_tree_dir = str(tmp_path / "repo")
        mock_cls.return_value = git_runner
        yield git_runner


@pytest.fixture
def mock_generator():
    with patch("lazypr.cli.PullRequestGenerator") as mock_cls:
        generator = MagicMock()
        generator.generate = AsyncMock(
            return_value=GeneratedPullRequest(
                content=CONTENT,
                usage=TokenUsage(input_tokens=1200, output_tokens=300, total_tokens=1500),
                finish_reason="stop",
            )
        )
        mock_cls.return_value = generator
        yield generator


@pytest.fixture
def mock_questionary():
    with patch("lazypr.cli.questionary") as mock_q:
        mock_q.select.return_value.ask.return_value = "none"
        yield mock_q


@pytest.fixture
def mock_clipboard():
    with patch("lazypr.cli.pyperclip") as mock_clip:
        yield mock_clip


def test_version(env):
    result = runner.invoke(app, ["--version"], env=env)

    assert result.exit_code == 0
    assert f"version {__version__}" in result.output


def test_help(env):
    result = runner.invoke(app, ["--help"], env=env)

    assert result.exit_code == 0
    assert "config" in result.output


class TestCreate:
    """Test the default create command."""

    def test_create_default_target(
        self, env, configured, mock_git, mock_generator, mock_questionary, mock_clipboard
    ):
        """Test running without arguments targets DEFAULT_BRANCH."""
        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 0, result.output
        assert "You want to merge 2 commits into 'main' from 'feature/login'" in result.output
        assert "Add login support" in result.output
        assert "enhancement" in result.output
        assert "Done!" in result.output
        assert "Tokens" not in result.output
        mock_git.pull_request_commits.assert_called_once()
        assert mock_git.pull_request_commits.call_args.args[0] == "main"
        assert mock_git.pull_request_commits.call_args.kwargs["no_filter"] is False
        mock_clipboard.copy.assert_not_called()

    def test_create_explicit_target_and_options(
        self, env, configured, mock_git, mock_generator, mock_questionary, mock_clipboard
    ):
        mock_git.all_branches.return_value = ["feature/login", "develop"]

        result = runner.invoke(
            app,
            ["develop", "--no-filter", "--usage", "--gh", "-l", "es", "-c", "be brief"],
            env=env,
        )

        assert result.exit_code == 0, result.output
        assert "Tokens: 1,200 input, 300 output, 1,500 total" in result.output
        assert "gh pr create -B develop" in result.output
        assert mock_git.pull_request_commits.call_args.kwargs["no_filter"] is True
        kwargs = mock_generator.generate.call_args.kwargs
        assert kwargs["locale"] == "es"
        assert kwargs["context"] == "be brief"
        assert kwargs["template"] is None

    def test_create_subcommand_name(
        self, env, configured, mock_git, mock_generator, mock_questionary, mock_clipboard
    ):
        result = runner.invoke(app, ["create", "main"], env=env)

        assert result.exit_code == 0, result.output

    def test_copy_both(self, env, configured, mock_git, mock_generator, mock_questionary, mock_clipboard):
        mock_questionary.select.return_value.ask.return_value = "both"

        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 0, result.output
        mock_clipboard.copy.assert_called_once_with(f"{CONTENT.title}\n\n{CONTENT.description}")
        assert "Copied to clipboard" in result.output

    def test_copy_title(self, env, configured, mock_git, mock_generator, mock_questionary, mock_clipboard):
        mock_questionary.select.return_value.ask.return_value = "title"

        runner.invoke(app, [], env=env)

        mock_clipboard.copy.assert_called_once_with(CONTENT.title)

    def test_missing_api_key(self, env, mock_git, mock_generator, mock_questionary):
        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 1
        assert "GROQ_API_KEY is required" in result.output
        mock_generator.generate.assert_not_called()

    def test_not_a_repository(self, env, configured, mock_git, mock_generator):
        mock_git.is_repo.return_value = False

        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 1
        assert "Not a git repository" in result.output

    def test_already_on_target(self, env, configured, mock_git, mock_generator):
        mock_git.current_branch.return_value = "main"

        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 1
        assert "Already on target branch 'main'" in result.output

    def test_unknown_target(self, env, configured, mock_git, mock_generator):
        result = runner.invoke(app, ["release"], env=env)

        assert result.exit_code == 1
        assert "Branch 'release' doesn't exist" in result.output

    def test_no_commits(self, env, configured, mock_git, mock_generator):
        mock_git.pull_request_commits.return_value = []

        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 1
        assert "No commits found" in result.output

    def test_invalid_locale_override(self, env, configured, mock_git, mock_generator):
        result = runner.invoke(app, ["-l", "xx"], env=env)

        assert result.exit_code == 1
        assert "LOCALE must be one of" in result.output

    def test_git_error(self, env, configured, mock_git, mock_generator):
        mock_git.pull_request_commits.side_effect = GitError("Failed to list commits")

        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 1
        assert "Failed to list commits" in result.output

    def test_generation_error(self, env, configured, mock_git, mock_generator, mock_questionary):
        mock_generator.generate.side_effect = LLMError("Provider API error: rate limited")

        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 1
        assert "rate limited" in result.output

    def test_template_selection(
        self, env, configured, mock_git, mock_generator, mock_questionary, mock_clipboard, tmp_path
    ):
        """Test a named template is passed to the generator."""
        github = tmp_path / "repo" / ".github"
        github.mkdir(parents=True)
        (github / "pull_request_template.md").write_text("## Checklist\n")

        result = runner.invoke(app, ["-t", "pull request template"], env=env)

        assert result.exit_code == 0, result.output
        assert mock_generator.generate.call_args.kwargs["template"] == "## Checklist\n"
        assert "Template: Pull Request Template" in result.output

    def test_unknown_template(self, env, configured, mock_git, mock_generator, tmp_path):
        (tmp_path / "repo").mkdir()

        result = runner.invoke(app, ["-t", "missing"], env=env)

        assert result.exit_code == 1
        assert "Template 'missing' not found" in result.output

    def test_template_prompt_cancelled(
        self, env, configured, mock_git, mock_generator, mock_questionary, tmp_path
    ):
        """Test cancelling the template prompt exits cleanly."""
        github = tmp_path / "repo" / ".github"
        github.mkdir(parents=True)
        (github / "pull_request_template.md").write_text("## Checklist\n")
        mock_questionary.select.return_value.ask.return_value = None

        result = runner.invoke(app, [], env=env)

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        mock_generator.generate.assert_not_called()


class TestConfigCommands:
    """Test the config subcommands."""

    def test_set_and_get(self, env, config_path):
        result = runner.invoke(app, ["config", "set", "LOCALE=ES"], env=env)

        assert result.exit_code == 0, result.output
        assert "LOCALE = es" in result.output
        assert config_path.read_text() == "LOCALE=es"

        result = runner.invoke(app, ["config", "get", "LOCALE"], env=env)
        assert result.exit_code == 0
        assert "LOCALE = es" in result.output

    def test_set_value_with_equals(self, env, config_path):
        result = runner.invoke(app, ["config", "set", "DEFAULT_BRANCH=feature/test=branch"], env=env)

        assert result.exit_code == 0, result.output
        assert config_path.read_text() == "DEFAULT_BRANCH=feature/test=branch"

    def test_set_masks_api_key(self, env):
        result = runner.invoke(app, ["config", "set", f"GROQ_API_KEY={GROQ_KEY}"], env=env)

        assert result.exit_code == 0, result.output
        assert "gsk_…mnop" in result.output
        assert GROQ_KEY not in result.output

    def test_set_invalid_value(self, env, config_path):
        result = runner.invoke(app, ["config", "set", "MAX_RETRIES=-1"], env=env)

        assert result.exit_code == 1
        assert "MAX_RETRIES must be a non-negative number" in result.output
        assert not config_path.exists()

    def test_set_rejects_line_breaks(self, env, config_path):
        result = runner.invoke(app, ["config", "set", "CONTEXT=be terse\nPROVIDER=bogus"], env=env)

        assert result.exit_code == 1
        assert "CONTEXT cannot contain line breaks" in result.output
        assert not config_path.exists()

    @pytest.mark.parametrize(
        "args",
        [
            ["config", "get", "LOCALE"],
            ["config", "set", "LOCALE=fr"],
            ["config", "remove", "LOCALE"],
            ["config", "list"],
            ["config", "clear", "--force"],
        ],
    )
    def test_unreadable_config_file(self, env, config_path, args):
        """Test file-system failures are reported instead of raised."""
        config_path.mkdir()

        result = runner.invoke(app, args, env=env)

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Failed to read config file" in result.output
        assert not isinstance(result.exception, OSError)

    def test_set_without_equals(self, env):
        result = runner.invoke(app, ["config", "set", "LOCALE"], env=env)

        assert result.exit_code == 1
        assert "KEY=VALUE" in result.output

    def test_set_empty_key(self, env):
        result = runner.invoke(app, ["config", "set", "=value"], env=env)

        assert result.exit_code == 1
        assert "Key cannot be empty" in result.output

    def test_set_unknown_key(self, env):
        result = runner.invoke(app, ["config", "set", "locale=en"], env=env)

        assert result.exit_code == 1
        assert "Unknown config key 'locale'" in result.output

    def test_get_default(self, env):
        result = runner.invoke(app, ["config", "get", "MODEL"], env=env)

        assert result.exit_code == 0
        assert "MODEL = llama-3.3-70b" in result.output

    def test_get_unknown_key(self, env):
        result = runner.invoke(app, ["config", "get", "NOPE"], env=env)

        assert result.exit_code == 1
        assert "Unknown config key" in result.output

    def test_remove(self, env, config_path):
        config_path.write_text("LOCALE=fr\nTIMEOUT=500")

        result = runner.invoke(app, ["config", "remove", "LOCALE"], env=env)

        assert result.exit_code == 0
        assert config_path.read_text() == "TIMEOUT=500"

    def test_list(self, env, config_path):
        config_path.write_text("LOCALE=fr")

        result = runner.invoke(app, ["config", "list"], env=env)

        assert result.exit_code == 0, result.output
        assert "LOCALE" in result.output
        assert "CUSTOM_LABELS" in result.output
        assert "file" in result.output

    def test_list_reports_invalid_values(self, env, config_path):
        config_path.write_text("TIMEOUT=soon")

        result = runner.invoke(app, ["config", "list"], env=env)

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert "TIMEOUT: TIMEOUT must be a non-negative number" in result.output

    def test_clear_force(self, env, config_path):
        config_path.write_text("LOCALE=fr")

        result = runner.invoke(app, ["config", "clear", "--force"], env=env)

        assert result.exit_code == 0
        assert config_path.read_text() == ""

    def test_clear_declined(self, env, config_path):
        config_path.write_text("LOCALE=fr")

        result = runner.invoke(app, ["config", "clear"], input="n\n", env=env)

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert config_path.read_text() == "LOCALE=fr"

    def test_config_without_subcommand_shows_help(self, env):
        result = runner.invoke(app, ["config"], env=env)

        assert "set" in result.output
        assert "list" in result.output
