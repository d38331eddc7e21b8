"""Command-line interface for lazypr."""

import asyncio
from pathlib import Path
from typing import List, NoReturn, Optional

import click
import pyperclip
import questionary
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text
from typer.core import TyperGroup

from lazypr import __version__
from lazypr.badge import BadgeConfig, display_config_badge
from lazypr.config import (
    CONFIG_SCHEMA,
    AppSettings,
    ConfigError,
    ConfigStore,
    ensure_known_key,
    validate_value,
)
from lazypr.extraction import GitError, GitRunner
from lazypr.labels import format_labels
from lazypr.llm import LLMError, PullRequestGenerator, validate_provider_api_key
from lazypr.log_setup import setup_logging
from lazypr.models import GeneratedPullRequest
from lazypr.shell import build_gh_pr_command
from lazypr.templates import PRTemplate, TemplateError, find_pr_templates, get_pr_template

DEFAULT_COMMAND = "create"
NO_TEMPLATE = "__none__"


class DefaultCommandGroup(TyperGroup):
    """Routes invocations without a subcommand to the create command."""

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        if not args or (
            args[0] not in self.commands
            and args[0] not in ctx.help_option_names
            and args[0] not in ("--version", "-V")
        ):
            args = [DEFAULT_COMMAND, *args]
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="lazypr",
    help="Generate pull request titles and descriptions from your commits",
    add_completion=False,
    cls=DefaultCommandGroup,
    context_settings={"help_option_names": ["-h", "--help"]},
)
config_app = typer.Typer(
    help="Manage the lazypr configuration file",
    add_completion=False,
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

console = Console()


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(1)


def _open_store(verbose: bool = False) -> ConfigStore:
    settings = AppSettings()
    setup_logging(settings.log_level, is_verbose=verbose)
    return ConfigStore(settings.config_path)


def _mask(key: str, value: str) -> str:
    if not key.endswith("_API_KEY") or len(value) <= 8:
        return value
    return f"{value[:4]}…{value[-4:]}"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]lazypr[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version information"
    ),
) -> None:
    """Generate pull request titles and descriptions from your commits.

    Run without a subcommand to create a pull request for the current branch.
    """


def _select_template(name: Optional[str], repo_root: Path) -> Optional[PRTemplate]:
    if name:
        template = get_pr_template(name, repo_root)
        if template is None:
            _fail(f"Template '{name}' not found")
        return template

    templates = find_pr_templates(repo_root)
    if not templates:
        return None

    choices = [questionary.Choice(title=t.name, value=t.path) for t in templates]
    choices.append(questionary.Choice(title="No template", value=NO_TEMPLATE))
    selected = questionary.select("Select a pull request template:", choices=choices).ask()
    if selected is None:
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)
    return next((t for t in templates if t.path == selected), None)


def _copy_to_clipboard(content: str) -> None:
    try:
        pyperclip.copy(content)
        console.print("[bold green]✓[/bold green] Copied to clipboard")
    except pyperclip.PyperclipException:
        console.print("[yellow]Couldn't copy to clipboard[/yellow]")


def _show_result(
    result: GeneratedPullRequest,
    target_branch: str,
    custom_labels: str,
    show_usage: bool,
    gh: bool,
) -> None:
    content = result.content
    console.print("\n[bold cyan]Title:[/bold cyan]")
    console.print(content.title, markup=False)
    console.print("\n[bold cyan]Description:[/bold cyan]")
    console.print(content.description, markup=False)
    if content.labels:
        console.print("\n[bold cyan]Labels:[/bold cyan]")
        console.print(format_labels(content.labels, custom_labels))

    if show_usage:
        usage = result.usage
        console.print(
            f"\n[dim]Tokens: {usage.input_tokens:,} input, "
            f"{usage.output_tokens:,} output, {usage.total_tokens:,} total[/dim]"
        )

    if gh:
        console.print("\n[bold cyan]GitHub CLI command:[/bold cyan]")
        console.print(Text(build_gh_pr_command(target_branch, content)))


@app.command(DEFAULT_COMMAND)
def create(
    target: Optional[str] = typer.Argument(None, help="Target branch (default: DEFAULT_BRANCH setting)"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="PR template name or path"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Override the LOCALE setting"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="Override the CONTEXT setting"),
    usage: bool = typer.Option(False, "--usage", "-u", help="Show token usage"),
    no_filter: bool = typer.Option(False, "--no-filter", help="Keep merge, dependency and formatting commits"),
    gh: bool = typer.Option(False, "--gh", help="Print a 'gh pr create' command"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Generate a pull request title and description (default command)."""
    store = _open_store(verbose)
    runner = GitRunner()

    try:
        if not runner.is_repo():
            _fail("Not a git repository")

        spec = validate_provider_api_key(store)
        if locale:
            locale = validate_value("LOCALE", locale)
        if context:
            context = validate_value("CONTEXT", context)

        current_branch = runner.current_branch()
        if not current_branch:
            _fail("No current branch found (detached HEAD?)")

        target_branch = target or store.get("DEFAULT_BRANCH")
        if current_branch == target_branch:
            _fail(f"Already on target branch '{target_branch}'")
        if target_branch not in runner.all_branches():
            _fail(f"Branch '{target_branch}' doesn't exist")

        commits = runner.pull_request_commits(target_branch, store, no_filter=no_filter)
        if not commits:
            _fail("No commits found for pull request")

        count = len(commits)
        console.print(
            f"[blue]You want to merge {count} commit{'' if count == 1 else 's'} "
            f"into '{target_branch}' from '{current_branch}'[/blue]"
        )

        selected_template = _select_template(template, Path(runner.repo.working_tree_dir))

        display_config_badge(
            BadgeConfig(
                provider=spec.name,
                model=store.get("MODEL"),
                locale=locale or store.get("LOCALE"),
                smart_filter=not no_filter and store.get("FILTER_COMMITS") == "true",
                template=selected_template.name if selected_template else None,
                context=context or store.get("CONTEXT"),
                usage=usage,
                gh_cli=gh,
            ),
            console,
        )

        generator = PullRequestGenerator(store)
        with console.status("[bold green]Generating pull request..."):
            result = asyncio.run(
                generator.generate(
                    current_branch,
                    commits,
                    template=selected_template.content if selected_template else None,
                    locale=locale,
                    context=context,
                )
            )
    except (ConfigError, GitError, LLMError, TemplateError) as e:
        _fail(str(e))

    _show_result(result, target_branch, store.get("CUSTOM_LABELS"), usage, gh)

    content = result.content
    copy_choice = questionary.select(
        "Copy to clipboard:",
        choices=[
            questionary.Choice(title="Title only", value="title"),
            questionary.Choice(title="Description only", value="description"),
            questionary.Choice(title="Both (title + description)", value="both"),
            questionary.Choice(title="Nothing", value="none"),
        ],
    ).ask()

    if copy_choice == "title":
        _copy_to_clipboard(content.title)
    elif copy_choice == "description":
        _copy_to_clipboard(content.description)
    elif copy_choice == "both":
        _copy_to_clipboard(f"{content.title}\n\n{content.description}")

    console.print("[bold green]✓[/bold green] Done!")


@config_app.command("set")
def config_set(
    key_value: str = typer.Argument(..., metavar="KEY=VALUE", help="Setting to store"),
) -> None:
    """Set a configuration value."""
    if "=" not in key_value:
        _fail("For 'set', the argument must be in the format KEY=VALUE")

    key, _, value = key_value.partition("=")
    key = key.strip()
    if not key:
        _fail("Key cannot be empty")

    store = _open_store()
    try:
        ensure_known_key(key)
        store.set(key, value)
        stored = store.get(key)
    except ConfigError as e:
        _fail(str(e))

    console.print(f"[bold green]✓[/bold green] {key} = {_mask(key, stored)}")


@config_app.command("get")
def config_get(key: str = typer.Argument(..., help="Setting to read")) -> None:
    """Print a configuration value (or its default)."""
    key = key.strip()
    if not key:
        _fail("Key cannot be empty")

    store = _open_store()
    try:
        ensure_known_key(key)
        value = store.get(key)
    except ConfigError as e:
        _fail(str(e))

    console.print(f"{key} = {value}", markup=False, highlight=False)


@config_app.command("remove")
def config_remove(key: str = typer.Argument(..., help="Setting to remove")) -> None:
    """Remove a configuration value so its default applies again."""
    key = key.strip()
    if not key:
        _fail("Key cannot be empty")

    store = _open_store()
    try:
        ensure_known_key(key)
        store.remove(key)
    except ConfigError as e:
        _fail(str(e))

    console.print(f"[bold green]✓[/bold green] Removed {key}")


@config_app.command("list")
def config_list() -> None:
    """Show every setting and report invalid values."""
    store = _open_store()
    try:
        stored_keys = set(store.stored_keys())
    except ConfigError as e:
        _fail(str(e))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Source", style="dim")
    table.add_column("Description", style="dim")

    for key, entry in CONFIG_SCHEMA.items():
        try:
            value = Text(_mask(key, store.get(key)))
        except ConfigError:
            value = Text("invalid", style="red")
        source = "file" if key in stored_keys else "default"
        table.add_row(key, value, source, entry.description)

    console.print(table)

    report = store.validate_all()
    if not report.valid:
        console.print("\n[bold red]Invalid configuration:[/bold red]")
        for error in report.errors:
            console.print(f"  • {error}", markup=False)
        raise typer.Exit(1)


@config_app.command("clear")
def config_clear(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Remove every stored setting."""
    store = _open_store()
    if not force:
        confirm = typer.confirm(f"Remove all settings from {store.path}?")
        if not confirm:
            console.print("[yellow]Cancelled[/yellow]")
            return

    try:
        store.clear()
    except ConfigError as e:
        _fail(str(e))
    console.print("[bold green]✓[/bold green] Configuration cleared")


if __name__ == "__main__":
    app()
