"""Summary badge of the settings used for a generation run."""

from typing import Optional

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

SEPARATOR = " | "


class BadgeConfig(BaseModel):
    """Settings shown in the configuration badge."""

    provider: str
    model: str
    locale: str
    smart_filter: bool = False
    template: Optional[str] = None
    context: Optional[str] = None
    usage: bool = False
    gh_cli: bool = False


def _item(text: Text, label: str, value: Optional[str] = None) -> None:
    if text.plain:
        text.append(SEPARATOR, style="dim")
    text.append("✓ ", style="green")
    text.append(label, style="bold")
    if value is not None:
        text.append(":", style="dim")
        text.append(f" {value}")


def build_config_badge(config: BadgeConfig) -> Text:
    """Build the badge line; model and locale are always shown, the rest only when enabled."""
    text = Text()
    _item(text, "Model", f"{config.provider}/{config.model}")
    _item(text, "Locale", config.locale.upper())
    if config.smart_filter:
        _item(text, "Smart Filter")
    if config.template:
        _item(text, "Template", config.template)
    if config.context:
        _item(text, "User Context")
    if config.usage:
        _item(text, "Usage Stats")
    if config.gh_cli:
        _item(text, "GH CLI")
    return text


def display_config_badge(config: BadgeConfig, console: Console) -> None:
    console.print(Panel(build_config_badge(config), title="Configuration", expand=False))
