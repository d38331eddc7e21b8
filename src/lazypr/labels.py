"""Pull request labels and their terminal styles."""

from typing import List, Optional, Sequence

from rich.text import Text

DEFAULT_LABELS = ("enhancement", "bug", "documentation")

LABEL_STYLES = {
    "enhancement": "black on green",
    "bug": "black on red",
    "documentation": "black on blue",
}

# Custom labels cycle through this palette by position
CUSTOM_LABEL_STYLES = [
    "black on cyan",
    "black on magenta",
    "black on yellow",
    "bright_white on grey50",
    "black on bright_green",
    "black on bright_yellow",
    "black on bright_blue",
    "black on bright_magenta",
    "black on bright_cyan",
]

DEFAULT_LABEL_STYLE = "black on white"


def parse_custom_labels(config_value: Optional[str]) -> List[str]:
    """Split the CUSTOM_LABELS setting into label names."""
    if not config_value or not config_value.strip():
        return []
    return [label.strip() for label in config_value.split(",") if label.strip()]


def get_available_labels(custom_labels_config: Optional[str]) -> List[str]:
    """Custom labels followed by the default labels not already present."""
    labels = parse_custom_labels(custom_labels_config)
    for default_label in DEFAULT_LABELS:
        if default_label not in labels:
            labels.append(default_label)
    return labels


def label_style(label: str, custom_labels: Sequence[str]) -> str:
    """Style for a label: fixed for defaults, palette position for custom ones."""
    if label in LABEL_STYLES:
        return LABEL_STYLES[label]
    if label in custom_labels:
        index = list(custom_labels).index(label)
        return CUSTOM_LABEL_STYLES[index % len(CUSTOM_LABEL_STYLES)]
    return DEFAULT_LABEL_STYLE


def format_labels(labels: Optional[Sequence[str]], custom_labels_config: Optional[str] = None) -> Text:
    """Render labels as space-separated badges."""
    text = Text()
    if not labels:
        return text

    custom_labels = parse_custom_labels(custom_labels_config)
    for i, label in enumerate(labels):
        if i:
            text.append(" ")
        text.append(f" {label} ", style=label_style(label, custom_labels))
    return text
