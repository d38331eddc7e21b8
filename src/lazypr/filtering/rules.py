"""Rule sets describing noise commits.

Each rule set is a named category holding case-insensitive patterns that are
matched against the start of a trimmed commit message.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Pattern, Tuple


@dataclass(frozen=True)
class FilterRule:
    """A named category of noise commit patterns."""

    name: str
    patterns: Tuple[Pattern[str], ...]

    @classmethod
    def from_strings(cls, name: str, patterns: Iterable[str]) -> "FilterRule":
        """Compile raw pattern strings into a rule."""
        return cls(name, tuple(re.compile(p, re.IGNORECASE) for p in patterns))

    def matches(self, message: str) -> bool:
        """Check whether the message starts with any of the rule's patterns."""
        return any(pattern.match(message) for pattern in self.patterns)


MERGE_RULE = FilterRule.from_strings(
    "merge",
    [
        r"merge\s+(branch|pull\s+request|remote-tracking\s+branch)",
        r"merge\s+.+\s+into\s+.+",
        r"merged\s+in\s+",
    ],
)

DEPENDENCY_UPDATE_RULE = FilterRule.from_strings(
    "dependency-update",
    [
        r"(bump|update|upgrade)\s+(dependencies|deps|dependency)",
        r"chore\(deps\)",
        r"build\(deps\)",
        r"\[deps\]",
        r"(npm|yarn|pnpm|bun)\s+update",
        r"update\s+.*\s+(package|packages|dependency|dependencies)",
        r"upgrade\s+.*\s+to\s+v?\d+\.\d+",
        r"bump\s+.+\s+(from|to)\s+\d+\.\d+",
        r"dependabot",
        r"renovate",
    ],
)

FORMATTING_RULE = FilterRule.from_strings(
    "formatting",
    [
        r"(fix|run|apply)\s+(formatting|linting|lint|prettier|eslint)",
        r"format\s+(code|files?)",
        r"(prettier|eslint|style)\s+(fix|fixes)",
        r"chore\(format\)",
        r"style:",
        r"auto[- ]?format",
        r"reformat\s+",
        r"whitespace\s+",
        r"fix\s+indentation",
    ],
)

DEFAULT_RULES: Tuple[FilterRule, ...] = (MERGE_RULE, DEPENDENCY_UPDATE_RULE, FORMATTING_RULE)
