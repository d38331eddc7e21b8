"""Discovery of pull request templates in a repository."""

import hashlib
import re
from pathlib import Path
from typing import List, Optional, Set

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger(__name__)

# Checked in order; directories contribute every markdown file they contain
TEMPLATE_LOCATIONS = [
    ".github/pull_request_template.md",
    ".github/PULL_REQUEST_TEMPLATE.md",
    ".github/pull_request_template/",
    ".github/PULL_REQUEST_TEMPLATE/",
    "docs/pull_request_template.md",
    "docs/PULL_REQUEST_TEMPLATE.md",
]


class TemplateError(Exception):
    """Raised when a template file cannot be read."""


class PRTemplate(BaseModel):
    """A pull request template found in the repository."""

    name: str = Field(..., description="Display name derived from the file name")
    path: str = Field(..., description="Path relative to the repository root")
    content: str = Field(..., description="Template markdown")


def template_name(filename: str) -> str:
    """Display name for a template file, e.g. ``bug_fix.md`` -> ``Bug Fix``."""
    name = re.sub(r"\.md$", "", filename, flags=re.IGNORECASE).replace("_", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), name)


def _read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Failed to read template file: {path}") from e


def _candidate_files(root: Path, location: str) -> List[str]:
    full_path = root / location
    if full_path.is_file():
        return [location]
    if full_path.is_dir():
        return [
            f"{location}{child.name}"
            for child in sorted(full_path.iterdir())
            if child.is_file() and child.suffix.lower() == ".md"
        ]
    return []


def find_pr_templates(cwd: Optional[Path] = None) -> List[PRTemplate]:
    """Find all pull request templates under the repository root.

    Paths differing only by case and files with identical content are
    reported once, which keeps results stable on case-insensitive file
    systems.

    Args:
        cwd: Repository root (default: current directory)

    Returns:
        Templates in discovery order
    """
    root = Path(cwd) if cwd is not None else Path.cwd()
    templates: List[PRTemplate] = []
    seen_paths: Set[str] = set()
    seen_digests: Set[str] = set()

    for location in TEMPLATE_LOCATIONS:
        for relative_path in _candidate_files(root, location):
            if relative_path.lower() in seen_paths:
                continue
            content = _read_template(root / relative_path)
            digest = hashlib.sha256(content.encode()).hexdigest()
            if digest in seen_digests:
                continue

            templates.append(
                PRTemplate(
                    name=template_name(relative_path.rsplit("/", 1)[-1]),
                    path=relative_path,
                    content=content,
                )
            )
            seen_paths.add(relative_path.lower())
            seen_digests.add(digest)

    logger.debug("templates_found", root=str(root), count=len(templates))
    return templates


def get_pr_template(name_or_path: str, cwd: Optional[Path] = None) -> Optional[PRTemplate]:
    """Look up a template by name, then by path, then by partial name.

    Args:
        name_or_path: Template display name or relative path
        cwd: Repository root (default: current directory)

    Returns:
        The matching template, or None
    """
    if not name_or_path:
        return None

    templates = find_pr_templates(cwd)
    wanted = name_or_path.lower()

    for template in templates:
        if template.name.lower() == wanted:
            return template

    wanted_path = name_or_path.replace("\\", "/")
    for template in templates:
        if template.path == wanted_path:
            return template

    for template in templates:
        if wanted in template.name.lower():
            return template

    return None


def has_pr_templates(cwd: Optional[Path] = None) -> bool:
    return len(find_pr_templates(cwd)) > 0
