"""Utility functions for Flint.

String processing, date coercion and filesystem helpers shared by the
content loader, the children directive and the template engine.

Key functions:
    slugify: Convert filenames and labels to URL slugs.
    titleize: Convert filenames to human-readable titles.
    coerce_date: Turn a loosely-typed frontmatter value into a date.
    format_short_date / format_long_date / format_iso_date: Date rendering.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug.

    Args:
        text: Any string (filename stem, label, category).

    Returns:
        URL-friendly slug; empty when the text has no alphanumerics.

    Examples:
        >>> slugify("Getting Started!")
        'getting-started'
    """
    cleaned = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    return cleaned.strip("-")


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("getting-started.md")
        'Getting Started'
    """
    base = Path(filename).stem
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def coerce_date(value: Any) -> date | None:
    """Coerce a frontmatter value into a date.

    Accepts date/datetime objects (as produced by PyYAML) and ISO-like
    strings. Anything else yields None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return datetime.strptime(text[:10], "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def format_iso_date(value: date | None) -> str:
    """Format a date as ``YYYY-MM-DD``, or an empty string."""
    return value.strftime("%Y-%m-%d") if value else ""


def format_short_date(value: date | None) -> str:
    """Format a date as ``Feb 1, 2026``, or an empty string."""
    if not value:
        return ""
    return f"{MONTHS[value.month - 1][:3]} {value.day}, {value.year}"


def format_long_date(value: date | None) -> str:
    """Format a date as ``February 1, 2026``, or an empty string."""
    if not value:
        return ""
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year}"


def lookup(mapping: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Look up the first matching key, ignoring case and ``-``/``_`` differences.

    Frontmatter written by hand mixes ``title``, ``Title`` and ``Short-URI``
    style keys; this treats them as the same field.

    Args:
        mapping: Frontmatter mapping.
        *names: Candidate key names in priority order.
        default: Value returned when nothing matches.

    Returns:
        The value of the first matching key, or default.
    """
    normalized = {_normalize_key(k): v for k, v in mapping.items() if isinstance(k, str)}
    for name in names:
        key = _normalize_key(name)
        if key in normalized and normalized[key] is not None:
            return normalized[key]
    return default


def _normalize_key(key: str) -> str:
    return key.lower().replace("-", "").replace("_", "")


def as_string_list(value: Any) -> list[str]:
    """Normalize a list-or-comma-string frontmatter value to a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [str(value)]


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)
