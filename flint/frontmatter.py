"""YAML frontmatter parsing and serialization.

A content document is an optional ``---`` delimited YAML mapping followed by
a Markdown body. Parsing a document without a metadata block returns an
empty mapping and the text unchanged; malformed YAML is a hard failure that
names the document.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from .errors import FrontmatterError

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


def parse_frontmatter(
    text: str, path: Path | str | None = None
) -> tuple[dict[str, Any], str]:
    """Split a document into its metadata mapping and body.

    Args:
        text: Raw document text.
        path: Document path, used only in error messages.

    Returns:
        Tuple of (frontmatter dict, remaining body).

    Raises:
        FrontmatterError: If the metadata block is not valid YAML or is
            not a mapping.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group("meta"))
    except yaml.YAMLError as exc:
        raise FrontmatterError(path, str(exc)) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            path, f"expected a mapping, got {type(data).__name__}"
        )
    return data, text[match.end() :]


def stringify_frontmatter(data: dict[str, Any], body: str) -> str:
    """Serialize metadata and body back into a document.

    An empty mapping yields the body unchanged, with no empty delimiters.
    """
    if not data:
        return body
    meta = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    return f"---\n{meta}---\n{body}"
