"""Tokenizer for fenced ``:::name`` directives.

Both the raw HTML shield and the children directive use the same fence
syntax::

    :::html
    <div hx-get="/fragments/x.html">...</div>
    :::

The tokenizer splits a document into an ordered list of text and directive
segments, so each stage rewrites only the directive kinds it owns and
passes everything else through verbatim. Directives cannot nest; an opener
inside an open directive, or a directive that is never closed, raises
DirectiveError instead of silently swallowing the rest of the document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import DirectiveError

KNOWN_DIRECTIVES = ("html", "children")

_OPEN_RE = re.compile(r"^:::(?P<name>[A-Za-z][\w-]*)(?:[ \t]+(?P<options>.*?))?[ \t]*\r?$")
_CLOSE_RE = re.compile(r"^:::[ \t]*\r?$")
# Backtick fence info strings may not contain backticks.
_FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}(?=[^`]*$)|~{3,})")
_OPTION_RE = re.compile(r'([\w-]+)=(?:"([^"]*)"|(\S+))')


@dataclass(frozen=True)
class Segment:
    """A slice of a document.

    Attributes:
        kind: ``"text"``, ``"code"`` (a fenced code sample) or ``"directive"``.
        raw: The exact source text of the segment.
        name: Directive name (empty for text).
        options: Raw option string from the opening line.
        body: Lines between the opening and closing fences.
    """

    kind: str
    raw: str
    name: str = ""
    options: str = ""
    body: str = ""


def tokenize(text: str) -> list[Segment]:
    """Split text into text, code and directive segments in document order.

    Fenced code samples (``` or ~~~) become ``code`` segments, so directive
    markers shown inside them are left alone. A code fence that is never
    closed runs to the end of the document.
    """
    segments: list[Segment] = []
    buffer: list[str] = []
    current: dict | None = None
    code: dict | None = None

    def flush() -> None:
        if buffer:
            segments.append(Segment("text", "".join(buffer)))
            buffer.clear()

    for line in text.splitlines(keepends=True):
        stripped = line.rstrip("\n")
        if code is not None:
            code["lines"].append(line)
            if _closes_fence(stripped, code["fence"]):
                segments.append(Segment("code", "".join(code["lines"])))
                code = None
            continue

        if current is None:
            fence = _FENCE_RE.match(stripped)
            if fence:
                flush()
                code = {"fence": fence.group("fence"), "lines": [line]}
                continue
            opener = _OPEN_RE.match(stripped)
            if opener and opener.group("name") in KNOWN_DIRECTIVES:
                flush()
                current = {
                    "name": opener.group("name"),
                    "options": opener.group("options") or "",
                    "lines": [line],
                }
            else:
                buffer.append(line)
            continue

        current["lines"].append(line)
        if _CLOSE_RE.match(stripped):
            lines = current["lines"]
            segments.append(
                Segment(
                    "directive",
                    "".join(lines),
                    name=current["name"],
                    options=current["options"],
                    body="".join(lines[1:-1]),
                )
            )
            current = None
            continue
        opener = _OPEN_RE.match(stripped)
        if opener and opener.group("name") in KNOWN_DIRECTIVES:
            raise DirectiveError(
                f":::{opener.group('name')} cannot be nested inside :::{current['name']}"
            )

    if current is not None:
        raise DirectiveError(f":::{current['name']} directive is not closed")
    if code is not None:
        segments.append(Segment("code", "".join(code["lines"])))
    flush()
    return segments


def _closes_fence(line: str, fence: str) -> bool:
    """True when line closes a code fence opened with ``fence``."""
    closer = re.match(rf"^ {{0,3}}({re.escape(fence[0])}+)[ \t]*\r?$", line)
    return bool(closer) and len(closer.group(1)) >= len(fence)


def parse_options(option_string: str) -> dict[str, str]:
    """Parse ``key=value key2="quoted value"`` pairs from an opening line."""
    options: dict[str, str] = {}
    for match in _OPTION_RE.finditer(option_string or ""):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        options[match.group(1)] = value
    return options
