"""Raw HTML block protection for Markdown compilation.

``:::html`` blocks are lifted out of a document before Markdown conversion
and swapped for opaque placeholder tokens, then put back into the compiled
HTML so their markup passes through untouched::

    :::html
    <div hx-get="/fragments/greeting.html" hx-target="#result">
      Click me
    </div>
    :::

Block placeholders sit on their own paragraph; the Markdown converter wraps
them in ``<p>``, which restoration removes. Inline placeholders (created via
``protect`` for elements that must survive strict HTML escaping) are
replaced in place.
"""

from __future__ import annotations

import re

from .directives import tokenize

BLOCK_TOKEN = "@@RAWBLOCK{index}@@"
INLINE_TOKEN = "@@RAWINLINE{index}@@"
PLACEHOLDER_RE = re.compile(r"@@RAW(?:BLOCK|INLINE)\d+@@")


def extract_html_blocks(text: str) -> tuple[str, dict[str, str]]:
    """Replace every ``:::html`` block with a placeholder token.

    Numbering starts at zero on every call.

    Args:
        text: Markdown source.

    Returns:
        Tuple of (shielded text, ordered mapping of placeholder to literal).
        Text without blocks is returned unchanged with an empty mapping.
    """
    blocks: dict[str, str] = {}
    parts: list[str] = []
    for segment in tokenize(text):
        if segment.kind == "directive" and segment.name == "html":
            token = BLOCK_TOKEN.format(index=len(blocks))
            blocks[token] = segment.body.strip()
            # Blank lines on both sides keep the token in a paragraph of its own.
            parts.append(f"\n{token}\n\n")
        else:
            parts.append(segment.raw)
    if not blocks:
        return text, blocks
    return "".join(parts), blocks


def protect(literal: str, blocks: dict[str, str]) -> str:
    """Register an inline literal and return the token standing in for it."""
    token = INLINE_TOKEN.format(index=len(blocks))
    blocks[token] = literal
    return token


def restore_html_blocks(html: str, blocks: dict[str, str]) -> str:
    """Put literal content back in place of each placeholder token.

    Args:
        html: Compiled HTML containing placeholder tokens.
        blocks: Mapping returned by extract_html_blocks (and protect).

    Returns:
        HTML with every known placeholder replaced.
    """
    result = html
    for token, literal in blocks.items():
        if token.startswith("@@RAWBLOCK"):
            wrapped = re.compile(rf"<p>\s*{re.escape(token)}\s*</p>")
            result = wrapped.sub(lambda _m, lit=literal: lit, result)
        result = result.replace(token, literal)
    return result


def find_placeholders(html: str) -> list[str]:
    """List placeholder tokens still present in html (should be empty)."""
    return PLACEHOLDER_RE.findall(html)
