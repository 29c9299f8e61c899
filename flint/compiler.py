"""Markdown document compiler for Flint.

Compiles a page body to HTML in a fixed order of stages:

1. ``:::html`` blocks are lifted out behind placeholders.
2. Attribute links (``[text](url){hx-...}``) become HTML elements, each
   shielded the same way.
3. Mistune converts the remaining Markdown.
4. Placeholders are replaced by their literal markup.

``:::children`` expansion happens before stage 1 and is the caller's job,
since it needs the child pages' metadata.

Key classes:
- DocumentCompiler: Runs the stages with per-instance options.
- CompiledDocument: Result of compile_with_frontmatter.
- Heading: Heading collected for table-of-contents generation.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .attribute_links import rewrite_attribute_links
from .errors import CompileError, FlintError
from .frontmatter import parse_frontmatter
from .html_blocks import extract_html_blocks, protect, restore_html_blocks

logger = logging.getLogger(__name__)

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]


@dataclass
class Heading:
    """A heading extracted from Markdown content for TOC generation.

    Attributes:
        id: Anchor ID for the heading (empty when ids are disabled).
        text: The text content of the heading.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


@dataclass
class CompiledDocument:
    """HTML plus the metadata parsed from the document's frontmatter."""

    html: str
    metadata: dict[str, Any]
    toc: list[Heading] = field(default_factory=list)


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text (may contain inline markup).

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _FlintRenderer(mistune.HTMLRenderer):
    """Mistune renderer with optional heading ids and Pygments highlighting.

    Attributes:
        heading_ids: Whether headings get an ``id`` attribute.
        headings: Headings seen during rendering, in document order.
    """

    def __init__(self, escape: bool = False, heading_ids: bool = False):
        super().__init__(escape=escape)
        self.heading_ids = heading_ids
        self.headings: list[Heading] = []
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading and record it for the table of contents."""
        heading_id = ""
        if self.heading_ids:
            base_id = _generate_heading_id(text)
            if base_id in self._heading_id_counts:
                self._heading_id_counts[base_id] += 1
                heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
            else:
                self._heading_id_counts[base_id] = 0
                heading_id = base_id
        self.headings.append(Heading(id=heading_id, text=text, level=level))
        id_attr = f' id="{heading_id}"' if heading_id else ""
        return f"<h{level}{id_attr}>{text}</h{level}>\n"

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a fenced code block, highlighted when the language is known."""
        lang = (info or "").strip().split(None, 1)[0] if info else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                logger.debug("No Pygments lexer for %r; rendering plain code", lang)
            else:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class DocumentCompiler:
    """Compiles Markdown page bodies to HTML.

    Instances hold only options, so one compiler can be shared by every
    worker in a build.

    Attributes:
        allow_html: Pass raw HTML in prose through; when False it is escaped.
            Shielded ``:::html`` blocks and attribute links are unaffected.
        breaks: Render single newlines as ``<br />``.
        heading_ids: Emit slug ids on headings.
    """

    def __init__(
        self,
        allow_html: bool = True,
        breaks: bool = False,
        heading_ids: bool = False,
    ):
        self.allow_html = allow_html
        self.breaks = breaks
        self.heading_ids = heading_ids

    def compile(self, markdown: str) -> str:
        """Compile a Markdown body to HTML.

        Raises:
            DirectiveError: For unclosed or nested directives.
            CompileError: If Markdown conversion fails.
        """
        html, _ = self._compile(markdown)
        return html

    def compile_with_frontmatter(
        self, text: str, path: Path | str | None = None
    ) -> CompiledDocument:
        """Parse frontmatter, then compile the remaining body.

        Raises:
            FrontmatterError: If the metadata block is malformed.
        """
        metadata, body = parse_frontmatter(text, path)
        html, toc = self._compile(body)
        return CompiledDocument(html=html, metadata=metadata, toc=toc)

    def _compile(self, markdown: str) -> tuple[str, list[Heading]]:
        try:
            shielded, blocks = extract_html_blocks(markdown)
            shielded = rewrite_attribute_links(
                shielded, wrap=lambda element: protect(element, blocks)
            )
            renderer = _FlintRenderer(
                escape=not self.allow_html, heading_ids=self.heading_ids
            )
            convert = mistune.create_markdown(
                renderer=renderer, hard_wrap=self.breaks, plugins=MARKDOWN_PLUGINS
            )
            html = convert(shielded)
            return restore_html_blocks(html, blocks), renderer.headings
        except FlintError:
            raise
        except Exception as exc:
            raise CompileError(f"Failed to compile markdown: {exc}") from exc
