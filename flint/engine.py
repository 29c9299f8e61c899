"""Tag-based template engine.

Processes page skeletons containing ``{{tag}}`` placeholders and
``{{#if tag}}...{{/if}}`` conditional spans against a TemplateContext.

Resolution order for a tag name:

1. Built-in scalar and structural tags (title, content, head, navigation,
   blog-header, ...), resolved directly from the context.
2. The TagRegistry (component plugins).
3. Otherwise the token is left in the output verbatim, so unknown tags are
   visible when debugging a skeleton.

Substitution is a single pass over the skeleton: resolved output is never
re-scanned for further tags.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .context import TemplateContext
from .errors import TemplateError
from .html_utils import escape_html
from .partials import asset_url, label_badges, render_partial
from .tags import TagRegistry
from .utils import format_iso_date, format_long_date

CONDITIONAL_RE = re.compile(r"\{\{#if\s+(\S+?)\}\}(.*?)\{\{/if\}\}", re.DOTALL)
TAG_RE = re.compile(r"\{\{(?![#/])(\S+?)\}\}")
WORDS_PER_MINUTE = 200


def estimate_reading_time(html: str) -> int:
    """Estimate reading time in minutes (~200 words per minute, at least 1)."""
    words = len(re.sub(r"<[^>]*>", " ", html).split())
    return max(1, int(words / WORDS_PER_MINUTE + 0.5))


def _head(ctx: TemplateContext) -> str:
    return render_partial(
        "head.html",
        title=ctx.title,
        description=ctx.description,
        keywords=ctx.keywords,
        css_files=[asset_url(ctx.base_path, f) for f in ctx.css_files],
    )


def _foot_scripts(ctx: TemplateContext) -> str:
    return render_partial(
        "foot_scripts.html",
        base_path=ctx.base_path,
        js_files=[asset_url(ctx.base_path, f) for f in ctx.js_files],
    )


def _navigation(ctx: TemplateContext) -> str:
    if not ctx.navigation:
        return ""
    return render_partial("navigation.html", items=ctx.navigation)


def _label_footer(ctx: TemplateContext) -> str:
    if not ctx.site_labels:
        return ""
    return render_partial("label_footer.html", badges=label_badges(list(ctx.site_labels)))


def _category_pill(ctx: TemplateContext) -> str:
    if not ctx.category:
        return ""
    return render_partial("category_pill.html", category=ctx.category)


def _label_badges(ctx: TemplateContext) -> str:
    if not ctx.labels:
        return ""
    return render_partial("label_badges.html", labels=ctx.labels)


def _blog_header(ctx: TemplateContext) -> str:
    return render_partial(
        "blog_header.html",
        title=ctx.title,
        category=ctx.category,
        author=ctx.author,
        labels=ctx.labels,
        iso_date=format_iso_date(ctx.date),
        long_date=format_long_date(ctx.date),
        reading_time=estimate_reading_time(ctx.content),
    )


BUILTIN_TAGS: dict[str, Callable[[TemplateContext], str]] = {
    # Scalars
    "title": lambda ctx: escape_html(ctx.title),
    "description": lambda ctx: escape_html(ctx.description),
    "keywords": lambda ctx: escape_html(ctx.keywords),
    "author": lambda ctx: escape_html(ctx.author),
    "category": lambda ctx: escape_html(ctx.category),
    "basePath": lambda ctx: escape_html(ctx.base_path),
    "type": lambda ctx: escape_html(ctx.page_type),
    "date": lambda ctx: format_iso_date(ctx.date),
    "formatted-date": lambda ctx: format_long_date(ctx.date),
    "reading-time": lambda ctx: f"{estimate_reading_time(ctx.content)} min read",
    # Structural
    "content": lambda ctx: str(ctx.content),
    "head": _head,
    "navigation": _navigation,
    "nav": _navigation,
    "label-footer": _label_footer,
    "foot-scripts": _foot_scripts,
    "blog-header": _blog_header,
    "category-pill": _category_pill,
    "label-badges": _label_badges,
}


class PlaceholderEngine:
    """Resolves ``{{tag}}`` tokens and ``{{#if tag}}`` spans in a skeleton.

    Attributes:
        tags: Registry consulted for tags that are not built in.
    """

    def __init__(self, tags: TagRegistry | None = None):
        self.tags = tags if tags is not None else TagRegistry()

    def resolve_tag(self, name: str, ctx: TemplateContext) -> str | None:
        """Resolve a tag to HTML, or None when no built-in or plugin handles it."""
        builtin = BUILTIN_TAGS.get(name)
        if builtin is not None:
            return builtin(ctx)
        return self.tags.resolve(name, ctx)

    def is_truthy(self, name: str, ctx: TemplateContext) -> bool:
        """A tag is truthy when it resolves to a non-empty string."""
        return bool(self.resolve_tag(name, ctx))

    def process(self, skeleton: str, ctx: TemplateContext) -> str:
        """Render a skeleton against a context.

        Raises:
            TemplateError: If a conditional span contains another one.
        """

        def conditional(match: re.Match) -> str:
            name, block = match.group(1), match.group(2)
            if "{{#if" in block:
                raise TemplateError(
                    f"nested {{{{#if}}}} spans are not supported (inside {{{{#if {name}}}}})"
                )
            return block if self.is_truthy(name, ctx) else ""

        def substitute(match: re.Match) -> str:
            value = self.resolve_tag(match.group(1), ctx)
            return match.group(0) if value is None else value

        result = CONDITIONAL_RE.sub(conditional, skeleton)
        return TAG_RE.sub(substitute, result)


def process_template(
    skeleton: str, ctx: TemplateContext, tags: TagRegistry | None = None
) -> str:
    """Render a skeleton with a throwaway engine."""
    return PlaceholderEngine(tags).process(skeleton, ctx)
