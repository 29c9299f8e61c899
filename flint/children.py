"""Preprocessor for ``:::children`` directives.

Generates a listing of child pages for section pages from the child
pages' frontmatter, instead of hand-maintained HTML::

    :::children sort=date-desc limit=5 class="space-y-4"
    <div class="card">
      <a href="{url}">{title}</a>
      <p>{date} · {category} {labels:badges}</p>
    </div>
    :::

Without a body, DEFAULT_TEMPLATE is used. Options: ``sort`` (date-desc,
date-asc, order, title), ``limit``, ``class`` and ``type`` (only children of
that page type). The expansion is emitted as an ``:::html`` block so the
Markdown compiler leaves it untouched.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date

from .directives import parse_options, tokenize
from .html_utils import escape_html
from .utils import format_iso_date, format_short_date

SORT_CHOICES = ("date-desc", "date-asc", "order", "title")
DEFAULT_WRAPPER_CLASS = "space-y-4"

# Lines of rendered output that would read as a directive fence.
_FENCE_LINE_RE = re.compile(r"^:::", re.MULTILINE)

DEFAULT_TEMPLATE = """<div class="border border-gray-200 rounded p-4 hover:shadow-sm transition-shadow">
  <a href="{url}" class="text-lg font-semibold text-blue-600 hover:underline">{title}</a>
  <p class="text-sm text-gray-500 mt-1">{date} · {category} {labels:badges}</p>
  <p class="text-gray-600 mt-2">{description}</p>
</div>"""


@dataclass(frozen=True)
class ChildPage:
    """Read-only projection of a child page's frontmatter."""

    title: str
    url: str
    description: str = ""
    date: date | None = None
    category: str = ""
    labels: tuple[str, ...] = ()
    author: str = ""
    type: str = "page"
    short_uri: str = ""
    order: int = 999


@dataclass
class ChildrenOptions:
    """Options parsed from the ``:::children`` opening line."""

    sort: str = "date-desc"
    limit: int | None = None
    wrapper_class: str | None = None
    filter_type: str | None = None


def parse_children_options(option_string: str) -> ChildrenOptions:
    """Parse ``sort=``, ``limit=``, ``class=`` and ``type=`` options.

    Unknown sort values and unparseable limits fall back to the defaults.
    """
    options = ChildrenOptions()
    for key, value in parse_options(option_string).items():
        if key == "sort":
            if value in SORT_CHOICES:
                options.sort = value
        elif key == "limit":
            try:
                options.limit = int(value)
            except ValueError:
                options.limit = None
        elif key == "class":
            options.wrapper_class = value
        elif key == "type":
            options.filter_type = value
    return options


def render_label_badges(labels: Iterable[str]) -> str:
    """Render labels as styled badge spans."""
    return " ".join(
        '<span class="text-xs bg-blue-100 text-blue-700 px-2 py-0.5 rounded">'
        f"{escape_html(label)}</span>"
        for label in labels
    )


# Long forms first: "{date:iso}" must not be eaten by a "{date" prefix match.
PLACEHOLDERS: tuple[tuple[str, Callable[[ChildPage], str]], ...] = (
    ("{labels:badges}", lambda p: render_label_badges(p.labels)),
    ("{date:iso}", lambda p: format_iso_date(p.date)),
    ("{short-uri}", lambda p: escape_html(p.short_uri)),
    ("{description}", lambda p: escape_html(p.description)),
    ("{category}", lambda p: escape_html(p.category)),
    ("{author}", lambda p: escape_html(p.author)),
    ("{labels}", lambda p: escape_html(", ".join(p.labels))),
    ("{title}", lambda p: escape_html(p.title)),
    ("{date}", lambda p: format_short_date(p.date)),
    ("{type}", lambda p: escape_html(p.type)),
    ("{url}", lambda p: escape_html(p.url)),
)


def render_child_template(template: str, page: ChildPage) -> str:
    """Fill a per-item template with one child page's fields."""
    result = template
    for placeholder, render in PLACEHOLDERS:
        if placeholder in result:
            result = result.replace(placeholder, render(page))
    return result


def sort_children(pages: Iterable[ChildPage], sort: str) -> list[ChildPage]:
    """Sort child pages by the named strategy; missing dates sort as earliest."""
    pages = list(pages)
    if sort == "date-asc":
        return sorted(pages, key=lambda p: p.date or date.min)
    if sort == "order":
        return sorted(pages, key=lambda p: p.order)
    if sort == "title":
        return sorted(pages, key=lambda p: p.title.casefold())
    return sorted(pages, key=lambda p: p.date or date.min, reverse=True)


def select_children(
    children: Iterable[ChildPage], options: ChildrenOptions
) -> list[ChildPage]:
    """Filter, sort and limit children according to options."""
    pages = list(children)
    if options.filter_type:
        pages = [p for p in pages if p.type == options.filter_type]
    pages = sort_children(pages, options.sort)
    if options.limit and options.limit > 0:
        pages = pages[: options.limit]
    return pages


def expand_children(text: str, children: Iterable[ChildPage]) -> str:
    """Expand every ``:::children`` directive in a Markdown document.

    Args:
        text: Markdown source.
        children: Child page records of the document being compiled.

    Returns:
        Markdown with each directive replaced by an ``:::html`` block, or
        removed entirely when no child matches.
    """
    children = list(children)
    segments = tokenize(text)
    if not any(s.kind == "directive" and s.name == "children" for s in segments):
        return text

    parts: list[str] = []
    for segment in segments:
        if segment.kind != "directive" or segment.name != "children":
            parts.append(segment.raw)
            continue
        options = parse_children_options(segment.options)
        pages = select_children(children, options)
        if not pages:
            continue
        template = segment.body.replace("\r\n", "\n").strip() or DEFAULT_TEMPLATE
        wrapper = escape_html(options.wrapper_class or DEFAULT_WRAPPER_CLASS)
        items = "\n".join(render_child_template(template, page) for page in pages)
        items = _FENCE_LINE_RE.sub("&#58;::", items)
        parts.append(f':::html\n<div class="{wrapper}">\n{items}\n</div>\n:::\n')
    return "".join(parts)
