"""Declarative request attributes on Markdown links.

Turns ``[text](target){attr=value attr2="quoted value"}`` into an HTML
element carrying those attributes, so htmx-style interactions can be written
in plain Markdown::

    [Load more](/fragments/more.html){hx-get=/fragments/more.html hx-target=#list}
    [Delete](#){hx-delete=/api/item/1 hx-confirm="Are you sure?"}

Links carrying a mutating method (``hx-post``, ``hx-put``, ``hx-patch``,
``hx-delete``) or an ``hx-trigger`` render as ``<button>`` with the original
target kept in ``data-href``; everything else renders as ``<a href=...>``.
Image references (``![alt](src){...}``) are left alone.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .directives import tokenize
from .html_utils import escape_html

LINK_RE = re.compile(r"(?<!!)\[(?P<text>[^\]]+)\]\((?P<url>[^)]+)\)\{(?P<attrs>[^}]+)\}")

# An inline code span, or an attribute link; whichever starts first wins.
CODE_OR_LINK_RE = re.compile(
    rf"(?P<code>(?<!`)(?P<ticks>`+)(?!`).+?(?<!`)(?P=ticks)(?!`))|{LINK_RE.pattern}",
    re.DOTALL,
)

# key="quoted value" or key=unquoted value running until the next key= token.
ATTRIBUTE_RE = re.compile(
    r'(?P<key>\w[-\w:]*)=(?:"(?P<quoted>[^"]*)"'
    r"|(?P<bare>\S+(?:\s+(?!\w[-\w:]*=)\S+)*))"
)

BUTTON_TRIGGERS = ("hx-post", "hx-put", "hx-patch", "hx-delete", "hx-trigger")

HX_GET_RE = re.compile(r'hx-get="([^"]*)"')


def parse_attributes(attribute_string: str) -> dict[str, str]:
    """Parse an attribute list such as ``{hx-get=/x hx-trigger="click delay:1s"}``.

    Args:
        attribute_string: Attribute list, with or without surrounding braces.

    Returns:
        Ordered mapping of attribute name to (stripped) value.
    """
    attrs: dict[str, str] = {}
    cleaned = attribute_string.strip()
    if cleaned.startswith("{"):
        cleaned = cleaned[1:]
    if cleaned.endswith("}"):
        cleaned = cleaned[:-1]
    for match in ATTRIBUTE_RE.finditer(cleaned.strip()):
        quoted = match.group("quoted")
        value = quoted if quoted is not None else (match.group("bare") or "")
        attrs[match.group("key")] = value.strip()
    return attrs


def render_element(tag: str, attributes: dict[str, str], content: str) -> str:
    """Render ``<tag attr="...">content</tag>`` with escaped attribute values.

    Content is inserted as given; callers escape text content.
    """
    attr_string = " ".join(
        f'{key}="{escape_html(value)}"' for key, value in attributes.items()
    )
    if attr_string:
        return f"<{tag} {attr_string}>{content}</{tag}>"
    return f"<{tag}>{content}</{tag}>"


def render_attribute_link(text: str, url: str, attrs: dict[str, str]) -> str:
    """Render a single attribute link as ``<button>`` or ``<a>``."""
    content = escape_html(text)
    if any(attrs.get(name) for name in BUTTON_TRIGGERS):
        button_attrs = dict(attrs)
        if url and url != "#":
            button_attrs["data-href"] = url
        return render_element("button", button_attrs, content)
    link_attrs = {"href": url}
    link_attrs.update((k, v) for k, v in attrs.items() if k != "href")
    return render_element("a", link_attrs, content)


def rewrite_attribute_links(
    text: str, wrap: Callable[[str], str] | None = None
) -> str:
    """Rewrite every attribute link in Markdown text into HTML.

    Fenced code samples and inline code spans are left as written.

    Args:
        text: Markdown source.
        wrap: Optional callback applied to each generated element, e.g. to
            shield it from the Markdown converter.

    Returns:
        Text with attribute links replaced.
    """

    def repl(match: re.Match) -> str:
        if match.group("code") is not None:
            return match.group(0)
        attrs = parse_attributes(match.group("attrs"))
        element = render_attribute_link(
            match.group("text"), match.group("url").strip(), attrs
        )
        return wrap(element) if wrap else element

    return "".join(
        CODE_OR_LINK_RE.sub(repl, segment.raw) if segment.kind == "text" else segment.raw
        for segment in tokenize(text)
    )


def has_attribute_links(text: str) -> bool:
    """Check whether text contains any ``hx-`` attribute link."""
    return any("hx-" in m.group("attrs") for m in LINK_RE.finditer(text))


def extract_get_hooks(text: str) -> list[str]:
    """Return unique quoted ``hx-get`` targets, in first-seen order."""
    return list(dict.fromkeys(HX_GET_RE.findall(text)))
