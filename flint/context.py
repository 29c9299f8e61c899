"""Per-page template context.

TemplateContext is built once per page and handed, read-only, to every tag
render function. Sequences are stored as tuples and the frontmatter as a
read-only mapping so render functions cannot leak changes into other tags.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class NavItem:
    """A navigation entry.

    Attributes:
        label: Link text.
        href: Link target.
        active: Whether this entry is the current page.
        order: Sort key; lower comes first.
    """

    label: str
    href: str
    active: bool = False
    order: int = 999


@dataclass(frozen=True)
class TemplateContext:
    """Immutable bag of values available to template tags."""

    title: str
    content: str = ""
    description: str = ""
    keywords: str = ""
    base_path: str = ""
    navigation: tuple[NavItem, ...] = ()
    site_labels: tuple[str, ...] = ()
    frontmatter: Mapping[str, Any] = field(default_factory=dict)
    css_files: tuple[str, ...] = ()
    js_files: tuple[str, ...] = ()
    author: str = ""
    date: date | None = None
    category: str = ""
    labels: tuple[str, ...] = ()
    page_type: str = "page"

    def __post_init__(self):
        for name in ("navigation", "site_labels", "css_files", "js_files", "labels"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "frontmatter", MappingProxyType(dict(self.frontmatter)))
