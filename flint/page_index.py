"""Static page index.

One compact row per page, written to ``fragments/page-index.json`` and used
both by the client-side label router and by the sitemap, robots and
llms.txt generators.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from .utils import format_iso_date, slugify

if TYPE_CHECKING:
    from .content import PageMetadata

LABEL_INDEX_TYPE = "label-index"


@dataclass(frozen=True)
class PageIndexEntry:
    """A row of the page index."""

    url: str
    title: str
    description: str = ""
    labels: tuple[str, ...] = field(default_factory=tuple)
    category: str = ""
    date: str | None = None
    type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["labels"] = list(self.labels)
        return data


def label_slug(label: str) -> str:
    """URL slug for a label, e.g. ``Web Dev`` -> ``web-dev``."""
    return slugify(label)


def label_prefix(base_path: str = "") -> str:
    """URL prefix shared by all generated label-listing pages."""
    return f"{base_path}/label/"


def label_url(label: str, base_path: str = "") -> str:
    return f"{label_prefix(base_path)}{label_slug(label)}/"


def group_labels(labels: Iterable[str]) -> dict[str, list[str]]:
    """Group labels that share a URL slug, in first-seen order.

    Labels such as ``C`` and ``C++`` slugify alike and so share one listing
    page. Labels with an empty slug are left out.

    Returns:
        Mapping of slug to the labels carrying it.
    """
    groups: dict[str, list[str]] = {}
    for label in labels:
        slug = label_slug(label)
        if slug and label not in groups.get(slug, []):
            groups.setdefault(slug, []).append(label)
    return groups


def is_label_page(entry: PageIndexEntry, base_path: str = "") -> bool:
    """True for generated label-listing pages, which stay out of published indexes."""
    return entry.url.startswith(label_prefix(base_path))


def build_page_index(
    pages: Iterable[PageMetadata], base_path: str = ""
) -> list[PageIndexEntry]:
    """Derive one index row per page.

    Args:
        pages: Page metadata, URLs relative to the site root.
        base_path: Prefix added to every URL.

    Returns:
        Rows in page order, dates formatted as ``YYYY-MM-DD`` or None.
    """
    return [
        PageIndexEntry(
            url=f"{base_path}{page.url}",
            title=page.title,
            description=page.description,
            labels=tuple(page.labels),
            category=page.category,
            date=format_iso_date(page.date) or None,
            type=page.page_type,
        )
        for page in pages
    ]
