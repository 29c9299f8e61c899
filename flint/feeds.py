"""SEO artifacts generated from the page index.

robots.txt, sitemap.xml and llms.txt are written to the output root. Each
generator implements FeedGenerator, and FeedRegistry runs them all, so new
formats can be added without touching the build.

Label-listing pages (URLs under ``<base_path>/label/``) are hidden navigation
helpers and are left out of every artifact.

Functions:
    generate_sitemap: Build sitemap.xml content.
    generate_robots: Build robots.txt content.
    generate_llms_manifest: Build llms.txt content (llmstxt.org layout).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .html_utils import escape_html, join_root_url
from .page_index import PageIndexEntry, is_label_page

DEFAULT_CATEGORY = "Docs"


def _published(entries: Iterable[PageIndexEntry], base_path: str) -> list[PageIndexEntry]:
    return [e for e in entries if not is_label_page(e, base_path)]


def generate_sitemap(
    entries: Iterable[PageIndexEntry], site_url: str, base_path: str = ""
) -> str:
    """Generate sitemap.xml content.

    Args:
        entries: Page index rows.
        site_url: Absolute site URL, e.g. ``https://example.com``.
        base_path: Path prefix the site is served under.

    Returns:
        Sitemap XML; ``<lastmod>`` only for dated pages.
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for entry in _published(entries, base_path):
        lines.append("  <url>")
        lines.append(f"    <loc>{escape_html(join_root_url(site_url, entry.url))}</loc>")
        if entry.date:
            lines.append(f"    <lastmod>{entry.date}</lastmod>")
        lines.append("  </url>")
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def generate_robots(site_url: str, base_path: str = "") -> str:
    """Generate a permissive robots.txt pointing at the sitemap."""
    sitemap = join_root_url(site_url, f"{base_path}/sitemap.xml")
    return "\n".join(["User-agent: *", "Allow: /", "", f"Sitemap: {sitemap}", ""])


def generate_llms_manifest(
    entries: Iterable[PageIndexEntry],
    site_url: str,
    base_path: str = "",
    site_name: str = "Site",
    description: str = "",
) -> str:
    """Generate llms.txt content.

    Non-post pages are grouped under one ``##`` section per category
    (uncategorised pages under DEFAULT_CATEGORY), in first-seen order.
    Pages of type ``post`` go to a trailing ``## Optional`` section.
    """
    published = _published(entries, base_path)
    posts = [e for e in published if e.type == "post"]
    groups: dict[str, list[PageIndexEntry]] = {}
    for entry in published:
        if entry.type != "post":
            groups.setdefault(entry.category or DEFAULT_CATEGORY, []).append(entry)

    def item(entry: PageIndexEntry) -> str:
        desc = f": {entry.description}" if entry.description else ""
        return f"- [{entry.title}]({join_root_url(site_url, entry.url)}){desc}"

    lines = [f"# {site_name}", ""]
    if description:
        lines.extend([f"> {description}", ""])
    for category, pages in groups.items():
        lines.extend([f"## {category}", ""])
        lines.extend(item(page) for page in pages)
        lines.append("")
    if posts:
        lines.extend(["## Optional", ""])
        lines.extend(item(page) for page in posts)
        lines.append("")
    return "\n".join(lines)


class FeedGenerator(ABC):
    """Abstract base class for generated site artifacts.

    Subclasses name their output file and build its content from the page
    index and the site configuration.
    """

    @property
    @abstractmethod
    def filename(self) -> str:
        """Return the output filename, e.g. 'sitemap.xml'."""
        ...

    @abstractmethod
    def generate(
        self, entries: list[PageIndexEntry], config: dict[str, Any]
    ) -> str | None:
        """Return file content, or None when the artifact cannot be generated."""
        ...

    def write(
        self, output_dir: Path, entries: list[PageIndexEntry], config: dict[str, Any]
    ) -> bool:
        """Generate and write the artifact.

        Returns:
            True if the file was written, False if skipped.
        """
        content = self.generate(entries, config)
        if content is None:
            return False
        (output_dir / self.filename).write_text(content, encoding="utf-8")
        return True


class SitemapGenerator(FeedGenerator):
    """sitemap.xml; requires ``site_url``."""

    @property
    def filename(self) -> str:
        return "sitemap.xml"

    def generate(self, entries, config):
        if not config.get("site_url"):
            return None
        return generate_sitemap(entries, config["site_url"], config.get("base_path", ""))


class RobotsGenerator(FeedGenerator):
    """robots.txt; requires ``site_url``."""

    @property
    def filename(self) -> str:
        return "robots.txt"

    def generate(self, entries, config):
        if not config.get("site_url"):
            return None
        return generate_robots(config["site_url"], config.get("base_path", ""))


class LlmsManifestGenerator(FeedGenerator):
    """llms.txt; requires ``site_url``."""

    @property
    def filename(self) -> str:
        return "llms.txt"

    def generate(self, entries, config):
        if not config.get("site_url"):
            return None
        return generate_llms_manifest(
            entries,
            config["site_url"],
            config.get("base_path", ""),
            config.get("site_name") or "Site",
            config.get("site_description") or "",
        )


class FeedRegistry:
    """Runs every registered FeedGenerator during a build."""

    def __init__(self) -> None:
        self._generators: list[FeedGenerator] = []

    def register(self, generator: FeedGenerator) -> None:
        self._generators.append(generator)

    def generate_all(
        self, output_dir: Path, entries: Iterable[PageIndexEntry], config: dict[str, Any]
    ) -> list[str]:
        """Write all artifacts; return the filenames that were written."""
        entries = list(entries)
        return [
            g.filename for g in self._generators if g.write(output_dir, entries, config)
        ]


def create_default_feed_registry() -> FeedRegistry:
    """Registry with the sitemap, robots.txt and llms.txt generators."""
    registry = FeedRegistry()
    registry.register(SitemapGenerator())
    registry.register(RobotsGenerator())
    registry.register(LlmsManifestGenerator())
    return registry
