"""Content loading for Flint.

Phase 1 of a build: discover Markdown files, split frontmatter from body and
derive page metadata. No Markdown is compiled here, so every page's metadata
is available before any body (which may list its siblings through
``:::children``) is rendered.

Key classes:
- PageMetadata: Normalized frontmatter plus derived URL and hierarchy keys.
- ContentDocument: A source file's metadata together with its raw body.
- FileContentLoader: Discovers Markdown files in the content directory.
- UrlDeriver: Maps a content-relative path to a clean URL.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from .children import ChildPage
from .errors import BuildError, FrontmatterError
from .frontmatter import parse_frontmatter
from .utils import as_string_list, coerce_date, is_markdown, lookup, slugify, titleize

logger = logging.getLogger(__name__)

ROOT_SHORT_URI = "root"
DEFAULT_ORDER = 999


@dataclass
class PageMetadata:
    """Normalized page metadata.

    Attributes:
        title: Page title (frontmatter ``Title`` or derived from the filename).
        url: Site-relative URL without base path, e.g. ``/docs/setup/``.
        short_uri: Identifier children use in their ``Parent`` key.
        parent: Short-URI of the parent page; None for top-level pages.
        order: Navigation sort key.
        page_type: Page type (``page``, ``post``, ...).
        template: Explicit skeleton name, if the page asks for one.
        draft: Draft pages are skipped unless drafts are requested.
        frontmatter: The raw frontmatter mapping.
    """

    title: str
    url: str
    short_uri: str
    description: str = ""
    keywords: str = ""
    author: str = ""
    date: date | None = None
    category: str = ""
    labels: list[str] = field(default_factory=list)
    page_type: str = "page"
    parent: str | None = None
    order: int = DEFAULT_ORDER
    template: str | None = None
    draft: bool = False
    frontmatter: dict[str, Any] = field(default_factory=dict)

    @property
    def is_top_level(self) -> bool:
        """Pages without a parent, or parented to the site root, appear in navigation."""
        return self.parent is None or self.parent == ROOT_SHORT_URI

    def to_child_page(self) -> ChildPage:
        return ChildPage(
            title=self.title,
            url=self.url,
            description=self.description,
            date=self.date,
            category=self.category,
            labels=tuple(self.labels),
            author=self.author,
            type=self.page_type,
            short_uri=self.short_uri,
            order=self.order,
        )


@dataclass
class ContentDocument:
    """A Markdown source file after frontmatter parsing.

    Attributes:
        path: Absolute path to the source file.
        rel_path: Path relative to the content directory.
        body: Markdown body with the frontmatter removed.
        metadata: Normalized page metadata.
    """

    path: Path
    rel_path: Path
    body: str
    metadata: PageMetadata


class FileContentLoader:
    """Discovers Markdown content files.

    Files and directories starting with ``_`` are treated as drafts and
    internal folders respectively, and are skipped.

    Attributes:
        content_dir: Directory containing Markdown sources.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir

    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """Return Markdown files under the content directory, sorted by path.

        Args:
            include_drafts: Whether to include ``_``-prefixed files.
        """
        if not self.content_dir.is_dir():
            logger.warning("Content directory %s does not exist", self.content_dir)
            return []
        files: list[Path] = []
        for path in sorted(self.content_dir.rglob("*.md")):
            if not path.is_file() or not is_markdown(path):
                continue
            rel = path.relative_to(self.content_dir)
            if any(part.startswith("_") for part in rel.parts[:-1]):
                continue
            if rel.name.startswith("_") and not include_drafts:
                continue
            files.append(path)
        return files


class UrlDeriver:
    """Derives clean URLs for pages.

    ``index.md`` maps to ``/``, ``docs/index.md`` to ``/docs/`` and
    ``docs/Setup Guide.md`` to ``/docs/setup-guide/``.
    """

    def derive(self, rel: Path) -> str:
        segments = [slugify(part) or part for part in rel.parent.parts]
        if rel.stem.lower() != "index":
            segments.append(slugify(rel.stem.lstrip("_")) or rel.stem)
        path = "/".join(segments)
        return f"/{path}/" if path else "/"

    @staticmethod
    def output_path(url: str) -> Path:
        """Output file for a URL, relative to the output directory."""
        return Path(url.strip("/")) / "index.html"


def default_short_uri(rel: Path) -> str:
    """Short-URI used when the frontmatter sets none.

    The top-level index is ``root``; other index files take their folder's
    name; everything else the slug of its filename.
    """
    if rel.stem.lower() == "index":
        return slugify(rel.parent.name) if rel.parent.parts else ROOT_SHORT_URI
    return slugify(rel.stem.lstrip("_"))


def build_metadata(
    frontmatter: dict[str, Any], rel: Path, url: str, default_title: str | None = None
) -> PageMetadata:
    """Normalize a frontmatter mapping into PageMetadata.

    Keys are matched case-insensitively, so ``Title`` and ``title`` or
    ``Short-URI`` and ``short_uri`` are equivalent.
    """
    title = lookup(frontmatter, "title", default=None)
    if not title:
        title = default_title if rel.stem.lower() == "index" and default_title else titleize(rel.name)
    parent = lookup(frontmatter, "parent")
    order = lookup(frontmatter, "order", default=DEFAULT_ORDER)
    try:
        order = int(order)
    except (TypeError, ValueError):
        logger.warning("%s: ignoring non-numeric Order %r", rel, order)
        order = DEFAULT_ORDER
    template = lookup(frontmatter, "template", "layout")
    return PageMetadata(
        title=str(title),
        url=url,
        short_uri=str(lookup(frontmatter, "short-uri", default="") or default_short_uri(rel)),
        description=str(lookup(frontmatter, "description", default="")),
        keywords=", ".join(as_string_list(lookup(frontmatter, "keywords"))),
        author=str(lookup(frontmatter, "author", default="")),
        date=coerce_date(lookup(frontmatter, "date")),
        category=str(lookup(frontmatter, "category", default="")),
        labels=as_string_list(lookup(frontmatter, "labels", "tags")),
        page_type=str(lookup(frontmatter, "type", default="page")),
        parent=str(parent) if parent not in (None, "") else None,
        order=order,
        template=str(template) if template else None,
        draft=bool(lookup(frontmatter, "draft", default=False)) or rel.name.startswith("_"),
        frontmatter=dict(frontmatter),
    )


def load_document(
    path: Path, content_dir: Path, url_deriver: UrlDeriver | None = None, default_title: str | None = None
) -> ContentDocument:
    """Read one source file and parse its frontmatter.

    Raises:
        FrontmatterError: If the frontmatter is not valid YAML.
    """
    rel = path.relative_to(content_dir)
    frontmatter, body = parse_frontmatter(path.read_text(encoding="utf-8"), path=path)
    url = (url_deriver or UrlDeriver()).derive(rel)
    return ContentDocument(
        path=path,
        rel_path=rel,
        body=body,
        metadata=build_metadata(frontmatter, rel, url, default_title),
    )


def children_of(page: PageMetadata, pages: list[PageMetadata]) -> list[ChildPage]:
    """Child records of a page: every page whose Parent is its Short-URI."""
    return [p.to_child_page() for p in pages if p.parent == page.short_uri and p is not page]


def load_documents(
    content_dir: Path, include_drafts: bool = False, default_title: str | None = None
) -> tuple[list[ContentDocument], list[BuildError]]:
    """Load and parse every content file.

    A file with malformed frontmatter does not stop the batch; it is
    reported as a BuildError alongside the documents that did load.

    Returns:
        (documents, errors)
    """
    loader = FileContentLoader(content_dir)
    deriver = UrlDeriver()
    documents: list[ContentDocument] = []
    errors: list[BuildError] = []
    for path in loader.iter_files(include_drafts):
        try:
            document = load_document(path, content_dir, deriver, default_title)
        except FrontmatterError as exc:
            errors.append(BuildError(path, exc.message, exc))
            continue
        if document.metadata.draft and not include_drafts:
            logger.debug("Skipping draft %s", document.rel_path)
            continue
        documents.append(document)
    return documents, errors
