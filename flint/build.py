"""Site building functionality for Flint.

This module turns a project directory into a static site. The build runs in
two phases separated by a barrier:

1. Every content file is read and its frontmatter parsed (no cross-document
   dependencies).
2. Every body is compiled, wrapped in its page skeleton and written out.
   Bodies may list their children through ``:::children``, which needs the
   phase-1 metadata of the whole corpus.

The tag registry and template store are populated before phase 2 starts and
are only read afterwards, so phase 2 can fan out over a thread pool.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads site configuration from flint.yaml.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from markupsafe import Markup

from .children import expand_children
from .compiler import DocumentCompiler
from .components import BUILTIN_COMPONENTS_DIR
from .content import ContentDocument, PageMetadata, UrlDeriver, children_of, load_documents
from .context import NavItem, TemplateContext
from .errors import BuildError, FlintError
from .feeds import create_default_feed_registry
from .html_utils import rewrite_absolute_paths
from .page_index import (
    LABEL_INDEX_TYPE,
    PageIndexEntry,
    build_page_index,
    group_labels,
    label_slug,
    label_url,
)
from .partials import render_partial
from .tags import TagRegistry, scan_definitions
from .templates import TemplateStore, load_templates_from_dir, overlay_templates_from_dir
from .utils import ensure_clean_dir, format_short_date

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "flint.yaml"
PAGE_INDEX_PATH = Path("fragments") / "page-index.json"

DEFAULT_CONFIG: dict[str, Any] = {
    "content_dir": "content",
    "output_dir": "dist",
    "templates_dir": "templates",
    "theme": None,
    "components_dir": "components",
    "site_url": "",
    "site_name": "",
    "site_description": "",
    "base_path": "",
    "allow_html": True,
    "breaks": False,
    "heading_ids": False,
    "workers": 1,
    "css_files": [],
    "js_files": [],
    "default_title": None,
}

DEFAULT_SKELETON = """<!DOCTYPE html>
<html lang="en">
{{head}}
<body class="bg-gray-50 text-gray-900">
{{#if navigation}}{{navigation}}{{/if}}
<main class="max-w-4xl mx-auto px-4 py-8 prose">
{{content}}
</main>
{{label-footer}}
{{foot-scripts}}
</body>
</html>
"""


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Metadata of every page that was loaded.
        output_dir: Directory where the site was built.
        errors: Per-document failures; the rest of the site is still built.
        index: The page index, including label-listing pages.
        artifacts: Generated SEO files that were written (sitemap.xml, ...).
    """

    pages: list[PageMetadata]
    output_dir: Path
    errors: list[BuildError] = field(default_factory=list)
    index: list[PageIndexEntry] = field(default_factory=list)
    artifacts: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from flint.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
            else:
                logger.warning("Ignoring %s: expected a mapping", config_path)
    config["base_path"] = normalize_base_path(config.get("base_path"))
    return config


def normalize_base_path(value: Any) -> str:
    """Normalize a base path to ``/prefix`` form; empty for the site root.

    Examples:
        >>> normalize_base_path("docs/")
        '/docs'
    """
    text = str(value or "").strip().strip("/")
    return f"/{text}" if text else ""


def create_tag_registry(project_root: Path, config: dict[str, Any]) -> TagRegistry:
    """Registry holding the built-in components, then the project's own.

    Project components registered under an existing tag name replace the
    built-in definition.
    """
    registry = TagRegistry()
    registry.register(scan_definitions(BUILTIN_COMPONENTS_DIR))
    registry.register(scan_definitions(project_root / config["components_dir"]))
    return registry


def create_template_store(
    project_root: Path, config: dict[str, Any], tags: TagRegistry
) -> TemplateStore:
    """Load project skeletons, apply the theme overlay, ensure a ``default``."""
    store = load_templates_from_dir(project_root / config["templates_dir"], tags)
    theme = config.get("theme")
    if theme:
        theme_dir = project_root / "themes" / str(theme) / "templates"
        if not theme_dir.is_dir():
            logger.warning("Theme %s has no templates directory at %s", theme, theme_dir)
        overlay_templates_from_dir(theme_dir, store)
    if not store.has("default"):
        store.register("default", DEFAULT_SKELETON)
    return store


def build_navigation(pages: list[PageMetadata]) -> list[NavItem]:
    """Navigation entries for top-level pages, sorted by Order then label."""
    items = [
        NavItem(label=page.title, href=page.url, order=page.order)
        for page in pages
        if page.is_top_level
    ]
    return sorted(items, key=lambda item: (item.order, item.label.casefold()))


def select_template(page: PageMetadata, store: TemplateStore) -> str:
    """Pick the skeleton for a page.

    An explicit ``Template`` is used as-is (and fails if missing). Otherwise
    the first registered of the page type, ``blog-post`` for posts, and
    ``default`` wins.
    """
    if page.template:
        return page.template
    candidates = [page.page_type]
    if page.page_type == "post":
        candidates.append("blog-post")
    for name in candidates:
        if store.has(name):
            return name
    return "default"


class PageRenderer:
    """Phase 2 of the build: compile and render single documents.

    Holds only read-only state after construction, so render() may be
    called from several threads at once.
    """

    def __init__(
        self,
        config: dict[str, Any],
        compiler: DocumentCompiler,
        store: TemplateStore,
        pages: list[PageMetadata],
    ):
        self.config = config
        self.compiler = compiler
        self.store = store
        self.pages = pages
        self.base_path = config["base_path"]
        self.navigation = build_navigation(pages)
        self.site_labels = sorted(
            {label for page in pages for label in page.labels}, key=str.casefold
        )
        self.label_groups = group_labels(self.site_labels)

    def context(self, page: PageMetadata, content: str) -> TemplateContext:
        return TemplateContext(
            title=page.title,
            content=content,
            description=page.description,
            keywords=page.keywords,
            base_path=self.base_path,
            navigation=[
                NavItem(item.label, item.href, item.href == page.url, item.order)
                for item in self.navigation
            ],
            site_labels=self.site_labels,
            frontmatter=page.frontmatter,
            css_files=self.config.get("css_files") or [],
            js_files=self.config.get("js_files") or [],
            author=page.author,
            date=page.date,
            category=page.category,
            labels=page.labels,
            page_type=page.page_type,
        )

    def render(self, document: ContentDocument) -> str:
        """Compile and render one document to a full HTML page.

        Raises:
            BuildError: Wrapping whatever went wrong, with the source path.
        """
        page = document.metadata
        try:
            body = expand_children(document.body, children_of(page, self.pages))
            content = self.compiler.compile(body)
            rendered = self.store.render(
                select_template(page, self.store), self.context(page, content)
            )
        except FlintError as exc:
            raise BuildError(document.path, str(exc), exc) from exc
        except Exception as exc:
            raise BuildError(document.path, _format_error_message(exc), exc) from exc
        return rewrite_absolute_paths(rendered, self.base_path)

    def render_label_page(
        self, label: str, aliases: list[str] | None = None
    ) -> tuple[PageMetadata, str]:
        """Render the listing page for one label.

        Pages carrying any of ``aliases`` (labels sharing the slug) are listed too.
        """
        members = set(aliases or ()) | {label}
        tagged = [page for page in self.pages if members.intersection(page.labels)]
        content = render_partial(
            "label_index.html",
            label=label,
            pages=[
                {
                    "url": page.url,
                    "title": page.title,
                    "description": page.description,
                    "category": page.category,
                    "date": format_short_date(page.date),
                }
                for page in tagged
            ],
        )
        page = PageMetadata(
            title=f"Label: {label}",
            url=label_url(label),
            short_uri=f"label-{label_slug(label)}",
            description=f'Pages tagged with "{label}"',
            page_type=LABEL_INDEX_TYPE,
        )
        rendered = self.store.render("default", self.context(page, Markup(content)))
        return page, rewrite_absolute_paths(rendered, self.base_path)


def build_site(
    project_root: Path,
    include_drafts: bool = False,
    clean_output: bool = True,
    output_dir_override: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        include_drafts: Whether to include draft pages.
        clean_output: Whether to wipe the output directory before building.
        output_dir_override: Optional path to write the build output instead of config output_dir.
        overrides: Config values taking precedence over flint.yaml; None values are ignored.

    Returns:
        BuildResult with pages, per-document errors and the page index.
    """
    config = load_config(project_root)
    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value
    config["base_path"] = normalize_base_path(config.get("base_path"))

    output_dir = output_dir_override or (project_root / config["output_dir"])
    if clean_output:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)

    # Phase 1: metadata for the whole corpus.
    documents, errors = load_documents(
        project_root / config["content_dir"],
        include_drafts=include_drafts,
        default_title=config.get("default_title"),
    )
    for error in errors:
        logger.error("%s", error)
    pages = [document.metadata for document in documents]

    tags = create_tag_registry(project_root, config)
    store = create_template_store(project_root, config, tags)
    compiler = DocumentCompiler(
        allow_html=bool(config["allow_html"]),
        breaks=bool(config["breaks"]),
        heading_ids=bool(config["heading_ids"]),
    )
    renderer = PageRenderer(config, compiler, store, pages)

    # Phase 2: bodies.
    def render(document: ContentDocument) -> tuple[ContentDocument, str | BuildError]:
        try:
            return document, renderer.render(document)
        except BuildError as exc:
            return document, exc

    workers = max(1, int(config.get("workers") or 1))
    if workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(render, documents))
    else:
        results = [render(document) for document in documents]

    written: list[PageMetadata] = []
    for document, outcome in results:
        if isinstance(outcome, BuildError):
            logger.error("%s", outcome)
            errors.append(outcome)
            continue
        _write_page(output_dir, document.metadata.url, outcome)
        written.append(document.metadata)

    label_pages: list[PageMetadata] = []
    for label in renderer.site_labels:
        if not label_slug(label):
            logger.warning("Label %r has no URL slug; skipping its listing page", label)
    for group in renderer.label_groups.values():
        label = group[0]
        if len(group) > 1:
            logger.warning(
                "Labels %s share the listing page %s",
                ", ".join(repr(name) for name in group),
                label_url(label),
            )
        try:
            page, rendered = renderer.render_label_page(label, group)
        except FlintError as exc:
            error = BuildError(Path(label_url(label)), str(exc), exc)
            logger.error("%s", error)
            errors.append(error)
            continue
        _write_page(output_dir, page.url, rendered)
        label_pages.append(page)

    index = build_page_index(written + label_pages, config["base_path"])
    _write_page_index(output_dir, index)
    artifacts = create_default_feed_registry().generate_all(output_dir, index, config)

    logger.info(
        "Built %d pages and %d label pages into %s (%d errors)",
        len(written),
        len(label_pages),
        output_dir,
        len(errors),
    )
    return BuildResult(
        pages=pages, output_dir=output_dir, errors=errors, index=index, artifacts=artifacts
    )


def _format_error_message(exc: Exception) -> str:
    """Format an unexpected exception into a user-friendly error message."""
    error_type = type(exc).__name__
    error_msg = str(exc)
    if error_type == "TypeError":
        return f"Type error: {error_msg}"
    if error_type == "AttributeError":
        return f"Attribute error: {error_msg}"
    return f"{error_type}: {error_msg}"


def _write_page(output_dir: Path, url: str, rendered: str) -> None:
    html_path = output_dir / UrlDeriver.output_path(url)
    html_path.parent.mkdir(parents=True, exist_ok=True)
    with open(html_path, "w", encoding="utf-8") as f:
        f.write(rendered)


def _write_page_index(output_dir: Path, index: list[PageIndexEntry]) -> None:
    target = output_dir / PAGE_INDEX_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.to_dict() for entry in index]
    target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
