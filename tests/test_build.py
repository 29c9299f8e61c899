import json
import logging
from pathlib import Path

from flint.build import (
    DEFAULT_SKELETON,
    build_navigation,
    build_site,
    load_config,
    normalize_base_path,
    select_template,
)
from flint.content import PageMetadata
from flint.templates import TemplateStore

SKELETON = "<title>{{title}}</title>{{content}}"


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _project(tmp_path: Path, config: str = "", skeleton: str = SKELETON) -> Path:
    _write(tmp_path / "flint.yaml", config)
    if skeleton is not None:
        _write(tmp_path / "templates" / "default.html", skeleton)
    return tmp_path


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def test_home_page_end_to_end(tmp_path):
    project = _project(tmp_path)
    _write(project / "content" / "index.md", "---\ntitle: Home\n---\n# Hi")

    result = build_site(project)

    assert result.ok
    assert _read(result.output_dir / "index.html").strip() == "<title>Home</title><h1>Hi</h1>"


def test_site_with_children_labels_and_artifacts(tmp_path):
    project = _project(
        tmp_path,
        "site_url: https://example.com\nsite_name: Example\nbase_path: /docs/\n",
        "<title>{{title}}</title>{{navigation}}{{content}}",
    )
    content = project / "content"
    _write(content / "index.md", "---\ntitle: Home\n---\nWelcome [About](/about/)")
    _write(content / "about.md", "---\ntitle: About\nOrder: 1\n---\nAbout us")
    _write(
        content / "blog" / "index.md",
        "---\ntitle: Blog\nOrder: 2\n---\n# Blog\n\n:::children sort=date-desc\n"
        '<a class="post" href="{url}">{title}</a>\n:::\n',
    )
    _write(
        content / "blog" / "first.md",
        "---\ntitle: First\nParent: blog\nType: post\nDate: 2026-01-01\nLabels: [python]\n---\nOne",
    )
    _write(
        content / "blog" / "second.md",
        "---\ntitle: Second\nParent: blog\nType: post\nDate: 2026-02-01\nLabels: [python, web]\n---\nTwo",
    )

    result = build_site(project)
    out = result.output_dir

    assert result.ok, result.errors
    blog = _read(out / "blog" / "index.html")
    assert blog.index('href="/docs/blog/second/">Second') < blog.index('href="/docs/blog/first/">First')
    assert "<p><div" not in blog

    home = _read(out / "index.html")
    assert 'href="/docs/about/"' in home
    nav_labels = [label for label in ("Home", "About", "Blog") if f">{label}</a>" in home]
    assert nav_labels == ["Home", "About", "Blog"]
    assert home.index(">About</a>") < home.index(">Blog</a>") < home.index(">Home</a>")
    assert ">First</a>" not in home

    label_page = _read(out / "label" / "python" / "index.html")
    assert "<title>Label: python</title>" in label_page
    assert 'href="/docs/blog/first/"' in label_page
    assert (out / "label" / "web" / "index.html").exists()

    index = json.loads(_read(out / "fragments" / "page-index.json"))
    by_url = {row["url"]: row for row in index}
    assert by_url["/docs/blog/second/"]["date"] == "2026-02-01"
    assert by_url["/docs/blog/second/"]["labels"] == ["python", "web"]
    assert by_url["/docs/label/python/"]["type"] == "label-index"

    sitemap = _read(out / "sitemap.xml")
    assert sitemap.count("<url>") == 5
    assert "/label/" not in sitemap
    assert "Sitemap: https://example.com/docs/sitemap.xml" in _read(out / "robots.txt")
    llms = _read(out / "llms.txt")
    assert llms.startswith("# Example")
    assert llms.index("## Optional") < llms.index("[First]")
    assert sorted(result.artifacts) == ["llms.txt", "robots.txt", "sitemap.xml"]


def test_document_errors_are_collected(tmp_path):
    project = _project(tmp_path)
    _write(project / "content" / "index.md", "# Fine")
    _write(project / "content" / "bad-meta.md", "---\ntitle: [oops\n---\nbody")
    _write(project / "content" / "bad-directive.md", ":::html\n<div>\n")

    result = build_site(project)

    assert not result.ok
    assert sorted(e.source_path.name for e in result.errors) == ["bad-directive.md", "bad-meta.md"]
    assert "not closed" in next(e.message for e in result.errors if e.source_path.name == "bad-directive.md")
    assert (result.output_dir / "index.html").exists()
    assert not (result.output_dir / "bad-directive").exists()


def test_missing_template_is_a_document_error(tmp_path):
    project = _project(tmp_path)
    _write(project / "content" / "index.md", "---\nTemplate: landing\n---\nHi")
    result = build_site(project)
    assert len(result.errors) == 1
    assert 'Template "landing" is not registered' in result.errors[0].message


def test_theme_overlay_and_fallback_skeleton(tmp_path):
    project = _project(tmp_path, "theme: dark\n")
    _write(project / "themes" / "dark" / "templates" / "default.html", "DARK {{title}}")
    _write(project / "content" / "index.md", "---\ntitle: Home\n---\nHi")
    assert _read(build_site(project).output_dir / "index.html") == "DARK Home"

    bare = tmp_path / "bare"
    _write(bare / "content" / "index.md", "---\ntitle: Bare\n---\nHi")
    html = _read(build_site(bare).output_dir / "index.html")
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Bare</title>" in html


def test_project_components_and_overrides(tmp_path):
    project = _project(tmp_path, "workers: 1\n", "{{shout}}|{{hero}}")
    _write(
        project / "components" / "shout.py",
        "from flint.tags import TagDefinition\n"
        "TAG_DEFS = [TagDefinition(tag='shout', resolve=lambda ctx, n: ctx.title.upper())]\n",
    )
    _write(project / "content" / "index.md", "---\ntitle: Home\n---\nHi")
    _write(project / "content" / "other.md", "---\ntitle: Other\n---\nHi")

    result = build_site(project, overrides={"workers": 4, "site_url": None})

    assert result.ok
    assert _read(result.output_dir / "index.html") == "HOME|"
    assert _read(result.output_dir / "other" / "index.html") == "OTHER|"
    assert result.artifacts == []


def test_drafts_and_output_override(tmp_path):
    project = _project(tmp_path)
    _write(project / "content" / "index.md", "Hi")
    _write(project / "content" / "_wip.md", "---\ntitle: WIP\n---\nSoon")
    target = tmp_path / "elsewhere"

    result = build_site(project, include_drafts=True, output_dir_override=target)

    assert result.output_dir == target
    assert (target / "wip" / "index.html").exists()
    assert not (project / "dist").exists()


def test_load_config_defaults_and_overrides(tmp_path):
    config = load_config(tmp_path)
    assert config["output_dir"] == "dist"
    assert config["heading_ids"] is False
    _write(tmp_path / "flint.yaml", "base_path: site/\nheading_ids: true\n")
    config = load_config(tmp_path)
    assert config["base_path"] == "/site"
    assert config["heading_ids"] is True
    _write(tmp_path / "flint.yaml", "- not\n- a mapping\n")
    assert load_config(tmp_path)["output_dir"] == "dist"


def test_normalize_base_path():
    assert normalize_base_path(None) == ""
    assert normalize_base_path("/") == ""
    assert normalize_base_path("docs") == "/docs"
    assert normalize_base_path("/docs/") == "/docs"


def test_select_template():
    store = TemplateStore()
    store.register("default", DEFAULT_SKELETON)
    post = PageMetadata(title="P", url="/p/", short_uri="p", page_type="post")
    assert select_template(post, store) == "default"
    store.register("blog-post", "{{blog-header}}{{content}}")
    assert select_template(post, store) == "blog-post"
    store.register("post", "{{content}}")
    assert select_template(post, store) == "post"
    explicit = PageMetadata(title="L", url="/l/", short_uri="l", template="landing")
    assert select_template(explicit, store) == "landing"


def test_build_navigation_orders_top_level_pages():
    pages = [
        PageMetadata(title="Zeta", url="/z/", short_uri="z"),
        PageMetadata(title="alpha", url="/a/", short_uri="a"),
        PageMetadata(title="First", url="/f/", short_uri="f", order=1),
        PageMetadata(title="Child", url="/c/", short_uri="c", parent="f"),
        PageMetadata(title="Rooted", url="/r/", short_uri="r", parent="root", order=5),
    ]
    assert [item.label for item in build_navigation(pages)] == ["First", "Rooted", "alpha", "Zeta"]


def test_labels_sharing_a_slug_share_one_listing_page(tmp_path, caplog):
    project = _project(tmp_path)
    content = project / "content"
    _write(content / "c.md", "---\ntitle: Pointers\nLabels: [C]\n---\nA")
    _write(content / "cpp.md", "---\ntitle: Templates\nLabels: [C++, '!!!']\n---\nB")

    with caplog.at_level(logging.WARNING, logger="flint.build"):
        result = build_site(project)
    out = result.output_dir

    assert result.ok, result.errors
    listing = _read(out / "label" / "c" / "index.html")
    assert "<title>Label: C</title>" in listing
    assert 'href="/c/"' in listing
    assert 'href="/cpp/"' in listing
    assert not (out / "label" / "index.html").exists()
    index = json.loads(_read(out / "fragments" / "page-index.json"))
    assert [row["url"] for row in index if row["type"] == "label-index"] == ["/label/c/"]
    assert "share the listing page /label/c/" in caplog.text
    assert "'!!!' has no URL slug" in caplog.text
