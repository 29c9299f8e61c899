from flint.components import BUILTIN_COMPONENTS_DIR
from flint.components.media import filename_alt, normalise
from flint.context import TemplateContext
from flint.tags import TagRegistry, scan_definitions


def _registry():
    registry = TagRegistry()
    registry.register(scan_definitions(BUILTIN_COMPONENTS_DIR))
    return registry


def test_builtin_components_are_discoverable():
    definitions = scan_definitions(BUILTIN_COMPONENTS_DIR)
    tags = {d.tag for d in definitions if d.tag}
    assert {
        "hero",
        "feature-grid",
        "stats-bar",
        "media-gallery",
        "media-strip",
        "call-to-action",
        "showcase-grid",
    } <= tags
    assert any(d.tag is None and d.match("media:3") for d in definitions)
    assert all(d.frontmatter_key for d in definitions)


def test_hero_renders_from_frontmatter():
    ctx = TemplateContext(
        title="T",
        frontmatter={
            "Hero": {
                "tagline": "New",
                "heading": "Build <fast>",
                "primaryCta": {"label": "Start", "href": "/docs/"},
            }
        },
    )
    html = _registry().resolve("hero", ctx)
    assert "Build &lt;fast&gt;" in html
    assert 'href="/docs/"' in html
    assert "New" in html


def test_hero_without_frontmatter_is_empty():
    assert _registry().resolve("hero", TemplateContext(title="T")) == ""


def test_feature_grid_and_stats_bar():
    ctx = TemplateContext(
        title="T",
        frontmatter={
            "features": {
                "heading": "Why",
                "features": [{"icon": "⚡", "title": "Fast", "description": "Very", "color": "amber"}],
            },
            "Stats": {"stats": [{"value": "10k", "label": "Users", "color": "green"}]},
        },
    )
    registry = _registry()
    grid = registry.resolve("feature-grid", ctx)
    assert "bg-amber-100" in grid
    assert "Fast" in grid
    stats = registry.resolve("stats-bar", ctx)
    assert "grid-cols-1" in stats
    assert "text-green-400" in stats


def test_media_index_tag():
    ctx = TemplateContext(
        title="T",
        frontmatter={"Image": ["/img/one.jpg", {"src": "/img/two.jpg", "alt": "Second", "caption": "Two"}]},
    )
    registry = _registry()
    second = registry.resolve("media:1", ctx)
    assert 'src="/img/two.jpg"' in second
    assert 'alt="Second"' in second
    assert "<figcaption" in second
    assert registry.resolve("media:9", ctx) == ""
    gallery = registry.resolve("media-gallery", ctx)
    assert gallery.count("<figure") == 2
    assert "sm:grid-cols-2" in gallery


def test_normalise_image_values():
    assert normalise(None) == []
    assert normalise("/a.png") == [{"src": "/a.png", "alt": "a", "caption": ""}]
    assert [a["src"] for a in normalise(["/a.png", {"src": "/b.png"}, {"alt": "x"}, ""])] == [
        "/a.png",
        "/b.png",
    ]
    assert filename_alt("/img/red_fox-1.jpg") == "red fox 1"


def test_call_to_action_renders_buttons():
    ctx = TemplateContext(
        title="T",
        frontmatter={
            "CTA": {
                "heading": "Ready?",
                "subtitle": "Ship <today>",
                "primaryCta": {"label": "Start", "href": "/docs/"},
                "secondaryCta": {"label": "Examples", "href": "/examples/"},
            }
        },
    )
    html = _registry().resolve("call-to-action", ctx)
    assert "<h2" in html and "Ready?" in html
    assert "Ship &lt;today&gt;" in html
    assert 'href="/docs/"' in html
    assert 'href="/examples/"' in html


def test_call_to_action_needs_heading_and_primary_button():
    registry = _registry()
    no_button = TemplateContext(title="T", frontmatter={"CTA": {"heading": "Ready?"}})
    assert registry.resolve("call-to-action", no_button) == ""
    assert registry.resolve("call-to-action", TemplateContext(title="T")) == ""


def test_showcase_grid_renders_linked_cards():
    ctx = TemplateContext(
        title="T",
        frontmatter={
            "Showcase": {
                "heading": "Built with Flint",
                "items": [
                    {"icon": "📘", "title": "Docs", "description": "Guides", "href": "/docs/"},
                    {"icon": "📰", "title": "Blog", "description": "News", "href": "/blog/"},
                ],
            }
        },
    )
    html = _registry().resolve("showcase-grid", ctx)
    assert html.count('class="group block') == 2
    assert 'href="/blog/"' in html
    assert "Built with Flint" in html


def test_showcase_grid_without_items_is_empty():
    ctx = TemplateContext(title="T", frontmatter={"Showcase": {"heading": "H", "items": []}})
    assert _registry().resolve("showcase-grid", ctx) == ""
