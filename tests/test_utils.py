from datetime import date, datetime

from flint.html_utils import escape_html, join_root_url, rewrite_absolute_paths
from flint.utils import (
    as_string_list,
    coerce_date,
    ensure_clean_dir,
    format_long_date,
    format_short_date,
    lookup,
    slugify,
    titleize,
)


def test_slugify_and_titleize():
    assert slugify("Getting Started!") == "getting-started"
    assert slugify("  Web Dev  ") == "web-dev"
    assert slugify("!!!") == ""
    assert titleize("getting-started.md") == "Getting Started"
    assert titleize("my_post_name") == "My Post Name"


def test_coerce_date():
    assert coerce_date(date(2026, 2, 1)) == date(2026, 2, 1)
    assert coerce_date(datetime(2026, 2, 1, 10, 30)) == date(2026, 2, 1)
    assert coerce_date("2026-02-01") == date(2026, 2, 1)
    assert coerce_date("2026-02-01T09:00:00Z") == date(2026, 2, 1)
    assert coerce_date("someday") is None
    assert coerce_date(None) is None


def test_date_formats():
    assert format_short_date(date(2026, 2, 1)) == "Feb 1, 2026"
    assert format_long_date(date(2026, 2, 1)) == "February 1, 2026"
    assert format_short_date(None) == ""


def test_lookup_ignores_case_and_separators():
    data = {"Short-URI": "intro", "title": None, "Title": "T"}
    assert lookup(data, "short_uri") == "intro"
    assert lookup(data, "shorturi") == "intro"
    assert lookup(data, "missing", "title") == "T"
    assert lookup(data, "missing", default="x") == "x"


def test_as_string_list():
    assert as_string_list("a, b,, c") == ["a", "b", "c"]
    assert as_string_list(["a", 2]) == ["a", "2"]
    assert as_string_list(None) == []


def test_ensure_clean_dir(tmp_path):
    target = tmp_path / "out"
    target.mkdir()
    (target / "stale.txt").write_text("x", encoding="utf-8")
    ensure_clean_dir(target)
    assert target.exists()
    assert list(target.iterdir()) == []


def test_escape_html():
    assert escape_html('<a href="x">') == "&lt;a href=&#34;x&#34;&gt;"
    assert escape_html(None) == ""


def test_join_root_url():
    assert join_root_url("https://example.com/", "about") == "https://example.com/about"
    assert join_root_url("", "/about") == "/about"


def test_rewrite_absolute_paths():
    html = (
        '<a href="/about/">A</a><img src="/img/x.png">'
        '<a href="https://ext.com/x">E</a><a href="//cdn.com/y">C</a>'
        '<a href="#top">T</a><a href="/docs/already/">D</a>'
        '<button hx-post="/api/save">S</button>'
    )
    rewritten = rewrite_absolute_paths(html, "/docs")
    assert 'href="/docs/about/"' in rewritten
    assert 'src="/docs/img/x.png"' in rewritten
    assert 'href="https://ext.com/x"' in rewritten
    assert 'href="//cdn.com/y"' in rewritten
    assert 'href="#top"' in rewritten
    assert 'href="/docs/already/"' in rewritten
    assert 'hx-post="/docs/api/save"' in rewritten
    assert rewrite_absolute_paths(html, "") == html
