import mistune
import pytest

from flint.compiler import DocumentCompiler, _generate_heading_id
from flint.errors import CompileError, DirectiveError, FrontmatterError
from flint.html_blocks import find_placeholders


def test_compile_heading():
    html = DocumentCompiler().compile("# Hi")
    assert html.strip() == "<h1>Hi</h1>"


def test_html_block_passes_through_without_paragraph_wrapper():
    body = 'Text\n\n:::html\n<div hx-get="/fragments/x.html" hx-trigger="load">*not markdown*</div>\n:::\n\nMore'
    html = DocumentCompiler().compile(body)
    assert '<div hx-get="/fragments/x.html" hx-trigger="load">*not markdown*</div>' in html
    assert "<p><div" not in html
    assert "@@RAW" not in html
    assert "<p>Text</p>" in html


def test_strict_mode_escapes_prose_html_but_keeps_shielded_markup():
    body = (
        "Inline <b>bold</b> text and [Go](/go/){hx-get=/go/}\n\n"
        ":::html\n<section>raw</section>\n:::\n"
    )
    html = DocumentCompiler(allow_html=False).compile(body)
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert "<b>bold</b>" not in html
    assert '<a href="/go/" hx-get="/go/">Go</a>' in html
    assert "<section>raw</section>" in html


def test_attribute_links_compile_inline():
    html = DocumentCompiler().compile("Click [Save](/api/save){hx-post=/api/save hx-swap=none} now")
    assert html.strip() == (
        '<p>Click <button hx-post="/api/save" hx-swap="none" data-href="/api/save">Save</button> now</p>'
    )


def test_heading_ids_are_unique_and_collected():
    compiler = DocumentCompiler(heading_ids=True)
    document = compiler.compile_with_frontmatter("# Hello World\n\n## Hello World\n")
    assert '<h1 id="hello-world">' in document.html
    assert '<h2 id="hello-world-1">' in document.html
    assert [(h.id, h.level) for h in document.toc] == [("hello-world", 1), ("hello-world-1", 2)]


def test_heading_ids_off_by_default():
    assert "id=" not in DocumentCompiler().compile("## Plain")


def test_generate_heading_id_strips_markup():
    assert _generate_heading_id("Using <code>flint build</code>!") == "using-flint-build"


def test_fenced_code_is_highlighted():
    html = DocumentCompiler().compile("```python\nprint('hi')\n```\n")
    assert 'class="highlight"' in html


def test_unknown_code_language_renders_plain():
    html = DocumentCompiler().compile("```nosuchlang\n<tag>\n```\n")
    assert '<pre><code class="language-nosuchlang">&lt;tag&gt;' in html


def test_breaks_option():
    assert "<br" in DocumentCompiler(breaks=True).compile("line one\nline two")
    assert "<br" not in DocumentCompiler().compile("line one\nline two")


def test_compile_with_frontmatter_returns_metadata():
    document = DocumentCompiler().compile_with_frontmatter("---\ntitle: Home\n---\n# Hi\n")
    assert document.metadata == {"title": "Home"}
    assert "<h1>Hi</h1>" in document.html


def test_compile_with_frontmatter_reports_bad_metadata():
    with pytest.raises(FrontmatterError):
        DocumentCompiler().compile_with_frontmatter("---\n: [\n---\nbody", path="x.md")


def test_unclosed_directive_propagates():
    with pytest.raises(DirectiveError):
        DocumentCompiler().compile(":::html\n<div>\n")


def test_converter_failure_becomes_compile_error(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(mistune, "create_markdown", broken)
    with pytest.raises(CompileError, match="boom"):
        DocumentCompiler().compile("text")


def test_html_directive_inside_highlighted_fence_stays_literal():
    html = DocumentCompiler().compile("```python\n:::html\n<b>x</b>\n:::\n```\n")
    assert 'class="highlight"' in html
    assert find_placeholders(html) == []
    assert "<b>" not in html
    assert "&lt;" in html


def test_html_directive_inside_plain_fence_is_escaped():
    html = DocumentCompiler().compile("```\n:::html\n<b>x</b>\n:::\n```\n")
    assert ":::html\n&lt;b&gt;x&lt;/b&gt;\n:::" in html
    assert find_placeholders(html) == []


def test_attribute_links_in_code_are_not_rewritten():
    compiler = DocumentCompiler()
    inline = compiler.compile("Use `[Load](/x){hx-get=/x}` syntax")
    assert "<code>[Load](/x){hx-get=/x}</code>" in inline
    assert "<a " not in inline

    fenced = compiler.compile("```\n[Load](/x){hx-get=/x}\n```\n")
    assert "[Load](/x){hx-get=/x}" in fenced
    assert "<a " not in fenced
