import pytest

from flint.directives import parse_options, tokenize
from flint.errors import DirectiveError
from flint.html_blocks import (
    extract_html_blocks,
    find_placeholders,
    protect,
    restore_html_blocks,
)

TWO_BLOCKS = """Intro

:::html
<div hx-get="/fragments/a.html">A</div>
:::

Middle

:::html
<span>B</span>
:::
"""


def test_extract_replaces_each_block_in_order():
    text, blocks = extract_html_blocks(TWO_BLOCKS)
    assert list(blocks) == ["@@RAWBLOCK0@@", "@@RAWBLOCK1@@"]
    assert blocks["@@RAWBLOCK0@@"] == '<div hx-get="/fragments/a.html">A</div>'
    assert blocks["@@RAWBLOCK1@@"] == "<span>B</span>"
    assert ":::html" not in text
    assert "Intro" in text and "Middle" in text


def test_extract_counter_resets_per_call():
    _, first = extract_html_blocks(TWO_BLOCKS)
    _, second = extract_html_blocks(TWO_BLOCKS)
    assert list(first) == list(second)


def test_text_without_blocks_is_unchanged():
    assert extract_html_blocks("plain *text*\n") == ("plain *text*\n", {})


def test_restore_handles_wrapped_and_bare_placeholders():
    blocks = {"@@RAWBLOCK0@@": "<div>A</div>", "@@RAWBLOCK1@@": "<span>B</span>"}
    html = "<p>@@RAWBLOCK1@@</p>\n<p>x</p>\n@@RAWBLOCK0@@"
    restored = restore_html_blocks(html, blocks)
    assert restored == "<span>B</span>\n<p>x</p>\n<div>A</div>"
    assert find_placeholders(restored) == []


def test_protect_registers_inline_literal():
    blocks = {}
    token = protect("<button>x</button>", blocks)
    assert token == "@@RAWINLINE0@@"
    assert restore_html_blocks(f"<p>Click {token} now</p>", blocks) == (
        "<p>Click <button>x</button> now</p>"
    )


def test_unclosed_directive_raises():
    with pytest.raises(DirectiveError, match="not closed"):
        extract_html_blocks("text\n:::html\n<div>never closed</div>\n")


def test_nested_directive_raises():
    with pytest.raises(DirectiveError, match="nested"):
        extract_html_blocks(":::html\n:::children\n:::\n:::\n")


def test_unknown_directive_names_pass_through_as_text():
    segments = tokenize(":::note\nhello\n:::\n")
    assert [s.kind for s in segments] == ["text"]


def test_tokenize_keeps_raw_text_for_round_trip():
    segments = tokenize(TWO_BLOCKS)
    assert "".join(s.raw for s in segments) == TWO_BLOCKS
    directive = [s for s in segments if s.kind == "directive"][0]
    assert directive.name == "html"
    assert directive.body == '<div hx-get="/fragments/a.html">A</div>\n'


def test_parse_options_quoted_and_bare():
    assert parse_options('sort=title limit=3 class="grid gap-4"') == {
        "sort": "title",
        "limit": "3",
        "class": "grid gap-4",
    }


def test_directive_inside_code_fence_is_not_extracted():
    text = "```\n:::html\n<b>x</b>\n:::\n```\n"
    assert extract_html_blocks(text) == (text, {})


def test_tokenize_keeps_code_fences_whole():
    text = "Intro\n~~~~\n:::children\n~~~\nstill code\n~~~~\n:::html\n<i>a</i>\n:::\n"
    segments = tokenize(text)
    assert [s.kind for s in segments] == ["text", "code", "directive"]
    assert segments[1].raw == "~~~~\n:::children\n~~~\nstill code\n~~~~\n"
    assert "".join(s.raw for s in segments) == text


def test_unclosed_code_fence_runs_to_end():
    segments = tokenize("```\n:::html\n")
    assert [s.kind for s in segments] == ["code"]
