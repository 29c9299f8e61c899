from datetime import date

import pytest

from flint.errors import FrontmatterError
from flint.frontmatter import parse_frontmatter, stringify_frontmatter


def test_parse_splits_metadata_and_body():
    text = "---\ntitle: Home\nlabels: [python, web]\n---\n# Hi\n"
    data, body = parse_frontmatter(text)
    assert data == {"title": "Home", "labels": ["python", "web"]}
    assert body == "# Hi\n"


def test_parse_without_metadata_returns_text_unchanged():
    text = "# Just prose\n\n---\n\nwith a rule"
    assert parse_frontmatter(text) == ({}, text)


def test_parse_empty_block():
    assert parse_frontmatter("---\n---\nbody") == ({}, "body")


def test_parse_crlf_document():
    data, body = parse_frontmatter("---\r\ntitle: Windows\r\n---\r\nbody\r\n")
    assert data == {"title": "Windows"}
    assert body == "body\r\n"


def test_malformed_yaml_names_document():
    with pytest.raises(FrontmatterError) as excinfo:
        parse_frontmatter("---\ntitle: [unclosed\n---\nbody", path="content/bad.md")
    assert "content/bad.md" in str(excinfo.value)
    assert excinfo.value.path == "content/bad.md"


def test_non_mapping_metadata_is_rejected():
    with pytest.raises(FrontmatterError, match="expected a mapping"):
        parse_frontmatter("---\n- a\n- b\n---\nbody")


def test_stringify_empty_metadata_returns_body():
    assert stringify_frontmatter({}, "# Body\n") == "# Body\n"


def test_stringify_preserves_values_through_parse():
    data = {
        "Title": "Release notes",
        "Date": date(2026, 2, 1),
        "Order": 3,
        "Draft": False,
        "Labels": ["python", "web"],
        "Hero": {"heading": "Hi", "primaryCta": {"label": "Go", "href": "/go/"}},
    }
    text = stringify_frontmatter(data, "Body text\n")
    assert text.startswith("---\n")
    parsed, body = parse_frontmatter(text)
    assert parsed == data
    assert list(parsed) == list(data)
    assert body == "Body text\n"
