from __future__ import annotations

import datetime

import pytest

from resumemd.core.frontmatter import (
    FrontmatterError,
    extract_metadata,
    locate_frontmatter,
    mask_frontmatter,
    parse_frontmatter,
    render_value,
)
from resumemd.schemas import Position


def test_locate_requires_opening_delimiter_on_first_line():
    assert locate_frontmatter("# Title\n---\nname: x\n---\n") is None
    assert locate_frontmatter("") is None


def test_unclosed_block_is_not_metadata():
    assert locate_frontmatter("---\nname: John\n\n# Experience\n") is None
    assert extract_metadata("---\nname: John\n") is None


def test_empty_block_has_no_fields():
    metadata = extract_metadata("---\n---\n")

    assert metadata is not None
    assert metadata.fields == ()
    assert metadata.range.start == Position(line=0, character=0)
    assert metadata.range.end == Position(line=1, character=3)


def test_fields_keep_source_order_and_value_ranges():
    metadata = extract_metadata("---\nname: John Doe\nemail: john@example.com\n---\n\n# Content")

    assert [field.key for field in metadata.fields] == ["name", "email"]
    name = metadata.get("name")
    assert name.value == "John Doe"
    assert name.range.start == Position(line=1, character=6)
    assert name.range.end == Position(line=1, character=14)
    assert metadata.get("email").range.start.line == 2


def test_crlf_delimiters_are_accepted():
    metadata = extract_metadata("---\r\nname: Test\r\n---\r\n")

    assert metadata is not None
    assert metadata.get("name").value == "Test"


def test_empty_value_renders_as_null():
    metadata = extract_metadata("---\nname: John\nphone:\n---")

    assert metadata.get("phone").value == "null"


def test_nested_values_render_as_json():
    metadata = extract_metadata(
        "---\nname: John\ncontact:\n  email: j@example.com\n  phone: 123\nskills:\n  - Python\n  - 日本語\n---\n"
    )

    assert metadata.get("contact").value == '{"email": "j@example.com", "phone": 123}'
    assert metadata.get("skills").value == '["Python", "日本語"]'
    assert metadata.get("contact").range.start.line == 3


def test_scalar_rendering():
    assert render_value(None) == "null"
    assert render_value(True) == "true"
    assert render_value(False) == "false"
    assert render_value(30) == "30"
    assert render_value(3.5) == "3.5"
    assert render_value(datetime.date(2020, 1, 15)) == "2020-01-15"
    assert render_value({"since": datetime.date(2020, 1, 1)}) == '{"since": "2020-01-01"}'


def test_non_mapping_body_yields_no_fields():
    metadata = extract_metadata("---\n- a\n- b\n---\n")

    assert metadata is not None
    assert metadata.fields == ()


def test_invalid_yaml_raises_with_position():
    block = locate_frontmatter('---\nname: "unclosed string\n---')

    with pytest.raises(FrontmatterError) as excinfo:
        parse_frontmatter(block)

    error = excinfo.value.to_parse_error()
    assert error.source == "frontmatter"
    assert error.message.startswith("Invalid YAML frontmatter")
    assert error.range.start.line == 1


def test_mask_preserves_line_count():
    text = "---\n# not a heading\n---\n# Skills\n"
    block = locate_frontmatter(text)

    masked = mask_frontmatter(text, block)

    assert masked.split("\n") == ["", "", "", "# Skills", ""]


def test_impossible_date_raises_frontmatter_error():
    block = locate_frontmatter("---\nname: A\ndate: 2024-13-01\n---\n")

    with pytest.raises(FrontmatterError) as excinfo:
        parse_frontmatter(block)

    error = excinfo.value.to_parse_error()
    assert error.source == "frontmatter"
    assert "month must be in 1..12" in error.message
    assert error.range == block.range


def test_unmatched_key_node_falls_back_to_ordinal_line():
    metadata = extract_metadata("---\nname: A\nyes: 1\n---\n")

    field = metadata.fields[1]
    assert field.key == "true"
    assert field.value == "1"
    assert field.range.start == Position(line=2, character=0)
    assert field.range.end == Position(line=2, character=0)
