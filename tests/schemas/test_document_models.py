from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from resumemd.schemas import (
    CodeBlock,
    CompositeContent,
    ContentBlock,
    Document,
    ParseError,
    ParseFailure,
    ParseSuccess,
    Position,
    Range,
    SectionDefinition,
    SkillsBlock,
    is_failure,
    is_success,
)


def make_range(start: tuple[int, int], end: tuple[int, int]) -> Range:
    return Range(
        start=Position(line=start[0], character=start[1]),
        end=Position(line=end[0], character=end[1]),
    )


def test_position_rejects_negative_values():
    with pytest.raises(ValidationError):
        Position(line=-1, character=0)


def test_range_order_is_validated():
    assert make_range((1, 4), (1, 4)).start == Position(line=1, character=4)
    with pytest.raises(ValidationError):
        make_range((2, 0), (1, 9))


def test_range_contains():
    outer = make_range((0, 0), (5, 0))

    assert outer.contains(make_range((1, 0), (4, 3)))
    assert outer.contains(outer)
    assert not outer.contains(make_range((4, 0), (5, 1)))


def test_models_are_frozen_and_strict():
    document = Document(raw_content="")

    with pytest.raises(ValidationError):
        document.raw_content = "x"
    with pytest.raises(ValidationError):
        Document(raw_content="", unknown=True)


def test_parse_failure_requires_errors():
    with pytest.raises(ValidationError):
        ParseFailure(errors=())


def test_result_helpers():
    success = ParseSuccess(value=Document(raw_content=""))
    failure = ParseFailure(
        errors=(ParseError(message="bad", range=make_range((1, 0), (1, 0))),)
    )

    assert is_success(success) and not is_failure(success)
    assert is_failure(failure) and not is_success(failure)
    assert failure.errors[0].source == "frontmatter"
    assert success.model_dump(mode="json")["ok"] is True


def test_code_block_round_trips_through_json():
    block = CodeBlock(
        type="skills",
        lang="resume:skills",
        content="- a",
        range=make_range((2, 0), (4, 3)),
        content_range=make_range((3, 0), (3, 3)),
    )

    assert CodeBlock.model_validate_json(block.model_dump_json()) == block


def test_content_block_discriminates_on_type():
    adapter = TypeAdapter(ContentBlock)

    block = adapter.validate_python({"type": "skills", "entries": [{"items": ["Go"]}]})

    assert isinstance(block, SkillsBlock)
    assert block.options.columns == 3
    with pytest.raises(ValidationError):
        adapter.validate_python({"type": "unknown"})


def test_composite_content_preserves_order():
    content = CompositeContent.model_validate(
        {"blocks": [{"type": "markdown", "content": "a"}, {"type": "table", "rows": []}]}
    )

    assert [block.type for block in content.blocks] == ["markdown", "table"]


def test_section_definition_strips_tags():
    definition = SectionDefinition(id="skills", tags=[" Skills "])

    assert definition.tags == ("Skills",)
    assert definition.usage == "both"
