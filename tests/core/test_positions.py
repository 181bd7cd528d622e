from __future__ import annotations

import pytest
import yaml

from resumemd.core.positions import (
    Point,
    Span,
    end_of_text,
    load_yaml_with_nodes,
    offset_to_position,
    split_lines,
    to_position,
    to_range,
    yaml_node_range,
)
from resumemd.schemas import Position, Range


def test_to_position_converts_one_based_points():
    assert to_position(None) == Position(line=0, character=0)
    assert to_position(Point(line=1, column=1)) == Position(line=0, character=0)
    assert to_position(Point(line=5, column=10)) == Position(line=4, character=9)


def test_to_position_clamps_degenerate_points():
    assert to_position(Point(line=0, column=0)) == Position(line=0, character=0)


def test_to_range_maps_both_endpoints():
    span = Span(start=Point(line=2, column=1), end=Point(line=3, column=7))

    assert to_range(span) == Range(
        start=Position(line=1, character=0),
        end=Position(line=2, character=6),
    )
    assert to_range(None) == Range()


def test_offset_to_position_counts_newlines_from_base_line():
    content = "ab\ncd\nef"

    assert offset_to_position(content, 0) == Position(line=0, character=0)
    assert offset_to_position(content, 4, base_line=2) == Position(line=3, character=1)
    assert offset_to_position(content, len(content)) == Position(line=2, character=2)


def test_offset_to_position_does_not_clamp_past_end():
    assert offset_to_position("abc", 10) == Position(line=0, character=10)


def test_yaml_node_range_uses_marks():
    content = "name: John\nrole: Dev\n"
    root = yaml.compose(content, Loader=yaml.SafeLoader)
    role_value = root.value[1][1]

    node_range = yaml_node_range(content, role_value, base_line=1)

    assert node_range.start == Position(line=2, character=6)
    assert node_range.end == Position(line=2, character=9)


def test_yaml_node_range_degrades_to_zero_width():
    assert yaml_node_range("x: 1", None, base_line=1) == Range(
        start=Position(line=1, character=0),
        end=Position(line=1, character=0),
    )
    fallback = yaml_node_range("x: 1", object(), base_line=1, fallback_line=4)
    assert fallback.start == fallback.end == Position(line=4, character=0)


def test_split_lines_handles_all_line_breaks():
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]
    assert split_lines("") == [""]


def test_end_of_text_points_after_last_character():
    assert end_of_text("# A\n\nbody") == Position(line=2, character=4)
    assert end_of_text("line\n") == Position(line=1, character=0)


def test_load_yaml_with_nodes_builds_value_from_composed_tree():
    data, root = load_yaml_with_nodes("- a\n- b: 1\n")

    assert data == ["a", {"b": 1}]
    assert isinstance(root, yaml.SequenceNode)
    assert len(root.value) == 2
    assert load_yaml_with_nodes("") == (None, None)


def test_load_yaml_with_nodes_surfaces_impossible_dates():
    with pytest.raises(ValueError):
        load_yaml_with_nodes("when: 2024-02-30\n")
