"""Conversions between engine-native coordinates and zero-based positions.

The markdown engine reports 1-based line/column points; PyYAML reports
character offsets into the metadata body. Everything in the document model is
zero-based and counted in Python code points.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import yaml

from ..schemas import Position, Range

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class Point:
    """1-based line/column as reported by the markdown engine."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    start: Point
    end: Point


def to_position(point: Point | None) -> Position:
    if point is None:
        return Position(line=0, character=0)
    return Position(line=max(point.line - 1, 0), character=max(point.column - 1, 0))


def to_range(span: Span | None) -> Range:
    if span is None:
        return Range(start=Position(), end=Position())
    return Range(start=to_position(span.start), end=to_position(span.end))


def offset_to_position(content: str, offset: int, base_line: int = 0) -> Position:
    """Map a character offset in ``content`` to a position.

    Offsets past the end of ``content`` are not clamped: the character simply
    runs past the length of the last line.
    """
    offset = max(offset, 0)
    preceding = content[:offset]
    newline_count = preceding.count("\n")
    last_newline = preceding.rfind("\n")
    return Position(line=base_line + newline_count, character=offset - (last_newline + 1))


def yaml_node_range(
    content: str,
    node: Any,
    base_line: int,
    fallback_line: int | None = None,
) -> Range:
    """Range of a composed PyYAML node within ``content``.

    Nodes without marks degrade to a zero-width range at the start of
    ``fallback_line`` (``base_line`` when not given).
    """
    start_mark = getattr(node, "start_mark", None)
    end_mark = getattr(node, "end_mark", None)
    if start_mark is None or end_mark is None:
        line = base_line if fallback_line is None else fallback_line
        point = Position(line=line, character=0)
        return Range(start=point, end=point)
    return Range(
        start=offset_to_position(content, start_mark.index, base_line),
        end=offset_to_position(content, end_mark.index, base_line),
    )


def load_yaml_with_nodes(content: str) -> tuple[Any, "yaml.Node | None"]:
    """Compose ``content`` once and construct its value from the same node tree.

    Raises :class:`yaml.YAMLError` for syntax errors and :class:`ValueError` for
    scalars that resolve but cannot be built, such as impossible dates.
    """
    loader = yaml.SafeLoader(content)
    try:
        root = loader.get_single_node()
        data = loader.construct_document(root) if root is not None else None
    finally:
        loader.dispose()
    return data, root


def end_of_text(content: str) -> Position:
    return offset_to_position(content, len(content), 0)


def split_lines(content: str) -> list[str]:
    """Split on any line break the markdown engine recognises."""
    return _LINE_BREAK_RE.split(content)


__all__ = [
    "Point",
    "Span",
    "end_of_text",
    "load_yaml_with_nodes",
    "offset_to_position",
    "split_lines",
    "to_position",
    "to_range",
    "yaml_node_range",
]
