"""Adapter over ``markdown-it-py``.

Converts the token stream into a small immutable tree. Block nodes carry a
1-based :class:`Span` derived from the engine's line map; inline leaves carry
none, since the engine does not report columns for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from .positions import Point, Span, split_lines

_LITERAL_TYPES = frozenset(
    {"text", "code_inline", "html_inline", "fence", "code_block", "html_block"}
)
# Leaves whose engine children are not part of the visible text.
_OPAQUE_TYPES = frozenset({"image"})


@dataclass(frozen=True, slots=True)
class Node:
    type: str
    children: tuple["Node", ...] = ()
    value: str | None = None
    info: str = ""
    markup: str = ""
    level: int = 0
    position: Span | None = None


def create_engine() -> MarkdownIt:
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def parse_markdown(text: str) -> Node:
    """Parse ``text`` into a root :class:`Node`."""
    tokens = create_engine().parse(text)
    lines = split_lines(text)
    tree = SyntaxTreeNode(tokens)
    return Node(
        type="root",
        children=tuple(_convert(child, lines) for child in tree.children),
        position=_document_span(lines),
    )


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in document order."""
    yield node
    for child in node.children:
        yield from walk(child)


def _convert(node: SyntaxTreeNode, lines: Sequence[str]) -> Node:
    if node.type in _OPAQUE_TYPES:
        children: tuple[Node, ...] = ()
    else:
        children = tuple(_convert(child, lines) for child in node.children)
    value = node.content if node.type in _LITERAL_TYPES else None
    level = int(node.tag[1:]) if node.type == "heading" else 0
    return Node(
        type=node.type,
        children=children,
        value=value,
        info=node.info if node.type == "fence" else "",
        markup=node.markup or "",
        level=level,
        position=_block_span(node, lines),
    )


def _block_span(node: SyntaxTreeNode, lines: Sequence[str]) -> Span | None:
    line_map = node.map
    if not line_map:
        return None
    first, last = line_map[0], max(line_map[1] - 1, line_map[0])
    start_text = _line(lines, first)
    end_text = _line(lines, last)
    column = -1
    if node.type == "fence" and node.markup:
        column = start_text.find(node.markup)
    if column < 0:
        column = len(start_text) - len(start_text.lstrip(" \t"))
    return Span(
        start=Point(line=first + 1, column=column + 1),
        end=Point(line=last + 1, column=len(end_text) + 1),
    )


def _document_span(lines: Sequence[str]) -> Span:
    return Span(
        start=Point(line=1, column=1),
        end=Point(line=len(lines), column=len(lines[-1]) + 1),
    )


def _line(lines: Sequence[str], index: int) -> str:
    if 0 <= index < len(lines):
        return lines[index]
    return ""


__all__ = ["Node", "create_engine", "parse_markdown", "walk"]
