"""Detection of ``resume:<type>`` fenced blocks."""

from __future__ import annotations

from ..schemas import CodeBlock, Position, Range
from .ast import Node, walk
from .positions import offset_to_position, to_range

RESUME_PREFIX = "resume:"


def fence_tag(node: Node) -> str:
    """First word of the fence info string, or ``""`` for an untagged fence."""
    words = node.info.strip().split(maxsplit=1)
    return words[0] if words else ""


def classify_code_block(node: Node, prefix: str = RESUME_PREFIX) -> CodeBlock | None:
    if node.type != "fence":
        return None
    tag = fence_tag(node)
    if not tag.startswith(prefix):
        return None

    content = node.value or ""
    if content.endswith("\n"):
        content = content[:-1]

    block_range = to_range(node.position)
    content_start = Position(line=block_range.start.line + 1, character=0)
    content_end = offset_to_position(content, len(content), content_start.line)
    return CodeBlock(
        type=tag[len(prefix):],
        lang=tag,
        content=content,
        range=block_range,
        content_range=Range(start=content_start, end=content_end),
    )


def collect_code_blocks(root: Node, prefix: str = RESUME_PREFIX) -> tuple[CodeBlock, ...]:
    """All tagged fences in document order, nested ones included."""
    blocks = []
    for node in walk(root):
        block = classify_code_block(node, prefix)
        if block is not None:
            blocks.append(block)
    return tuple(blocks)


__all__ = ["RESUME_PREFIX", "classify_code_block", "collect_code_blocks", "fence_tag"]
