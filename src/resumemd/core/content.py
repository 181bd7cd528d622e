"\"\"\"Composite section content assembly.\"\"\""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, TypeVar, assert_never

import structlog

from ..schemas import (
    CertificationsBlock,
    CompetenciesBlock,
    CompositeContent,
    ContentBlock,
    Document,
    EducationBlock,
    ExperienceBlock,
    LanguagesBlock,
    MarkdownBlock,
    Section,
    SkillsBlock,
    TableBlock,
)
from .entries import STRUCTURED_TYPES, parse_block
from .positions import split_lines

BlockT = TypeVar("BlockT")


@dataclass
class ContentConfig:
    """Rendering defaults applied to structured blocks."""

    skills_columns: int = 3


class ContentBuilder:
    """Build the ordered markdown/structured block sequence for a section."""

    def __init__(self, *, config: ContentConfig | None = None) -> None:
        self._config = config or ContentConfig()
        self._logger = structlog.get_logger(__name__)

    def build(self, document: Document, section: Section) -> CompositeContent:
        lines = split_lines(document.raw_content)
        body_start = section.title_range.end.line + 1
        body_end = section.range.end.line
        if section.range.end.character > 0:
            body_end += 1
        body_end = min(body_end, len(lines))

        blocks: list[ContentBlock] = []
        cursor = body_start
        for code_block in section.code_blocks:
            if code_block.range.start.line < cursor:
                # Nested inside an already consumed block.
                continue
            self._append_markdown(blocks, lines[cursor:code_block.range.start.line])
            if code_block.type in STRUCTURED_TYPES:
                parsed = parse_block(code_block, skills_columns=self._config.skills_columns)
                if parsed is not None:
                    blocks.append(parsed)
            else:
                self._logger.debug(
                    "content.block_unsupported", section=section.id, block_type=code_block.type
                )
            cursor = code_block.range.end.line + 1
        if cursor < body_end:
            self._append_markdown(blocks, lines[cursor:body_end])

        self._logger.debug("content.built", section=section.id, blocks=len(blocks))
        return CompositeContent(blocks=tuple(blocks))

    @staticmethod
    def _append_markdown(blocks: list[ContentBlock], chunk: Sequence[str]) -> None:
        start, end = 0, len(chunk)
        while start < end and not chunk[start].strip():
            start += 1
        while end > start and not chunk[end - 1].strip():
            end -= 1
        if start < end:
            blocks.append(MarkdownBlock(content="\n".join(chunk[start:end])))


def is_structured_block(block: ContentBlock) -> bool:
    return not isinstance(block, MarkdownBlock)


def markdown_blocks(content: CompositeContent) -> list[MarkdownBlock]:
    return [block for block in content.blocks if isinstance(block, MarkdownBlock)]


def blocks_of_type(content: CompositeContent, block_type: type[BlockT]) -> list[BlockT]:
    return [block for block in content.blocks if isinstance(block, block_type)]


def count_entries(block: ContentBlock) -> int:
    """Number of entries (rows for tables) a block carries; markdown counts as one."""
    if isinstance(block, MarkdownBlock):
        return 1
    if isinstance(block, TableBlock):
        return len(block.rows)
    if isinstance(
        block,
        (
            EducationBlock,
            ExperienceBlock,
            CertificationsBlock,
            SkillsBlock,
            CompetenciesBlock,
            LanguagesBlock,
        ),
    ):
        return len(block.entries)
    assert_never(block)


def describe_block(block: ContentBlock) -> str:
    if isinstance(block, MarkdownBlock):
        return "markdown"
    return f"{block.type}[{count_entries(block)}]"


def describe_blocks(blocks: Iterable[ContentBlock]) -> str:
    return ", ".join(describe_block(block) for block in blocks)


__all__ = [
    "ContentBuilder",
    "ContentConfig",
    "blocks_of_type",
    "count_entries",
    "describe_block",
    "describe_blocks",
    "is_structured_block",
    "markdown_blocks",
]
