"\"\"\"Top-level section segmentation.\"\"\""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

import structlog

from ..schemas import CodeBlock, Position, Range, Section
from .ast import Node
from .positions import to_range
from .registry import SectionRegistry
from .text import extract_text


@runtime_checkable
class Segmenter(Protocol):
    """Contract for splitting a parsed tree into sections."""

    def segment(
        self,
        root: Node,
        code_blocks: Sequence[CodeBlock],
        document_end: Position,
    ) -> tuple[Section, ...]:
        """Return the recognised sections of ``root`` in document order."""


@dataclass
class SegmenterConfig:
    """Heading level that opens a section."""

    heading_level: int = 1


class SectionSegmenter:
    """Split the root node sequence into recognised sections."""

    def __init__(
        self,
        registry: SectionRegistry,
        *,
        config: SegmenterConfig | None = None,
    ) -> None:
        self._registry = registry
        self._config = config or SegmenterConfig()
        self._logger = structlog.get_logger(__name__)

    @property
    def registry(self) -> SectionRegistry:
        return self._registry

    def segment(
        self,
        root: Node,
        code_blocks: Sequence[CodeBlock],
        document_end: Position,
    ) -> tuple[Section, ...]:
        headings = [node for node in root.children if self._is_boundary(node)]
        sections: list[Section] = []
        for index, heading in enumerate(headings):
            title = extract_text(heading).strip()
            definition = self._registry.find_by_tag(title)
            if definition is None:
                self._logger.debug(
                    "section.unrecognized",
                    title=title,
                    suggestion=self._registry.suggest(title),
                )
                continue

            title_range = to_range(heading.position)
            if index + 1 < len(headings):
                end = to_range(headings[index + 1].position).start
            else:
                end = document_end
            if end.as_tuple() < title_range.start.as_tuple():
                end = document_end
            section_range = Range(start=title_range.start, end=end)

            sections.append(
                Section(
                    id=definition.id,
                    title=title,
                    title_range=title_range,
                    range=section_range,
                    code_blocks=tuple(
                        block for block in code_blocks if section_range.contains(block.range)
                    ),
                )
            )
        return tuple(sections)

    def _is_boundary(self, node: Node) -> bool:
        return node.type == "heading" and node.level == self._config.heading_level


__all__ = ["SectionSegmenter", "Segmenter", "SegmenterConfig"]
