"""Document assembly.

:class:`DocumentParser` is the single entry point turning raw resume markdown
into a :data:`~resumemd.schemas.ParseResult`. Parsing is pure: every call
builds its own markdown engine and nothing is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from ..schemas import Document, ParseFailure, ParseResult, ParseSuccess
from .ast import parse_markdown
from .code_blocks import RESUME_PREFIX, collect_code_blocks
from .frontmatter import FrontmatterError, locate_frontmatter, mask_frontmatter, parse_frontmatter
from .positions import to_range
from .registry import SectionRegistry, default_registry
from .sections import SectionSegmenter, Segmenter


@dataclass
class ParserConfig:
    """Options for :class:`DocumentParser`."""

    code_block_prefix: str = RESUME_PREFIX


class DocumentParser:
    """Parse resume markdown into a positioned document model."""

    def __init__(
        self,
        registry: SectionRegistry | None = None,
        *,
        config: ParserConfig | None = None,
        segmenter: Segmenter | None = None,
    ) -> None:
        self._config = config or ParserConfig()
        if segmenter is None:
            segmenter = SectionSegmenter(registry or default_registry())
        self._segmenter = segmenter
        self._logger = structlog.get_logger(__name__)

    def parse(self, text: str) -> ParseResult:
        metadata = None
        body = text
        block = locate_frontmatter(text)
        if block is not None:
            try:
                metadata = parse_frontmatter(block)
            except FrontmatterError as exc:
                return ParseFailure(errors=(exc.to_parse_error(),))
            body = mask_frontmatter(text, block)

        root = parse_markdown(body)
        code_blocks = collect_code_blocks(root, self._config.code_block_prefix)
        document_end = to_range(root.position).end
        sections = self._segmenter.segment(root, code_blocks, document_end)

        self._logger.debug(
            "document.parsed",
            has_metadata=metadata is not None,
            sections=len(sections),
            code_blocks=len(code_blocks),
        )
        return ParseSuccess(
            value=Document(
                metadata=metadata,
                sections=sections,
                code_blocks=code_blocks,
                raw_content=text,
            )
        )


def parse_document(text: str, registry: SectionRegistry | None = None) -> ParseResult:
    """Parse ``text`` with ``registry`` (the packaged default when omitted)."""
    return DocumentParser(registry).parse(text)


__all__ = ["DocumentParser", "ParserConfig", "parse_document"]
