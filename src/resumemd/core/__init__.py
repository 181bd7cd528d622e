"\"\"\"Core parsing components.\"\"\""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .ast import Node, parse_markdown
from .code_blocks import RESUME_PREFIX, collect_code_blocks
from .content import ContentBuilder, ContentConfig, count_entries
from .document import DocumentParser, ParserConfig, parse_document
from .entries import parse_block
from .frontmatter import FrontmatterError, extract_metadata
from .registry import RegistryConfigError, SectionRegistry, default_registry, load_registry
from .sections import SectionSegmenter, Segmenter, SegmenterConfig
from .text import extract_text

__all__ = [
    "RESUME_PREFIX",
    "ContentBuilder",
    "ContentConfig",
    "DocumentParser",
    "FrontmatterError",
    "Node",
    "ParserConfig",
    "RegistryConfigError",
    "SectionRegistry",
    "SectionSegmenter",
    "Segmenter",
    "SegmenterConfig",
    "collect_code_blocks",
    "count_entries",
    "default_registry",
    "extract_metadata",
    "extract_text",
    "load_registry",
    "parse_block",
    "parse_document",
    "parse_markdown",
]
