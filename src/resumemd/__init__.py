"\"\"\"Position-accurate resume markdown parser.\"\"\""

from __future__ import annotations

__version__ = "0.1.0"

from .core import DocumentParser, SectionRegistry, parse_document
from .schemas import Document, ParseFailure, ParseResult, ParseSuccess, is_failure, is_success

__all__ = [
    "Document",
    "DocumentParser",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "SectionRegistry",
    "__version__",
    "is_failure",
    "is_success",
    "parse_document",
]
