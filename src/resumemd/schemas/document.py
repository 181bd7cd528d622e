"""Immutable document model produced by the parser."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import Field, model_validator

from .base import FrozenModel


class Position(FrozenModel):
    """Zero-based line/character coordinate in the source text."""

    line: int = Field(default=0, ge=0)
    character: int = Field(default=0, ge=0)

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.character)


class Range(FrozenModel):
    """Source span; ``start`` never sorts after ``end``."""

    start: Position = Field(default_factory=Position)
    end: Position = Field(default_factory=Position)

    @model_validator(mode="after")
    def _check_order(self) -> "Range":
        if self.start.as_tuple() > self.end.as_tuple():
            raise ValueError("range start must not come after range end")
        return self

    def contains(self, other: "Range") -> bool:
        return (
            self.start.as_tuple() <= other.start.as_tuple()
            and other.end.as_tuple() <= self.end.as_tuple()
        )


class MetadataField(FrozenModel):
    """A top-level metadata key with its value rendered as text."""

    key: str
    value: str
    range: Range


class Metadata(FrozenModel):
    """The leading ``---`` delimited block."""

    fields: tuple[MetadataField, ...] = ()
    range: Range

    def get(self, key: str) -> MetadataField | None:
        for field in self.fields:
            if field.key == key:
                return field
        return None


class CodeBlock(FrozenModel):
    """A fenced block tagged ``resume:<type>``."""

    type: str
    lang: str
    content: str
    range: Range
    content_range: Range


class Section(FrozenModel):
    """A recognised top-level heading and the span it owns."""

    id: str
    title: str
    title_range: Range
    range: Range
    code_blocks: tuple[CodeBlock, ...] = ()


class Document(FrozenModel):
    """Structured view of a resume markdown source."""

    metadata: Metadata | None = None
    sections: tuple[Section, ...] = ()
    code_blocks: tuple[CodeBlock, ...] = ()
    raw_content: str

    def sections_by_id(self, section_id: str) -> tuple[Section, ...]:
        return tuple(section for section in self.sections if section.id == section_id)


class ParseError(FrozenModel):
    """A fatal problem that prevented a document from being built."""

    source: Literal["frontmatter"] = "frontmatter"
    message: str
    range: Range


class ParseSuccess(FrozenModel):
    ok: Literal[True] = True
    value: Document


class ParseFailure(FrozenModel):
    ok: Literal[False] = False
    errors: tuple[ParseError, ...] = Field(min_length=1)


ParseResult = Union[ParseSuccess, ParseFailure]


def is_success(result: ParseResult) -> bool:
    return isinstance(result, ParseSuccess)


def is_failure(result: ParseResult) -> bool:
    return isinstance(result, ParseFailure)


__all__ = [
    "CodeBlock",
    "Document",
    "Metadata",
    "MetadataField",
    "ParseError",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "Position",
    "Range",
    "Section",
    "is_failure",
    "is_success",
]
