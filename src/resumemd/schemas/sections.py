from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator

from .base import FrozenModel

OutputFormat = Literal["cv", "rirekisho", "both", "cover_letter"]
SectionUsage = Literal["cv", "rirekisho", "both", "cover_letter", "all"]
CvLanguage = Literal["en", "ja"]


class SectionDefinition(FrozenModel):
    """Canonical section id and the heading titles that resolve to it."""

    id: str = Field(min_length=1)
    tags: tuple[str, ...] = Field(min_length=1)
    usage: SectionUsage = "both"
    required_for: tuple[OutputFormat, ...] = ()

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, tags: tuple[str, ...]) -> tuple[str, ...]:
        stripped = tuple(tag.strip() for tag in tags)
        if any(not tag for tag in stripped):
            raise ValueError("section tags must not be blank")
        return stripped


class RegistryDocument(FrozenModel):
    """Top-level shape of a section registry YAML file."""

    sections: tuple[SectionDefinition, ...] = Field(min_length=1)

    @field_validator("sections")
    @classmethod
    def _unique_ids(cls, sections: tuple[SectionDefinition, ...]) -> tuple[SectionDefinition, ...]:
        seen: set[str] = set()
        for definition in sections:
            if definition.id in seen:
                raise ValueError(f"duplicate section id: {definition.id!r}")
            seen.add(definition.id)
        return sections


__all__ = [
    "CvLanguage",
    "OutputFormat",
    "RegistryDocument",
    "SectionDefinition",
    "SectionUsage",
]
