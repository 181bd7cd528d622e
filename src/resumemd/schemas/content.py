"""Typed section content consumed by renderers.

A section renders as :class:`CompositeContent`, an ordered sequence of
:data:`ContentBlock` values. Free-form markdown and structured entries parsed
from ``resume:<type>`` blocks interleave in source order.
"""

from __future__ import annotations

import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from .base import FrozenModel


class SourceLineInfo(FrozenModel):
    """Zero-based inclusive source lines an entry was parsed from."""

    start_line: int = Field(ge=0)
    end_line: int = Field(ge=0)


class EducationEntry(FrozenModel):
    school: str = ""
    degree: str | None = None
    start: datetime.date | None = None
    end: datetime.date | None = None
    location: str | None = None
    details: tuple[str, ...] = ()
    source_lines: SourceLineInfo | None = None


class ProjectEntry(FrozenModel):
    name: str = ""
    start: datetime.date | None = None
    end: datetime.date | Literal["present"] | None = None
    bullets: tuple[str, ...] = ()


class RoleEntry(FrozenModel):
    title: str = ""
    start: datetime.date | None = None
    end: datetime.date | Literal["present"] | None = None
    team: str | None = None
    summary: tuple[str, ...] = ()
    highlights: tuple[str, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
    source_lines: SourceLineInfo | None = None


class ExperienceEntry(FrozenModel):
    company: str = ""
    roles: tuple[RoleEntry, ...] = ()
    location: str | None = None
    source_lines: SourceLineInfo | None = None


class CertificationEntry(FrozenModel):
    name: str = ""
    date: datetime.date | None = None
    issuer: str | None = None
    url: str | None = None
    source_lines: SourceLineInfo | None = None


class SkillEntry(FrozenModel):
    """Skill group; a flat list uses an empty ``category``."""

    category: str = ""
    items: tuple[str, ...] = ()
    description: str | None = None
    level: str | None = None


class SkillsOptions(FrozenModel):
    columns: int = Field(default=3, ge=1)
    format: Literal["grid", "categorized"] = "grid"


class CompetencyEntry(FrozenModel):
    header: str = ""
    description: str = ""


class LanguageEntry(FrozenModel):
    language: str = ""
    level: str = ""


class TableRow(FrozenModel):
    year: str = ""
    month: str = ""
    content: str = ""


class MarkdownBlock(FrozenModel):
    type: Literal["markdown"] = "markdown"
    content: str


class EducationBlock(FrozenModel):
    type: Literal["education"] = "education"
    entries: tuple[EducationEntry, ...] = ()


class ExperienceBlock(FrozenModel):
    type: Literal["experience"] = "experience"
    entries: tuple[ExperienceEntry, ...] = ()


class CertificationsBlock(FrozenModel):
    type: Literal["certifications"] = "certifications"
    entries: tuple[CertificationEntry, ...] = ()


class SkillsBlock(FrozenModel):
    type: Literal["skills"] = "skills"
    entries: tuple[SkillEntry, ...] = ()
    options: SkillsOptions = Field(default_factory=SkillsOptions)


class CompetenciesBlock(FrozenModel):
    type: Literal["competencies"] = "competencies"
    entries: tuple[CompetencyEntry, ...] = ()


class LanguagesBlock(FrozenModel):
    type: Literal["languages"] = "languages"
    entries: tuple[LanguageEntry, ...] = ()


class TableBlock(FrozenModel):
    type: Literal["table"] = "table"
    rows: tuple[TableRow, ...] = ()


ContentBlock = Annotated[
    Union[
        MarkdownBlock,
        EducationBlock,
        ExperienceBlock,
        CertificationsBlock,
        SkillsBlock,
        CompetenciesBlock,
        LanguagesBlock,
        TableBlock,
    ],
    Field(discriminator="type"),
]

StructuredBlock = Union[
    EducationBlock,
    ExperienceBlock,
    CertificationsBlock,
    SkillsBlock,
    CompetenciesBlock,
    LanguagesBlock,
    TableBlock,
]


class CompositeContent(FrozenModel):
    type: Literal["composite"] = "composite"
    blocks: tuple[ContentBlock, ...] = ()


__all__ = [
    "CertificationEntry",
    "CertificationsBlock",
    "CompetenciesBlock",
    "CompetencyEntry",
    "CompositeContent",
    "ContentBlock",
    "EducationBlock",
    "EducationEntry",
    "ExperienceBlock",
    "ExperienceEntry",
    "LanguageEntry",
    "LanguagesBlock",
    "MarkdownBlock",
    "ProjectEntry",
    "RoleEntry",
    "SkillEntry",
    "SkillsBlock",
    "SkillsOptions",
    "SourceLineInfo",
    "StructuredBlock",
    "TableBlock",
    "TableRow",
]
