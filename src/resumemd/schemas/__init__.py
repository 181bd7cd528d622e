"\"\"\"Pydantic schema definitions for the parsed document model.\"\"\""

from __future__ import annotations

from .content import (
    CertificationEntry,
    CertificationsBlock,
    CompetenciesBlock,
    CompetencyEntry,
    CompositeContent,
    ContentBlock,
    EducationBlock,
    EducationEntry,
    ExperienceBlock,
    ExperienceEntry,
    LanguageEntry,
    LanguagesBlock,
    MarkdownBlock,
    ProjectEntry,
    RoleEntry,
    SkillEntry,
    SkillsBlock,
    SkillsOptions,
    SourceLineInfo,
    StructuredBlock,
    TableBlock,
    TableRow,
)
from .document import (
    CodeBlock,
    Document,
    Metadata,
    MetadataField,
    ParseError,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    Position,
    Range,
    Section,
    is_failure,
    is_success,
)
from .sections import OutputFormat, RegistryDocument, SectionDefinition

__all__ = [
    "CertificationEntry",
    "CertificationsBlock",
    "CodeBlock",
    "CompetenciesBlock",
    "CompetencyEntry",
    "CompositeContent",
    "ContentBlock",
    "Document",
    "EducationBlock",
    "EducationEntry",
    "ExperienceBlock",
    "ExperienceEntry",
    "LanguageEntry",
    "LanguagesBlock",
    "MarkdownBlock",
    "Metadata",
    "MetadataField",
    "OutputFormat",
    "ParseError",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "Position",
    "ProjectEntry",
    "Range",
    "RegistryDocument",
    "RoleEntry",
    "Section",
    "SectionDefinition",
    "SkillEntry",
    "SkillsBlock",
    "SkillsOptions",
    "SourceLineInfo",
    "StructuredBlock",
    "TableBlock",
    "TableRow",
    "is_failure",
    "is_success",
]
