"""Recognised section registry.

The registry is an immutable value handed to the segmenter; the packaged
default lives in ``resumemd/config/sections.yaml``.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml
from pydantic import ValidationError
from rapidfuzz import fuzz, process

from ..config import ConfigManager, load_yaml_file
from ..schemas.sections import CvLanguage, OutputFormat, RegistryDocument, SectionDefinition

JAPANESE_TEXT_RE = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")


class RegistryConfigError(ValueError):
    """Raised when a registry definition file is malformed."""


def normalize_tag(tag: str) -> str:
    return tag.strip().lower()


def is_japanese_text(text: str) -> bool:
    """True when ``text`` contains hiragana, katakana or kanji."""
    return bool(JAPANESE_TEXT_RE.search(text))


class SectionRegistry:
    """Immutable mapping from heading titles to canonical section ids."""

    def __init__(self, definitions: Iterable[SectionDefinition]):
        self._definitions = tuple(definitions)
        by_tag: dict[str, SectionDefinition] = {}
        for definition in self._definitions:
            for tag in definition.tags:
                by_tag.setdefault(normalize_tag(tag), definition)
        self._by_tag: Mapping[str, SectionDefinition] = by_tag
        self._by_id = {definition.id: definition for definition in self._definitions}

    @classmethod
    def from_mapping(cls, raw: Any) -> "SectionRegistry":
        try:
            document = RegistryDocument.model_validate(raw)
        except ValidationError as exc:
            raise RegistryConfigError(f"Invalid section registry: {exc}") from exc
        return cls(document.sections)

    @property
    def definitions(self) -> tuple[SectionDefinition, ...]:
        return self._definitions

    def ids(self) -> list[str]:
        return [definition.id for definition in self._definitions]

    def get(self, section_id: str) -> SectionDefinition | None:
        return self._by_id.get(section_id)

    def find_by_tag(self, tag: str) -> SectionDefinition | None:
        """Resolve a heading title, ignoring case and surrounding whitespace."""
        return self._by_tag.get(normalize_tag(tag))

    def suggest(self, title: str, *, min_score: float = 75.0) -> str | None:
        """Closest registered tag for an unrecognised title, if any is close enough."""
        query = normalize_tag(title)
        if not query:
            return None
        match = process.extractOne(
            query,
            list(self._by_tag.keys()),
            scorer=fuzz.ratio,
            score_cutoff=min_score,
        )
        if match is None:
            return None
        matched_key = match[0]
        definition = self._by_tag[matched_key]
        for tag in definition.tags:
            if normalize_tag(tag) == matched_key:
                return tag
        return matched_key

    def valid_tags_for_format(self, output_format: OutputFormat) -> list[str]:
        tags: list[str] = []
        for definition in self._definitions:
            if definition.usage == "all":
                tags.extend(definition.tags)
            elif output_format == "both":
                if definition.usage != "cover_letter":
                    tags.extend(definition.tags)
            elif definition.usage in ("both", output_format):
                tags.extend(definition.tags)
        return tags

    def required_sections_for_format(self, output_format: OutputFormat) -> list[str]:
        required: list[str] = []
        for definition in self._definitions:
            targets = definition.required_for
            if output_format == "cover_letter":
                needed = "cover_letter" in targets
            elif output_format == "both":
                needed = "cv" in targets or "rirekisho" in targets
            else:
                needed = output_format in targets or "both" in targets
            if needed:
                required.append(definition.id)
        return required

    def is_section_valid_for_format(self, section_id: str, output_format: OutputFormat) -> bool:
        definition = self.get(section_id)
        if definition is None:
            return False
        if output_format == "both":
            return definition.usage != "cover_letter"
        if definition.usage == "all":
            return True
        return definition.usage in ("both", output_format)

    def tags_for_language(self, section_id: str, language: CvLanguage) -> list[str]:
        definition = self.get(section_id)
        if definition is None:
            return []
        want_japanese = language == "ja"
        return [tag for tag in definition.tags if is_japanese_text(tag) == want_japanese]


def load_registry(path: str | Path | None = None) -> SectionRegistry:
    """Load a registry from ``path``, or the packaged default when omitted."""
    try:
        raw = ConfigManager().load("sections") if path is None else load_yaml_file(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise RegistryConfigError(f"Unable to load section registry: {exc}") from exc
    return SectionRegistry.from_mapping(raw)


@lru_cache(maxsize=1)
def default_registry() -> SectionRegistry:
    return load_registry()


__all__ = [
    "RegistryConfigError",
    "SectionRegistry",
    "default_registry",
    "is_japanese_text",
    "load_registry",
    "normalize_tag",
]
