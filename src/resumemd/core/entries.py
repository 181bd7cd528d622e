"\"\"\"Structured entry parsing for ``resume:<type>`` block bodies.\"\"\""

from __future__ import annotations

import datetime
from typing import Any, Callable, Iterable

import pendulum
import structlog
import yaml
from pendulum.parsing.exceptions import ParserError
from pydantic import ValidationError

from ..schemas import (
    CertificationEntry,
    CertificationsBlock,
    CodeBlock,
    CompetenciesBlock,
    CompetencyEntry,
    EducationBlock,
    EducationEntry,
    ExperienceBlock,
    ExperienceEntry,
    LanguageEntry,
    LanguagesBlock,
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
from .positions import load_yaml_with_nodes, yaml_node_range

PRESENT_MARKERS = frozenset({"present", "current", "now", "現在"})

_logger = structlog.get_logger(__name__)

# (value, composed node) pairs; the node is None when marks are unavailable.
Item = tuple[Any, "yaml.Node | None"]


def parse_block(block: CodeBlock, *, skills_columns: int = 3) -> StructuredBlock | None:
    """Parse a tagged block body into a typed block.

    Invalid YAML, schema violations and unknown block types are logged and
    yield ``None``.
    """
    builder = _BUILDERS.get(block.type)
    if builder is None:
        _logger.warning("content.block_skipped", block_type=block.type, reason="unknown type")
        return None

    try:
        data, root = load_yaml_with_nodes(block.content)
    except (yaml.YAMLError, ValueError) as exc:
        _logger.warning("content.block_skipped", block_type=block.type, reason=str(exc))
        return None

    context = _BlockContext(block, skills_columns=skills_columns)
    try:
        return builder(_items(data, root), context)
    except (ValidationError, TypeError, ValueError) as exc:
        _logger.warning("content.block_skipped", block_type=block.type, reason=str(exc))
        return None


def parse_date(value: Any) -> datetime.date | None:
    """Coerce ``YYYY``, ``YYYY-MM``, ISO strings and YAML dates to a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    try:
        if len(text) == 7 and text[4] == "-":
            return datetime.date(int(text[:4]), int(text[5:7]), 1)
        if len(text) == 4 and text.isdigit():
            return datetime.date(int(text), 1, 1)
        parsed = pendulum.parse(text, strict=False)
    except (ValueError, ParserError):
        return None
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    return None


def parse_end_date(value: Any) -> datetime.date | str | None:
    """Like :func:`parse_date`, with "present" style markers preserved."""
    if isinstance(value, str) and value.strip().lower() in PRESENT_MARKERS:
        return "present"
    return parse_date(value)


class _BlockContext:
    def __init__(self, block: CodeBlock, *, skills_columns: int) -> None:
        self.block = block
        self.skills_columns = skills_columns

    def source_lines(self, node: yaml.Node | None) -> SourceLineInfo | None:
        if node is None:
            return None
        node_range = yaml_node_range(
            self.block.content,
            node,
            base_line=self.block.content_range.start.line,
        )
        end_line = node_range.end.line
        # Block collections end at column 0 of the following line.
        if node_range.end.character == 0 and end_line > node_range.start.line:
            end_line -= 1
        return SourceLineInfo(start_line=node_range.start.line, end_line=end_line)


def _items(data: Any, root: yaml.Node | None) -> list[Item]:
    if data is None:
        return []
    if isinstance(data, list):
        nodes: list[yaml.Node | None] = []
        if isinstance(root, yaml.SequenceNode):
            nodes = list(root.value)
        nodes.extend([None] * (len(data) - len(nodes)))
        return list(zip(data, nodes))
    return [(data, root)]


def _child_node(node: yaml.Node | None, key: str) -> yaml.Node | None:
    if not isinstance(node, yaml.MappingNode):
        return None
    for key_node, value_node in node.value:
        if isinstance(key_node, yaml.ScalarNode) and key_node.value == key:
            return value_node
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _text_list(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item).strip() for item in value if item is not None and str(item).strip())
    text = str(value).strip()
    return (text,) if text else ()


def _first(entry: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def _mappings(items: Iterable[Item]) -> Iterable[tuple[dict[str, Any], yaml.Node | None]]:
    for value, node in items:
        if isinstance(value, dict):
            yield value, node


def _build_education(items: list[Item], context: _BlockContext) -> EducationBlock:
    entries = [
        EducationEntry(
            school=_text(_first(entry, "school", "institution")) or "",
            degree=_text(entry.get("degree")),
            start=parse_date(entry.get("start")),
            end=parse_date(entry.get("end")),
            location=_text(entry.get("location")),
            details=_text_list(entry.get("details")),
            source_lines=context.source_lines(node),
        )
        for entry, node in _mappings(items)
    ]
    return EducationBlock(entries=tuple(entries))


def _build_project(entry: dict[str, Any]) -> ProjectEntry:
    return ProjectEntry(
        name=_text(entry.get("name")) or "",
        start=parse_date(entry.get("start")),
        end=parse_end_date(entry.get("end")),
        bullets=_text_list(_first(entry, "bullets", "highlights")),
    )


def _build_role(entry: dict[str, Any], node: yaml.Node | None, context: _BlockContext) -> RoleEntry:
    projects = entry.get("projects") or []
    if isinstance(projects, dict):
        projects = [projects]
    return RoleEntry(
        title=_text(_first(entry, "title", "role", "position")) or "",
        start=parse_date(entry.get("start")),
        end=parse_end_date(entry.get("end")),
        team=_text(entry.get("team")),
        summary=_text_list(entry.get("summary")),
        highlights=_text_list(entry.get("highlights")),
        projects=tuple(_build_project(project) for project in projects if isinstance(project, dict)),
        source_lines=context.source_lines(node),
    )


def _build_experience(items: list[Item], context: _BlockContext) -> ExperienceBlock:
    entries = []
    for entry, node in _mappings(items):
        raw_roles = entry.get("roles")
        if isinstance(raw_roles, list):
            roles_node = _child_node(node, "roles")
            roles = tuple(
                _build_role(role, role_node, context)
                for role, role_node in _mappings(_items(raw_roles, roles_node))
            )
        else:
            roles = (_build_role(entry, node, context),)
        entries.append(
            ExperienceEntry(
                company=_text(entry.get("company")) or "",
                roles=roles,
                location=_text(entry.get("location")),
                source_lines=context.source_lines(node),
            )
        )
    return ExperienceBlock(entries=tuple(entries))


def _build_certifications(items: list[Item], context: _BlockContext) -> CertificationsBlock:
    entries = [
        CertificationEntry(
            name=_text(entry.get("name")) or "",
            date=parse_date(entry.get("date")),
            issuer=_text(entry.get("issuer")),
            url=_text(entry.get("url")),
            source_lines=context.source_lines(node),
        )
        for entry, node in _mappings(items)
    ]
    return CertificationsBlock(entries=tuple(entries))


def _build_skills(items: list[Item], context: _BlockContext) -> SkillsBlock:
    loose: list[str] = []
    grouped: list[SkillEntry] = []
    for value, _node in items:
        if isinstance(value, dict):
            grouped.append(
                SkillEntry(
                    category=_text(value.get("category")) or "",
                    items=_text_list(value.get("items")),
                    description=_text(value.get("description")),
                    level=_text(value.get("level")),
                )
            )
        elif _text(value) is not None:
            loose.append(_text(value))
    entries = ([SkillEntry(items=tuple(loose))] if loose else []) + grouped
    categorized = any(entry.category for entry in entries)
    return SkillsBlock(
        entries=tuple(entries),
        options=SkillsOptions(
            columns=context.skills_columns,
            format="categorized" if categorized else "grid",
        ),
    )


def _build_competencies(items: list[Item], context: _BlockContext) -> CompetenciesBlock:
    entries = [
        CompetencyEntry(
            header=_text(entry.get("header")) or "",
            description=_text(entry.get("description")) or "",
        )
        for entry, _node in _mappings(items)
    ]
    return CompetenciesBlock(entries=tuple(entries))


def _build_languages(items: list[Item], context: _BlockContext) -> LanguagesBlock:
    entries = [
        LanguageEntry(
            language=_text(entry.get("language")) or "",
            level=_text(entry.get("level")) or "",
        )
        for entry, _node in _mappings(items)
    ]
    return LanguagesBlock(entries=tuple(entries))


def _build_table(items: list[Item], context: _BlockContext) -> TableBlock:
    rows = [
        TableRow(
            year=_text(entry.get("year")) or "",
            month=_text(entry.get("month")) or "",
            content=_text(entry.get("content")) or "",
        )
        for entry, _node in _mappings(items)
    ]
    return TableBlock(rows=tuple(rows))


_BUILDERS: dict[str, Callable[[list[Item], _BlockContext], StructuredBlock]] = {
    "education": _build_education,
    "experience": _build_experience,
    "certifications": _build_certifications,
    "skills": _build_skills,
    "competencies": _build_competencies,
    "languages": _build_languages,
    "table": _build_table,
}

STRUCTURED_TYPES = frozenset(_BUILDERS)


__all__ = [
    "PRESENT_MARKERS",
    "STRUCTURED_TYPES",
    "parse_block",
    "parse_date",
    "parse_end_date",
]
