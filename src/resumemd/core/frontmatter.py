"""Leading ``---`` metadata block extraction."""

from __future__ import annotations

import base64
import datetime
import json
from dataclasses import dataclass
from typing import Any

import structlog
import yaml

from ..schemas import Metadata, MetadataField, ParseError, Position, Range
from .positions import load_yaml_with_nodes, split_lines, yaml_node_range

DELIMITER = "---"
# The YAML body always starts on the line after the opening delimiter.
BODY_BASE_LINE = 1

_logger = structlog.get_logger(__name__)


class FrontmatterError(ValueError):
    """Raised when the metadata block body is not valid YAML."""

    def __init__(self, message: str, range: Range):
        super().__init__(message)
        self.message = message
        self.range = range

    def to_parse_error(self) -> ParseError:
        return ParseError(source="frontmatter", message=self.message, range=self.range)


@dataclass(frozen=True, slots=True)
class FrontmatterBlock:
    """Location of a closed metadata block within the source."""

    body: str
    closing_line: int
    range: Range


def locate_frontmatter(text: str) -> FrontmatterBlock | None:
    lines = split_lines(text)
    if len(lines) < 2 or lines[0] != DELIMITER:
        return None
    for index in range(1, len(lines)):
        if lines[index] == DELIMITER:
            return FrontmatterBlock(
                body="\n".join(lines[1:index]),
                closing_line=index,
                range=Range(
                    start=Position(line=0, character=0),
                    end=Position(line=index, character=len(DELIMITER)),
                ),
            )
    return None


def mask_frontmatter(text: str, block: FrontmatterBlock) -> str:
    """Blank out the metadata lines, keeping the line count intact."""
    lines = split_lines(text)
    for index in range(block.closing_line + 1):
        lines[index] = ""
    return "\n".join(lines)


def parse_frontmatter(block: FrontmatterBlock) -> Metadata:
    """Build :class:`Metadata` from a located block.

    Raises :class:`FrontmatterError` when the body cannot be parsed.
    """
    try:
        data, root = load_yaml_with_nodes(block.body)
    except (yaml.YAMLError, ValueError) as exc:
        error_range = _error_range(exc, block)
        _logger.info(
            "frontmatter.invalid",
            line=error_range.start.line,
            character=error_range.start.character,
        )
        raise FrontmatterError(_error_message(exc), error_range) from exc

    if not isinstance(data, dict):
        return Metadata(fields=(), range=block.range)

    value_nodes = _value_nodes(root)
    fields = []
    for ordinal, (key, value) in enumerate(data.items()):
        rendered_key = render_value(key)
        field_range = yaml_node_range(
            block.body,
            value_nodes.get(rendered_key),
            BODY_BASE_LINE,
            fallback_line=BODY_BASE_LINE + ordinal,
        )
        fields.append(MetadataField(key=rendered_key, value=render_value(value), range=field_range))
    return Metadata(fields=tuple(fields), range=block.range)


def extract_metadata(text: str) -> Metadata | None:
    block = locate_frontmatter(text)
    if block is None:
        return None
    return parse_frontmatter(block)


def render_value(value: Any) -> str:
    """Render a loaded YAML value as display text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    try:
        return json.dumps(value, ensure_ascii=False, default=_json_default)
    except (TypeError, ValueError):
        # Mappings with non-string keys such as dates.
        return str(value)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _value_nodes(root: yaml.Node | None) -> dict[str, yaml.Node]:
    if not isinstance(root, yaml.MappingNode):
        return {}
    nodes: dict[str, yaml.Node] = {}
    for key_node, value_node in root.value:
        if isinstance(key_node, yaml.ScalarNode):
            nodes[key_node.value] = value_node
    return nodes


def _error_message(exc: Exception) -> str:
    problem = getattr(exc, "problem", None)
    context = getattr(exc, "context", None)
    if problem and context:
        return f"Invalid YAML frontmatter: {problem} ({context})"
    if problem:
        return f"Invalid YAML frontmatter: {problem}"
    return f"Invalid YAML frontmatter: {exc}"


def _error_range(exc: Exception, block: FrontmatterBlock) -> Range:
    mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
    if mark is None:
        return block.range
    point = Position(line=BODY_BASE_LINE + mark.line, character=mark.column)
    return Range(start=point, end=point)


__all__ = [
    "DELIMITER",
    "FrontmatterBlock",
    "FrontmatterError",
    "extract_metadata",
    "locate_frontmatter",
    "mask_frontmatter",
    "parse_frontmatter",
    "render_value",
]
