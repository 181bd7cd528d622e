"\"\"\"Pydantic configuration schema for CLI YAML input.\"\"\""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ParserSettings(BaseModel):
    registry_path: str | None = None
    code_block_prefix: str | None = Field(default=None, min_length=1)


class ContentSettings(BaseModel):
    skills_columns: int | None = Field(default=None, ge=1)


class AppConfig(BaseModel):
    parser: ParserSettings = Field(default_factory=ParserSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        parser_settings = self.parser.model_dump(exclude_none=True)
        if parser_settings:
            settings["parser"] = parser_settings
        content_settings = self.content.model_dump(exclude_none=True)
        if content_settings:
            settings["content"] = content_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
