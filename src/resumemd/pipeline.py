"\"\"\"File-level parse pipeline.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
import structlog

from .core import ContentBuilder, DocumentParser
from .schemas import ParseResult, ParseSuccess
from . import __version__


class DocumentLoadError(ValueError):
    """Raised when a source document cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Unable to read {path}: {reason}")
        self.path = path
        self.reason = reason


class DocumentLoader:
    """Read resume markdown sources."""

    def load(self, path: Path) -> str:
        try:
            # Keep line endings as written so offsets match the file.
            with path.open("r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except UnicodeDecodeError as exc:
            raise DocumentLoadError(path, f"not valid UTF-8 ({exc.reason})") from exc
        except OSError as exc:
            raise DocumentLoadError(path, exc.strerror or str(exc)) from exc


class OutputWriter:
    """Persist parse outcomes."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class ParsePipeline:
    """Load, parse and optionally persist a single document."""

    def __init__(
        self,
        *,
        parser: DocumentParser,
        content_builder: ContentBuilder,
        loader: DocumentLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._parser = parser
        self._content = content_builder
        self._loader = loader or DocumentLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def parse(self, path: Path) -> ParseResult:
        return self._parser.parse(self._loader.load(path))

    def run(
        self,
        *,
        input_path: Path,
        output_path: Path | None = None,
        include_content: bool = False,
    ) -> dict[str, Any]:
        result = self.parse(input_path)
        payload: dict[str, Any] = {
            "metadata": {
                "source": str(input_path),
                "ok": result.ok,
                "timestamp": pendulum.now().to_iso8601_string(),
                "app_version": __version__,
            },
            "result": result.model_dump(mode="json"),
        }

        if include_content and isinstance(result, ParseSuccess):
            document = result.value
            payload["content"] = [
                {
                    "section": section.id,
                    "title": section.title,
                    "content": self._content.build(document, section).model_dump(mode="json"),
                }
                for section in document.sections
            ]

        if result.ok:
            self._logger.info(
                "parse.result",
                source=str(input_path),
                sections=len(result.value.sections),
                code_blocks=len(result.value.code_blocks),
            )
        else:
            self._logger.warning(
                "parse.failed",
                source=str(input_path),
                errors=[error.message for error in result.errors],
            )

        if output_path is not None:
            self._writer.write(output_path, payload)
        return payload


__all__ = ["DocumentLoadError", "DocumentLoader", "OutputWriter", "ParsePipeline"]
