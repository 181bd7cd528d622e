"\"\"\"Typer CLI entrypoint for inspecting parse results.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import ParserContainer, create_container
from .core.content import describe_blocks
from .logging import configure_logging
from .pipeline import DocumentLoadError
from .schemas import ParseFailure
from .schemas.config import load_config

app = typer.Typer(help="Resume markdown parser CLI.")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        try:
            loaded = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise typer.BadParameter(f"Invalid YAML: {exc}", param_hint="config") from exc
    try:
        return load_config(loaded).to_settings()
    except (ValueError, ValidationError) as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_container(config: Optional[Path], log_level: str) -> ParserContainer:
    settings = _load_settings(config)
    configure_logging(log_level)
    return create_container(settings=settings)


def _report_failure(failure: ParseFailure) -> None:
    for error in failure.errors:
        start = error.range.start
        typer.echo(
            f"{error.source}:{start.line + 1}:{start.character + 1}: {error.message}",
            err=True,
        )


@app.command()
def parse(
    source: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Resume markdown path."),
    output: Optional[Path] = typer.Option(
        None,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path. Printed to stdout when omitted.",
    ),
    content: bool = typer.Option(False, "--content", help="Include composite section content."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Parse a document and emit the result as JSON."""
    container = _build_container(config, log_level)
    pipeline = container.pipeline()

    try:
        payload = pipeline.run(input_path=source, output_path=output, include_content=content)
    except DocumentLoadError as exc:
        raise typer.BadParameter(str(exc), param_hint="source") from exc

    if output is None:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        typer.echo(f"Parse result saved to {output}.")

    if not payload["metadata"]["ok"]:
        raise typer.Exit(code=1)


@app.command()
def outline(
    source: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Resume markdown path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print one line per recognised section."""
    container = _build_container(config, log_level)
    pipeline = container.pipeline()
    content_builder = container.content_builder()

    try:
        result = pipeline.parse(source)
    except DocumentLoadError as exc:
        raise typer.BadParameter(str(exc), param_hint="source") from exc

    if isinstance(result, ParseFailure):
        _report_failure(result)
        raise typer.Exit(code=1)

    document = result.value
    for section in document.sections:
        blocks = content_builder.build(document, section).blocks
        span = f"{section.range.start.line + 1}-{section.range.end.line + 1}"
        typer.echo(f"{section.id}\t{section.title}\t{span}\t{describe_blocks(blocks)}")


def main() -> None:
    app()


__all__ = ["app", "main"]
