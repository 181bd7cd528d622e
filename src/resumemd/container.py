"\"\"\"Dependency injection container for the parser.\"\"\""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    ContentBuilder,
    ContentConfig,
    DocumentParser,
    ParserConfig,
    SectionSegmenter,
    default_registry,
    load_registry,
)
from .pipeline import ParsePipeline


class ParserContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    registry = providers.Singleton(default_registry)

    segmenter = providers.Singleton(SectionSegmenter, registry=registry)

    parser_config = providers.Singleton(ParserConfig)

    document_parser = providers.Singleton(
        DocumentParser,
        config=parser_config,
        segmenter=segmenter,
    )

    content_builder = providers.Singleton(ContentBuilder)

    pipeline = providers.Factory(
        ParsePipeline,
        parser=document_parser,
        content_builder=content_builder,
    )


def create_container(*, settings: dict | None = None) -> ParserContainer:
    """Instantiate container with optional overrides."""

    container = ParserContainer()

    if not settings:
        return container

    parser_settings = settings.get("parser", {}) if isinstance(settings, dict) else {}

    if parser_settings.get("registry_path"):
        container.registry.override(
            providers.Singleton(load_registry, parser_settings["registry_path"])
        )

    if parser_settings.get("code_block_prefix"):
        parser_config = ParserConfig(code_block_prefix=parser_settings["code_block_prefix"])
        container.parser_config.override(providers.Object(parser_config))

    content_settings = settings.get("content", {}) if isinstance(settings, dict) else {}

    if content_settings:
        content_config = ContentConfig(**content_settings)
        container.content_builder.override(
            providers.Singleton(ContentBuilder, config=content_config)
        )

    return container


__all__ = ["ParserContainer", "create_container"]
