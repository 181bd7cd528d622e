"\"\"\"Logging utilities for the resume parser.\"\"\""

from __future__ import annotations

import logging
import sys

import structlog


def _stderr_logger(*_args) -> structlog.PrintLogger:
    # Resolve the stream per call so redirected stderr (CLI runners) is honoured.
    return structlog.PrintLogger(sys.stderr)


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output on stderr."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s", stream=sys.stderr)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
