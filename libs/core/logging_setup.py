"""Structured logging configuration for the dispatch service.

Routes stdlib ``logging.getLogger(__name__)`` records through structlog
renderers, either human-readable or JSON.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_ROOTS = ("libs", "services")


def setup_logging(level: str = "INFO", log_json: bool = False) -> None:
    """Configure logging for the engine and API packages.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        log_json: If True, render log lines as JSON instead of human-readable.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)

    for name in LOGGER_ROOTS:
        root = logging.getLogger(name)
        root.handlers.clear()
        root.setLevel(numeric_level)
        root.addHandler(handler)
        root.propagate = False
