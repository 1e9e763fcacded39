"""structlog configuration.

Library code only ever calls structlog.get_logger(); the host process
calls configure_logging() once at startup.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor


def build_processors(json: bool = True) -> list[Processor]:
    """Processor chain: context vars, level, ISO timestamp, exceptions, renderer."""
    renderer: Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    """Configure structlog process-wide.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
        json: Render JSON lines when True, human-readable console output otherwise.

    Raises:
        ValueError: If level is not a known logging level name.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=build_processors(json=json),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
