from __future__ import annotations

import logging
from typing import Optional

import structlog

# Game modules log through stdlib loggers; the facade emits structlog events.
_SHARED_PROCESSORS = [
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Set one level for the trivia loggers and pick the event renderer.

    Question-load fallbacks and leaderboard problems arrive as stdlib records from
    `trivia.game` and `trivia.storage`; game completion and failed score saves are
    structlog events from `TriviaSystem`. `json_output` switches those events from the
    console renderer to one JSON object per line.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level)
    renderer = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        processors=[*_SHARED_PROCESSORS, renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: Optional[str] = None):
    """Structlog logger for game events, honoring `configure_logging`."""
    return structlog.get_logger(name)
