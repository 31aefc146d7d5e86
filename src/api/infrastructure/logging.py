"""Structlog configuration.

Colored console output when attached to a terminal (or FORCE_COLOR is set),
JSON lines otherwise. Probes obtain loggers through ``structlog.get_logger()``
and never configure anything themselves.
"""

import logging
import os
import sys

import structlog


def _wants_color() -> bool:
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(level: str = "INFO", json_output: bool | None = None) -> None:
    """Configure structlog processors and the minimum level.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        json_output: Force JSON (True) or console (False) rendering;
            None picks based on the terminal
    """
    use_json = (not _wants_color()) if json_output is None else json_output

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=_wants_color()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
