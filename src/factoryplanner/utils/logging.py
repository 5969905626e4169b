"""
Logging setup for the planner.

Log lines go to stderr as structlog key/value events so that command
output on stdout stays machine-readable.
"""

import logging
import sys
from typing import Any

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Third-party loggers that log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def _renderer(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """
    Route planner and library logs to stderr at the given level.

    Args:
        level: One of LOG_LEVELS; unknown names fall back to INFO.
        json_output: Emit one JSON object per event instead of console text.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)
    library_level = log_level if log_level == logging.DEBUG else max(log_level, logging.WARNING)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *_renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Module logger; pass __name__."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind key/value pairs to every event logged inside the block.

    The store tags each load attempt this way:

        with log_context(generation=2):
            log.info("Game data ready")  # event carries generation=2
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
