"""structlog configuration.

The terminal is the render surface, so log events go to a file (or nowhere)
instead of stdout/stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

import structlog
from platformdirs import user_log_dir

APP_NAME = "ftree"
LOG_FILENAME = "ftree.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "OFF")


def setup_logging(log_level: str = "WARNING", log_file: Path | None = None) -> Path | None:
    """Configure structlog for one process and return the log path in use.

    ``OFF`` (or a log file that cannot be opened) discards every event.
    """
    level_name = log_level.upper()
    numeric_level = getattr(logging, level_name, None)
    processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    target = log_file or DEFAULT_LOG_PATH
    stream = None
    if level_name != "OFF":
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            stream = target.open("a", encoding="utf-8")
        except OSError:
            stream = None

    if stream is None:
        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
            logger_factory=structlog.ReturnLoggerFactory(),
            cache_logger_on_first_use=False,
        )
        return None

    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
    return target
