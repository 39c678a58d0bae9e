"""Logging configuration for the API process and the Celery worker."""

import logging
import sys
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn.access",
    "celery.beat",
    "sqlalchemy.engine",
)


def setup_logging(level: LogLevel = "INFO") -> None:
    """Configure root logging for the process.

    Calling this more than once is harmless; ``force=True`` replaces
    handlers installed by an earlier call (or by Celery's own setup).

    Args:
        level: The logging level to use.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def level_for(debug: bool) -> LogLevel:
    """Pick the log level matching the ``debug`` setting."""
    return "DEBUG" if debug else "INFO"


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: The name for the logger (typically __name__).

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)
