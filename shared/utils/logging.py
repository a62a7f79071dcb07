"""
Logging configuration module.
Provides standardized logging setup using loguru.
"""

import logging
import sys
from typing import Iterable, Optional

from loguru import logger

DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: str = "INFO",
    format: str = DEFAULT_FORMAT,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure loguru logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log message format
        log_file: Optional file path to write logs (rotated at 10 MB, kept 7 days)
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=format,
        level=level,
        colorize=True,
    )

    if log_file:
        logger.add(
            log_file,
            format=format,
            level=level,
            rotation="10 MB",
            retention="7 days",
        )


class InterceptHandler(logging.Handler):
    """Forward standard-library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the logging call
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_std_logging(names: Iterable[str] = ("uvicorn", "uvicorn.error", "uvicorn.access")) -> None:
    """
    Route stdlib loggers (uvicorn, fastapi) through loguru.

    Args:
        names: Logger names whose handlers are replaced
    """
    handler = InterceptHandler()
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False
