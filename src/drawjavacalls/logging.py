"""
Logging Configuration for DrawJavaCalls.

This module provides the logging setup shared by the library and the CLI:
- Rich console output (or plain structured key=value lines)
- Optional daily log file
- Timing helpers for longer operations such as loading a diagram file

Usage:
    from drawjavacalls.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Diagram loaded", extra={"elements": 12, "relations": 11})

Configuration:
    LOG_LEVEL controls verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DRAWJAVACALLS_LOG_TO_FILE=1 also writes to ~/.drawjavacalls/logs/.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler

from .constants import DEFAULT_LOG_DIRECTORY


# ============================================================================
# Constants
# ============================================================================

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_TO_FILE_ENV = "DRAWJAVACALLS_LOG_TO_FILE"
PACKAGE_LOGGER_NAME = "drawjavacalls"

_STANDARD_RECORD_FIELDS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'message', 'asctime', 'taskName',
))


# ============================================================================
# Custom Formatter for Structured Logging
# ============================================================================

class StructuredFormatter(logging.Formatter):
    """
    A formatter that appends ``extra`` fields as key=value pairs.

    Example output:
        2026-10-19 10:30:45 | INFO     | drawjavacalls.services.diagram |
        Diagram loaded | elements=12 | relations=11
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with structured metadata."""
        base_message = super().format(record)

        extra_fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_FIELDS
        ]

        if extra_fields:
            return f"{base_message} | {' | '.join(extra_fields)}"
        return base_message


# ============================================================================
# Logger Factory
# ============================================================================

_loggers_initialized = False
_file_handler: Optional[logging.FileHandler] = None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def setup_logging(
    log_level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    log_dir: Optional[Path] = None,
    use_rich_console: bool = True,
) -> None:
    """
    Configure the ``drawjavacalls`` logger.

    Called once; later calls are ignored so handlers are never duplicated.

    Args:
        log_level: Logging level name. Defaults to LOG_LEVEL or WARNING.
        log_to_file: Also write a daily log file. Defaults to the
                     DRAWJAVACALLS_LOG_TO_FILE environment flag.
        log_dir: Directory for log files. Defaults to ~/.drawjavacalls/logs/
        use_rich_console: Use Rich for console output.
    """
    global _loggers_initialized, _file_handler

    if _loggers_initialized:
        return

    level_str = log_level or os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    level = getattr(logging, level_str.upper(), logging.WARNING)

    if log_to_file is None:
        log_to_file = _env_flag(LOG_TO_FILE_ENV)

    root_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if use_rich_console:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(StructuredFormatter(LOG_FORMAT, LOG_DATE_FORMAT))

    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_to_file:
        log_directory = log_dir or DEFAULT_LOG_DIRECTORY
        log_directory.mkdir(parents=True, exist_ok=True)

        log_file = log_directory / f"drawjavacalls-{datetime.now():%Y-%m-%d}.log"
        _file_handler = logging.FileHandler(log_file, encoding="utf-8")
        _file_handler.setFormatter(StructuredFormatter(LOG_FORMAT, LOG_DATE_FORMAT))
        _file_handler.setLevel(level)
        root_logger.addHandler(_file_handler)

    _loggers_initialized = True

    root_logger.debug(
        "DrawJavaCalls logging initialized",
        extra={"log_level": level_str, "log_to_file": log_to_file}
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module, setting up logging on first use.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A configured Logger instance.
    """
    if not _loggers_initialized:
        setup_logging()

    return logging.getLogger(name)


# ============================================================================
# Convenience Functions
# ============================================================================

def log_operation_start(
    logger: logging.Logger,
    operation: str,
    **context: Any
) -> datetime:
    """
    Log the start of an operation and return the start time.

    Use with log_operation_end for timing operations.
    """
    logger.debug(f"{operation} started", extra=context)
    return datetime.now()


def log_operation_end(
    logger: logging.Logger,
    operation: str,
    start_time: datetime,
    success: bool = True,
    **context: Any
) -> float:
    """
    Log the end of an operation with its duration.

    Returns:
        Duration in seconds.
    """
    duration = (datetime.now() - start_time).total_seconds()
    status = "completed" if success else "failed"

    log_method = logger.info if success else logger.error
    log_method(
        f"{operation} {status}",
        extra={"duration_seconds": round(duration, 3), **context}
    )

    return duration
