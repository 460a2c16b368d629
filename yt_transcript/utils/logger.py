"""Service logging configuration with console and optional file handlers."""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from yt_transcript.settings import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DEBUG_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Configure and return a cached logger.

    Logs go to stdout. A midnight-rotated file handler is added when
    ``log_dir`` is given or LOG_TO_FILE is enabled.

    Args:
        name: Logger name (e.g., 'yt.chain').
        level: Logging level (default from LOG_LEVEL).
        log_dir: Directory for log files.

    Returns:
        Configured logger instance.
    """
    if name in _LOGGERS_CACHE:
        return _LOGGERS_CACHE[name]

    if level is None:
        level = logging.getLevelName(settings.logging.level)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = _build_formatter()
    logger.addHandler(_create_console_handler(formatter, level))

    if log_dir is None and settings.logging.to_file:
        log_dir = settings.logging.log_path

    if log_dir is not None:
        file_handler = _create_file_handler(name, formatter, level, log_dir)
        if file_handler:
            logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def _build_formatter() -> logging.Formatter:
    """Line numbers are included when DEBUG is on."""
    fmt = _DEBUG_LOG_FORMAT if settings.debug else _LOG_FORMAT
    return logging.Formatter(fmt, _LOG_DATE_FORMAT)


def _create_console_handler(
    formatter: logging.Formatter,
    level: int,
) -> logging.StreamHandler:
    """Create console stream handler.

    Args:
        formatter: Log formatter.
        level: Logging level.

    Returns:
        Configured StreamHandler.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_file_handler(
    name: str,
    formatter: logging.Formatter,
    level: int,
    log_dir: Path,
) -> TimedRotatingFileHandler | None:
    """Create a file handler rotated at midnight.

    Args:
        name: Logger name for filename.
        formatter: Log formatter.
        level: Logging level.
        log_dir: Directory for log files.

    Returns:
        Configured handler or None when the file cannot be opened.
    """
    try:
        handler = TimedRotatingFileHandler(
            _get_log_file_path(name, log_dir),
            when="midnight",
            backupCount=settings.logging.backup_days,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None

    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _get_log_file_path(name: str, log_dir: Path) -> Path:
    """Build the log file path of a logger, creating the directory.

    Args:
        name: Logger name.
        log_dir: Base directory for logs.

    Returns:
        Full path to the active log file (rotated copies get a date suffix).
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    safe_name = name.replace(".", "_").replace("/", "_")
    return log_dir / f"{safe_name}.log"
