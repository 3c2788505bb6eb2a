"""Logging configuration for Confirmator.

Console records go to stdout, the same stream the wait progress bar is
redrawn on, so the console handler erases a partially drawn bar line
before writing a record.
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import TextIO

DEFAULT_LOG_DIR = Path("logs")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "confirmator"
ERASE_LINE = "\r\x1b[K"


class ConsoleHandler(logging.StreamHandler):
    """Stream handler that starts every record on a clean line.

    On a terminal the line is erased first, so a record emitted while a
    progress bar is drawn does not get glued onto the bar.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__(stream or sys.stdout)
        isatty = getattr(self.stream, "isatty", None)
        self._erase = bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        return f"{ERASE_LINE}{text}" if self._erase else text


def daily_log_file(log_dir: Path, day: date | None = None) -> Path:
    """Path of the log file for a given day (default: today)."""
    day = day or date.today()
    return log_dir / f"confirmator_{day:%Y%m%d}.log"


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_dir: Path | str = DEFAULT_LOG_DIR,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the package logger once per process.

    Args:
        level: Logging level (default: INFO)
        log_to_file: Also append to a daily file in ``log_dir``
        log_dir: Directory for daily log files, created on demand
        stream: Console stream (default: stdout)

    Returns:
        The package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = ConsoleHandler(stream)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(daily_log_file(directory), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to {file_handler.baseFilename}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger, e.g. one per account.

    Args:
        name: Logger name (will be prefixed with 'confirmator.')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
