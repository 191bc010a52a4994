"""Logging setup for the gene-finder command."""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = '%(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name on a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt)
        # Console records go to stderr
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if self.use_colors and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def log_file_path(log_dir: str) -> Path:
    """Daily log file inside ``log_dir``."""
    return Path(log_dir) / f"gene_finder_{datetime.now().strftime('%Y%m%d')}.log"


def setup_logging(log_level: str = "INFO",
                  log_dir: Optional[str] = None,
                  colors: bool = True,
                  quiet: bool = False) -> None:
    """
    Configure the root logger for a gene-finder run.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for a rotating daily log file; console only when None
        colors: Color level names on the console
        quiet: Only show errors on the console; the log file keeps ``log_level``
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    log_path = None
    if log_dir is not None:
        log_path = log_file_path(log_dir)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        root_logger.addHandler(file_handler)

    # Report text owns stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.ERROR if quiet else level)
    console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, use_colors=colors))
    root_logger.addHandler(console_handler)

    get_logger('logging').debug(f"Logging initialized - Level: {log_level}, File: {log_path}")


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``gene_finder`` namespace."""
    return logging.getLogger(f"gene_finder.{name}")


class LogTimer:
    """Log how long the wrapped block took, or that it failed."""

    def __init__(self, operation: str, logger: logging.Logger):
        self.operation = operation
        self.logger = logger
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if exc_type is None:
            self.logger.debug(f"{self.operation} completed in {elapsed:.2f}s")
        else:
            self.logger.error(f"{self.operation} failed after {elapsed:.2f}s")
