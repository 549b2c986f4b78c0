"""Logging setup for Day Tally.

Everything logs under the ``daytally`` logger. The log file lives in the
profile directory next to the backup and rotates by size; stderr only
shows warnings unless debug is on.

Usage:
    from config.logging_config import setup_logging, get_logger

    setup_logging(data_dir=paths.data_dir)
    logger = get_logger(__name__)
"""
import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from config.constants import STORAGE

ROOT_LOGGER_NAME = "daytally"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, logging.Logger] = {}


def _file_handler(data_dir: Path) -> logging.Handler:
    data_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        data_dir / STORAGE.LOG_FILE,
        maxBytes=STORAGE.LOG_MAX_BYTES,
        backupCount=STORAGE.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(
    data_dir: Optional[Path] = None,
    debug: bool = False,
    console_output: bool = True,
    log_to_file: bool = True,
) -> logging.Logger:
    """Configure the ``daytally`` logger and return it.

    Calling it again drops the previous handlers, so tests and restarts
    never log twice.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    root.propagate = True

    while root.handlers:
        old = root.handlers.pop()
        old.close()

    handlers = []
    if log_to_file:
        handlers.append(_file_handler(data_dir or Path.home() / STORAGE.DATA_DIR_NAME))
    if console_output:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.DEBUG if debug else logging.WARNING)
        handlers.append(console)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.info(f"Logging ready (debug={debug}, file={log_to_file}, console={console_output})")
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named ``daytally.<package>.<module>``.

    Only the last two dotted parts of ``name`` are kept.
    """
    short_name = ".".join(name.split(".")[-2:])
    logger = _loggers.get(short_name)
    if logger is None:
        logger = _loggers[short_name] = logging.getLogger(f"{ROOT_LOGGER_NAME}.{short_name}")
    return logger


def log_exception(logger: logging.Logger, message: str, exc: BaseException) -> None:
    """Log ``message`` with the exception type and traceback attached."""
    logger.error(f"{message}: {type(exc).__name__}: {exc}", exc_info=exc)


class LogContext:
    """Times a block and logs how long it took.

        with LogContext(logger, "Startup load"):
            mirror.load()
        # "Startup load completed in 12ms"

    Exceptions are logged and re-raised.
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self._started = 0.0

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self._started) * 1000

    def __enter__(self) -> "LogContext":
        self._started = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} completed in {self.elapsed_ms:.0f}ms")
        else:
            self.logger.error(f"{self.operation} failed after {self.elapsed_ms:.0f}ms: {exc_val}")
        return False
