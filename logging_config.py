"""
Logging for the roll layout estimator.

Every module logs through a child of the "roll_layout" logger. Estimates run
on Flask worker threads, so each line is stamped with the thread name and two
concurrent quotes can be told apart.

Output goes to stdout, and optionally to a rotating log file plus a second
file that only keeps errors.

    2026-10-19 10:15:30 [INFO    ] [MainThread] roll_layout.app - Starting application
    2026-10-19 10:15:31 [DEBUG   ] [Thread-3] roll_layout.modules.packer - 17 per row, 13 rows per section

Call setup_logging() once from the app factory; modules use
get_logger(__name__).
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAMESPACE = "roll_layout"

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Each log file rotates at 10 MB, keeping 5 old files
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


class ThreadContextFilter(logging.Filter):
    """Stamps each record with the name of the thread that emitted it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        return True


def _attach(logger: logging.Logger, handler: logging.Handler, level: int,
            formatter: logging.Formatter, thread_filter: logging.Filter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(thread_filter)
    logger.addHandler(handler)


def _rotating_file(path: Path) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )


def setup_logging(
    app_name: str = LOGGER_NAMESPACE,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure the application logger. Safe to call again; earlier handlers
    are dropped.

    Args:
        app_name: Logger name, also used for the log file names
        log_level: Minimum level for the console and the main log file
        log_dir: Where log files go (default: logs/ next to this file)
        enable_file_logging: False keeps output on the console only

    Returns:
        The configured logger
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    thread_filter = ThreadContextFilter()

    _attach(logger, logging.StreamHandler(sys.stdout), log_level, formatter, thread_filter)

    if enable_file_logging:
        log_dir = log_dir or Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        main_log = log_dir / f"{app_name}.log"
        _attach(logger, _rotating_file(main_log), log_level, formatter, thread_filter)
        _attach(logger, _rotating_file(log_dir / f"{app_name}_error.log"),
                logging.ERROR, formatter, thread_filter)
        logger.info(f"Writing logs to {main_log}")

    logger.info(f"Log level {logging.getLevelName(log_level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. "modules.packer" -> "roll_layout.modules.packer"."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)
