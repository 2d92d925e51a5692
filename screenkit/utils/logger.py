"""Logging configuration using loguru.

screenkit is a library: importing it leaves the application's sinks alone
and keeps screenkit's own records muted. setup_logger() (or
setup_logger_from_settings()) installs screenkit's sinks and unmutes it.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{extra[component]} | "
    "{name}:{function}:{line} | "
    "{message}"
)

LOG_FILE_NAME = "screenkit_{time:YYYY-MM-DD}.log"

DEFAULT_COMPONENT = "screenkit"

logger.disable("screenkit")


def _formatter(template: str):
    """Format function that tolerates records without a component."""
    def format_record(record) -> str:
        record["extra"].setdefault("component", DEFAULT_COMPONENT)
        return template + "\n{exception}"
    return format_record


def setup_logger(
    level: str = "INFO",
    log_dir: str = "logs",
    console: bool = True,
    file: bool = False,
    retention: str = "7 days",
) -> None:
    """
    Replace all log sinks and enable screenkit's records.

    Args:
        level: Minimum level for every sink (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the daily log files
        console: Log to stderr
        file: Log to a daily rotated file in log_dir
        retention: How long rotated files are kept
    """
    logger.remove()
    logger.enable("screenkit")

    if console:
        logger.add(sys.stderr, format=_formatter(CONSOLE_FORMAT), level=level, colorize=True)

    if file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # Worker threads (OCR pool, to_thread calls) log through the queue
        logger.add(
            log_path / LOG_FILE_NAME,
            format=_formatter(FILE_FORMAT),
            level=level,
            rotation="00:00",
            retention=retention,
            compression="zip",
            enqueue=True,
        )


def setup_logger_from_settings(settings) -> None:
    """Configure the logger from the logging section of Settings."""
    setup_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        file=settings.log_to_file,
    )


def get_logger(component: Optional[str] = None):
    """
    Get the shared logger bound to a component name.

    Args:
        component: Shown in the component column (default: "screenkit")
    """
    return logger.bind(component=component or DEFAULT_COMPONENT)
