"""Utility modules."""

from .logger import get_logger, setup_logger, setup_logger_from_settings
from .deferred import run_blocking, settle

__all__ = [
    "get_logger",
    "run_blocking",
    "settle",
    "setup_logger",
    "setup_logger_from_settings",
]
