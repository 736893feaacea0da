"""
Logging configuration for labeltracks.
Everything goes to the console; the CSV is the only file a run writes.
"""

import logging
import sys
from typing import Optional
from .config import LOGGING_CONFIG

PACKAGE_LOGGER = "labeltracks"


def setup_logging(level: Optional[str] = None, diagnostics: bool = False) -> logging.Logger:
    """
    Configure the package logger with a single stdout handler.

    Calling it again replaces the handler, so the CLI can set a provisional
    level before the configuration is loaded and the real one afterwards.

    Args:
        level: Level name, case-insensitive; unknown names fall back to INFO
        diagnostics: Force DEBUG and use the timestamped, line-numbered format

    Returns:
        The "labeltracks" logger
    """
    if diagnostics:
        log_level = logging.DEBUG
        log_format = LOGGING_CONFIG["DIAGNOSTIC_FORMAT"]
    else:
        log_level = getattr(logging, (level or LOGGING_CONFIG["LEVEL"]).upper(), None)
        if not isinstance(log_level, int):
            log_level = logging.INFO
        log_format = LOGGING_CONFIG["FORMAT"]

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(log_format))
    package_logger.addHandler(handler)
    package_logger.propagate = False

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Child of the package logger for a module name."""
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
