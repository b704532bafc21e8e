"""Logging configuration for the application."""

import logging
import os
from typing import Optional

from rich.logging import RichHandler

import config

LOGGER_NAME = "SheetsGrader"

_logger: Optional[logging.Logger] = None

def setup_logger(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Sets up and returns the application logger.

    Console output goes through rich; a plain-text copy is appended to the
    log file. Both use the level from config unless one is given.

    Args:
        level: Overrides ``config.LOG_LEVEL``.
        log_file: Overrides ``config.LOG_FILE``.

    Returns:
        logging.Logger: The configured application logger.
    """
    global _logger
    if _logger:
        return _logger

    level = config.LOG_LEVEL if level is None else level
    log_file = config.LOG_FILE if log_file is None else log_file

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = RichHandler(level=level, show_path=bool(config.DEBUG), rich_tracebacks=True)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
            logger.addHandler(file_handler)
        except OSError as e:
            # Continue with console logging only
            logger.error(f"Failed to create file handler for {log_file}: {e}", exc_info=config.DEBUG)

    _logger = logger
    logger.debug("Logger initialized in %s mode.", "DEBUG" if config.DEBUG else "normal")
    return logger

def get_logger() -> logging.Logger:
    """Returns the singleton logger instance, setting it up if necessary."""
    if _logger is None:
        return setup_logger()
    return _logger
