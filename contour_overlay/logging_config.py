"""
Logging configuration for the contour_overlay package.

This module provides centralized logging setup with configurable verbosity
levels, formatters, and output destinations. It supports console and file
logging under the ``contour_overlay`` logger hierarchy.
"""

import logging
import os
import sys
from typing import Optional


# Default log format with timestamp and level
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

LOG_LEVEL_ENV_VAR = "CONTOUR_OVERLAY_LOG_LEVEL"

# Rendering and PNG encoding log font lookups and chunk details below WARNING.
NOISY_LOGGERS = ("matplotlib", "PIL", "fontTools")


def _level_from_verbosity(verbosity: int) -> int:
    if verbosity >= 1:
        return logging.DEBUG
    if verbosity == 0:
        return logging.INFO
    if verbosity == -1:
        return logging.WARNING
    return logging.ERROR


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure logging for the contour_overlay package.

    Sets up logger hierarchy with appropriate levels and handlers:
    - Root logger and NOISY_LOGGERS at WARNING level, even when this
      package logs at DEBUG
    - contour_overlay.* loggers at INFO level by default
    - DEBUG level when verbosity > 0

    Args:
        verbosity: Verbosity level (0=INFO, 1=DEBUG, -1=WARNING, -2=ERROR)
        log_file: Optional path to log file for file output
        format_string: Optional custom format string for log messages

    Environment Variables:
        CONTOUR_OVERLAY_LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR)

    Example:
        >>> setup_logging(verbosity=1)  # Enable DEBUG logging
        >>> setup_logging(log_file="overlay.log")  # Log to file
    """
    level = _level_from_verbosity(verbosity)

    # Check for environment variable override
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    ignored_env_level = None
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = getattr(logging, env_level)
    elif env_level:
        ignored_env_level = env_level

    if format_string is None:
        format_string = DEFAULT_FORMAT if verbosity >= 0 else SIMPLE_FORMAT

    logging.root.setLevel(logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger("contour_overlay")
    logger.setLevel(level)
    logger.propagate = False

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            logger.addHandler(file_handler)
            logger.info(f"Logging to file: {log_file}")
        except OSError as e:
            logger.warning(f"Failed to create log file {log_file}: {e}")

    if ignored_env_level is not None:
        logger.warning(f"Ignoring unknown {LOG_LEVEL_ENV_VAR}={ignored_env_level}")

    logger.debug(f"Logging configured: level={logging.getLevelName(level)}")

