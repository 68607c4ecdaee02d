"""Diagnostic logging setup for codetribute."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from codetribute.constants import (
    ENCODING_UTF8,
    LOG_ROTATION_BACKUP_COUNT,
    LOG_ROTATION_MAX_BYTES,
    LOGGER_NAME,
)


def configure_logging(log_level: str, log_file: Path | None = None) -> logging.Logger:
    """Configure the codetribute package logger.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional diagnostic log file. Rotated at a fixed size.

    Returns:
        The configured package logger.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)
    app_logger.propagate = False

    # Reconfiguring must not stack handlers
    app_logger.handlers.clear()

    # watchdog and httpx are chatty at DEBUG
    logging.getLogger("watchdog").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if level == logging.DEBUG:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                mode="a",
                maxBytes=LOG_ROTATION_MAX_BYTES,
                backupCount=LOG_ROTATION_BACKUP_COUNT,
                encoding=ENCODING_UTF8,
            )
            file_handler.setFormatter(formatter)
            app_logger.addHandler(file_handler)
            return app_logger
        except OSError as e:
            app_logger.warning(f"Could not set up file logging to {log_file}: {e}")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    app_logger.addHandler(stream_handler)
    return app_logger
