"""Logging setup for the review client.

Everything below the ``projectreview`` logger (every module logs via
``logging.getLogger(__name__)``) shares one set of handlers. Handler
options default to the values in ``Settings``; explicit arguments win.
"""

import logging
import logging.handlers
import os
from typing import Optional

from projectreview.settings import Settings, get_settings

LOGGER_NAME = "projectreview"

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
ISO_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Per-request chatter from the HTTP stack
NOISY_LOGGERS = ("httpx", "httpcore")

ROTATE_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 3


def setup_logger(
    name: str = LOGGER_NAME,
    settings: Optional[Settings] = None,
    *,
    level: Optional[str] = None,
    log_dir: Optional[str] = None,
    file_logging: Optional[bool] = None,
    console_logging: Optional[bool] = None,
) -> logging.Logger:
    """Attach console and rotating file handlers to ``name``.

    Args:
        name: Logger name
        settings: Source of defaults; the cached settings when omitted
        level: Overrides ``settings.log_level``
        log_dir: Overrides ``settings.log_dir``
        file_logging: Overrides ``settings.file_logging``
        console_logging: Overrides ``settings.console_logging``

    Returns:
        The configured logger. Calling again only updates the level.

    Raises:
        ValueError: If the level is not a known logging level
    """
    settings = settings or get_settings()
    level_name = (level or settings.log_level).upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level_name}. Must be one of: {', '.join(LOG_LEVELS)}"
        )

    logger = logging.getLogger(name)
    logger.setLevel(level_name)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=ISO_DATE_FORMAT)

    if settings.file_logging if file_logging is None else file_logging:
        directory = log_dir or settings.log_dir
        os.makedirs(directory, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(directory, f"{name}.log"),
            maxBytes=ROTATE_BYTES,
            backupCount=ROTATE_BACKUPS,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if settings.console_logging if console_logging is None else console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if level_name != "DEBUG":
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger, e.g. ``get_logger("uploads")``."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
