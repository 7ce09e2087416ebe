"""Logging setup shared by every pagevault module."""

import logging
import os

ROOT_LOGGER_NAME = "pagevault"
LOG_LEVEL_ENV = "PAGEVAULT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _package_logger() -> logging.Logger:
    # One stream handler on the package logger; module loggers propagate to it
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


def _level_from_env(default_level: int) -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, logging.getLevelName(default_level))
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else default_level


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger in the ``pagevault`` hierarchy.

    Names outside the package are nested under it, so every record goes
    through the package handler. Library modules default to WARNING and the
    CLI to INFO; ``PAGEVAULT_LOG_LEVEL`` overrides both.
    """
    _package_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)
    if logger.level == logging.NOTSET:
        default_level = logging.INFO if name.endswith(".cli") else logging.WARNING
        logger.setLevel(_level_from_env(default_level))
    return logger
