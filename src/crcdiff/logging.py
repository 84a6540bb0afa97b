"""Logging setup for crcdiff runs."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "crcdiff"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logger(log_file: Path | None = None, level: int = logging.INFO) -> logging.Logger:
    """Configure and return the package logger.

    With ``log_file`` a UTF-8 file handler is attached once per file; without
    it the logger keeps no handlers and records are dropped.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if log_file is None:
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())
        return logger

    target = str(Path(log_file).resolve())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return logger

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.FileHandler(log_file, encoding="utf-8", errors="backslashreplace")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
