from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys


LOGGER_NAME = "collate"

_LOGGER: logging.Logger | None = None


def configure_logging(level: int = logging.WARNING, log_file: Path | None = None) -> logging.Logger:
    """Configure the ``collate`` logger with a console handler and an optional rotating file.

    Safe to call more than once; previous handlers are replaced so repeated CLI
    invocations in one process do not duplicate output.
    """
    global _LOGGER

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the application logger, configuring defaults on first use."""
    if _LOGGER is not None:
        return _LOGGER
    return configure_logging()
