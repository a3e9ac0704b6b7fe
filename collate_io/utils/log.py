"""Logging helpers for the collate_io package."""

# Module responsibilities:
# - Hand out loggers nested under the application logger so one configuration covers I/O modules.

from __future__ import annotations

import logging

IO_LOGGER_ROOT = "collate.io"


def get_logger(name: str) -> logging.Logger:
    """Return a package-scoped logger.

    Args:
        name: Logger name suffix appended to the ``collate.io`` namespace.

    Returns:
        Logger whose records flow to the handlers installed by
        :func:`collate.core.logger.configure_logging`.
    """

    return logging.getLogger(f"{IO_LOGGER_ROOT}.{name}")
