"""Observation points of the collate pipeline.

The pipeline reports what it does through a :class:`CollateEvents` sink
instead of logging inline. The base class ignores every event, so callers
and tests override only what they need; :class:`LoggingEvents` forwards
events to the application logger.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .logger import get_logger

if TYPE_CHECKING:
    from collate.services.transform.templater import CompiledTemplate, RowContext


class CollateEvents:
    """No-op event sink."""

    def file_started(self, file_name: str, path: Path) -> None:
        pass

    def rows_read(self, file_name: str, rows: int) -> None:
        pass

    def cell_filled(self, row: int, column: int, value: str) -> None:
        pass

    def template_evaluated(self, template: "CompiledTemplate", context: "RowContext", value: str) -> None:
        pass

    def template_failed(self, template: "CompiledTemplate", context: "RowContext", error: Exception) -> None:
        pass

    def file_completed(self, file_name: str, rows: int) -> None:
        pass

    def output_written(self, path: Path, rows: int) -> None:
        pass


class LoggingEvents(CollateEvents):
    """Event sink writing ``key=value`` records to the ``collate`` logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger()

    def file_started(self, file_name: str, path: Path) -> None:
        self.logger.debug("collate.file_started file=%s path=%s", file_name, path)

    def rows_read(self, file_name: str, rows: int) -> None:
        self.logger.debug("collate.rows_read file=%s rows=%d", file_name, rows)

    def cell_filled(self, row: int, column: int, value: str) -> None:
        self.logger.debug("collate.cell_filled row=%d column=%d inherited=%r", row, column, value)

    def template_evaluated(self, template: "CompiledTemplate", context: "RowContext", value: str) -> None:
        self.logger.debug(
            "collate.template_evaluated template=%r file=%s row=%d value=%r",
            template.source,
            context.file_name,
            context.row_num,
            value,
        )

    def template_failed(self, template: "CompiledTemplate", context: "RowContext", error: Exception) -> None:
        self.logger.warning(
            "collate.template_failed template=%r file=%s row=%d error=%s",
            template.source,
            context.file_name,
            context.row_num,
            error,
        )

    def file_completed(self, file_name: str, rows: int) -> None:
        self.logger.info("collate.file_completed file=%s rows=%d", file_name, rows)

    def output_written(self, path: Path, rows: int) -> None:
        self.logger.info("collate.output_written path=%s rows=%d", path, rows)
