from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Sequence

from collate.config import CollateConfig
from collate.services.transform.fill import fill_down
from collate.services.transform.templater import (
    CompiledTemplate,
    FormatTemplateEngine,
    TemplateEngine,
    describe_fields,
    parse_column_templates,
    prepend_columns,
)
from collate_io.excel_reader import read_rows
from collate_io.excel_writer import write_matrix
from collate_io.utils.paths import list_input_files

from .events import CollateEvents, LoggingEvents
from .logger import get_logger


Row = List[str]
RowReader = Callable[[Path, str, int, int], List[Row]]


@dataclass
class CollateResult:
    files: list[Path]
    rows: int
    output_path: Path | None
    matrix: list[Row] = field(default_factory=list, repr=False)


class Collator:
    """Coordinates Read -> Fill -> Template for every file, then Write."""

    def __init__(
        self,
        config: CollateConfig,
        engine: TemplateEngine | None = None,
        events: CollateEvents | None = None,
        reader: RowReader = read_rows,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or get_logger()
        self.engine = engine or FormatTemplateEngine()
        self.events = events or LoggingEvents(self.logger)
        self.reader = reader
        # compiled up front so a bad template fails before any file is opened
        self.templates: list[CompiledTemplate] = parse_column_templates(config.columns, self.engine)
        self.logger.debug("collate.templates %s", describe_fields(self.templates))

    def transform_file(self, path: Path) -> list[Row]:
        """Read, fill down and template one file's sheet."""
        file_name = path.name
        self.events.file_started(file_name, path)

        rows = self.reader(path, self.config.sheet_name, self.config.row_start, self.config.row_count)
        self.events.rows_read(file_name, len(rows))

        rows = fill_down(rows, self.events)
        rows = prepend_columns(
            rows,
            file_name,
            self.templates,
            self.engine,
            position=self.config.column_position,
            events=self.events,
        )
        self.events.file_completed(file_name, len(rows))
        return rows

    def collate(self, files: Sequence[Path]) -> list[Row]:
        """Concatenate the transformed rows of ``files`` in the given order.

        A read failure on any file propagates and nothing is returned.
        """
        matrix: list[Row] = []
        for path in files:
            matrix.extend(self.transform_file(Path(path)))
        return matrix

    def discover(self) -> list[Path]:
        return list_input_files(self.config.input_dir, self.config.pattern)

    def run(self, files: Sequence[Path] | None = None) -> CollateResult:
        """Collate ``files`` (or the scanned input directory) and write the output."""
        paths = [Path(p) for p in files] if files is not None else self.discover()
        self.logger.debug("collate.files %s", [p.name for p in paths])
        if not paths:
            self.logger.warning("collate.no_input dir=%s pattern=%s", self.config.input_dir, self.config.pattern)

        matrix = self.collate(paths)

        output_path: Path | None = None
        if self.config.dry_run:
            self.logger.info("collate.dry_run rows=%d output=%s", len(matrix), self.config.output_path)
        else:
            output_path = write_matrix(matrix, self.config.output_path, self.config.sheet_name)
            self.events.output_written(output_path, len(matrix))

        return CollateResult(files=paths, rows=len(matrix), output_path=output_path, matrix=matrix)
