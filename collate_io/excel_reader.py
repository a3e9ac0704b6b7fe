"""Spreadsheet input helpers."""

# Module responsibilities:
# - Read one named sheet of one workbook into rows of text cells.
# - Apply the start offset and the optional row cap.
# - Turn every library/parse failure into a ReadError naming the file and sheet.

from __future__ import annotations

import csv
import datetime as dt
from pathlib import Path
from typing import Any, List
from xml.etree.ElementTree import ParseError
from zipfile import BadZipFile

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from collate.core.errors import ReadError

from .utils.log import get_logger

logger = get_logger("excel_reader")

Row = List[str]

CSV_SUFFIXES = {".csv"}


def cell_text(value: Any) -> str:
    """Render a cell value as text without interpreting it."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dt.datetime):
        if value.time() == dt.time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (dt.date, dt.time)):
        return value.isoformat()
    return str(value)


def _trim_trailing_blank_rows(rows: List[Row]) -> List[Row]:
    end = len(rows)
    while end and not any(rows[end - 1]):
        end -= 1
    return rows[:end]


def _read_workbook_sheet(path: Path, sheet: str) -> List[Row]:
    try:
        workbook = load_workbook(path, data_only=True)
    except (OSError, BadZipFile, InvalidFileException, KeyError, ValueError, TypeError, ParseError, SyntaxError) as exc:
        # ParseError/SyntaxError: malformed part XML (lxml's XMLSyntaxError is a SyntaxError too)
        raise ReadError(f"Failed to parse workbook {path.name}: {exc}", path=path, sheet=sheet) from exc
    try:
        if sheet not in workbook.sheetnames:
            raise ReadError(
                f"Sheet '{sheet}' not found in {path.name} (available: {', '.join(workbook.sheetnames)})",
                path=path,
                sheet=sheet,
            )
        worksheet = workbook[sheet]
        return [[cell_text(value) for value in row] for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _csv_width(path: Path) -> int:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return max((len(record) for record in csv.reader(handle)), default=0)


def _read_csv(path: Path) -> List[Row]:
    """Read a CSV as text, padded to its widest row like a sheet's used range."""

    try:
        width = _csv_width(path)
        if width == 0:
            return []
        df = pd.read_csv(
            path,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8",
            engine="python",
        )
    except pd.errors.EmptyDataError:
        return []
    except (OSError, UnicodeDecodeError, csv.Error, pd.errors.ParserError) as exc:
        raise ReadError(f"Failed to parse CSV {path.name}: {exc}", path=path) from exc
    return [[cell_text(value) for value in row] for row in df.fillna("").values.tolist()]


def read_rows(path: Path, sheet: str, start: int = 0, count: int = 0) -> List[Row]:
    """Load the rows of one sheet as text.

    Args:
        path: Workbook (``.xlsx``/``.xlsm``) or ``.csv`` file.
        sheet: Sheet name; ignored for CSV sources.
        start: Zero-based index of the first row kept.
        count: Maximum rows returned, ``0`` for no limit.

    Returns:
        Rows starting at ``start``; empty when ``start`` is past the end.

    Raises:
        ReadError: When the file cannot be opened/parsed or the sheet is missing.
    """

    path = Path(path)
    if not path.exists():
        raise ReadError(f"Source workbook not found: {path}", path=path, sheet=sheet)

    logger.debug("read file=%s sheet=%s start=%d count=%d", path.name, sheet, start, count)

    if path.suffix.lower() in CSV_SUFFIXES:
        rows = _read_csv(path)
    else:
        rows = _read_workbook_sheet(path, sheet)

    rows = _trim_trailing_blank_rows(rows)[start:]
    if count > 0:
        rows = rows[:count]

    logger.debug("read file=%s rows=%d", path.name, len(rows))
    return rows
