"""Spreadsheet output helpers for the collated matrix."""

# Module responsibilities:
# - Write the collated rows into a fresh single-sheet workbook, one text cell per value.
# - Save atomically through a temporary sibling so failures never leave a partial file.

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import TYPE_STRING
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from collate.core.errors import WriteError

from .utils.log import get_logger

logger = get_logger("excel_writer")


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def _atomic_save(workbook: Workbook, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = _tmp_path(path)
    try:
        workbook.save(tmp_path)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def _write_rows(ws: Worksheet, matrix: Sequence[Sequence[str]]) -> int:
    written = 0
    for row_idx, row in enumerate(matrix, start=1):
        for col_idx, value in enumerate(row, start=1):
            # Excel addresses are 1-indexed
            cell = ws[f"{get_column_letter(col_idx)}{row_idx}"]
            cell.value = value
            # keep "=..." as literal text instead of a formula
            cell.data_type = TYPE_STRING
            written += 1
    return written


def write_matrix(matrix: Sequence[Sequence[str]], out_path: Path, sheet_name: str) -> Path:
    """Write ``matrix`` into a new workbook with a single sheet.

    Args:
        matrix: Rows of text cells; rows may differ in width.
        out_path: Destination workbook path.
        sheet_name: Title of the only sheet.

    Returns:
        The written path.

    Raises:
        WriteError: When the sheet title or a value is rejected, or saving fails.
    """

    out_path = Path(out_path)
    logger.debug("write output=%s sheet=%s rows=%d", out_path, sheet_name, len(matrix))

    workbook = Workbook()
    try:
        worksheet = workbook.active
        worksheet.title = sheet_name
        cells = _write_rows(worksheet, matrix)
        _atomic_save(workbook, out_path)
    except (ValueError, IllegalCharacterError) as exc:
        raise WriteError(f"Cannot write sheet '{sheet_name}' to {out_path}: {exc}") from exc
    except OSError as exc:
        raise WriteError(f"Failed to save output workbook {out_path}: {exc}") from exc
    finally:
        workbook.close()

    logger.debug("write done output=%s rows=%d cells=%d", out_path, len(matrix), cells)
    return out_path
