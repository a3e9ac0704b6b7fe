from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from collate.core import logger as core_logger  # noqa: E402

WorkbookFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _fresh_logging() -> Iterable[None]:
    """Give every test its own handlers so CliRunner streams never leak between tests."""

    core_logger.configure_logging(logging.DEBUG)
    yield
    logger = logging.getLogger(core_logger.LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    core_logger._LOGGER = None


@pytest.fixture
def make_workbook(tmp_path: Path) -> WorkbookFactory:
    """Build an .xlsx file holding ``rows`` on sheet ``sheet``."""

    def _make(
        name: str,
        rows: Sequence[Sequence[object]],
        sheet: str = "Data",
        directory: Path | None = None,
    ) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        ws = wb.active
        ws.title = sheet
        for row in rows:
            ws.append(list(row))
        wb.save(target)
        return target

    return _make
