"""Filesystem helpers for locating source workbooks."""

# Module responsibilities:
# - Scan an input directory for spreadsheet files, case-insensitively.
# - Return them in a stable lexical order so collation is reproducible.

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import List

from collate.core.errors import InputError

from .log import get_logger

logger = get_logger("paths")

DEFAULT_PATTERN = "*.xlsx"
LOCK_FILE_PREFIX = "~$"


def list_input_files(directory: Path, pattern: str = DEFAULT_PATTERN) -> List[Path]:
    """List files directly inside ``directory`` matching ``pattern``.

    Args:
        directory: Directory to scan (not recursive).
        pattern: Glob pattern compared against lower-cased file names.

    Returns:
        Matching paths sorted by file name.

    Raises:
        InputError: When ``directory`` is missing or not a directory.
    """

    directory = Path(directory)
    if not directory.exists():
        raise InputError(f"Input directory not found: {directory}")
    if not directory.is_dir():
        raise InputError(f"Input path is not a directory: {directory}")

    folded = pattern.lower()
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise InputError(f"Unable to list input directory {directory}: {exc}") from exc

    matched: List[Path] = []
    for entry in entries:
        if entry.name.startswith(LOCK_FILE_PREFIX):
            continue
        if not entry.is_file():
            continue
        if fnmatchcase(entry.name.lower(), folded):
            matched.append(entry)

    logger.debug("scan dir=%s pattern=%s matched=%d", directory, pattern, len(matched))
    return matched
