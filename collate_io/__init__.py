"""`collate_io` exports the spreadsheet reading, writing and scanning helpers."""

# Module responsibilities:
# - Re-export the I/O entry points so the pipeline has a stable API surface.

from __future__ import annotations

from .excel_reader import cell_text, read_rows
from .excel_writer import write_matrix
from .utils.paths import list_input_files

__all__ = [
    "cell_text",
    "read_rows",
    "write_matrix",
    "list_input_files",
]

__version__ = "0.1.0"
