"""Collate one sheet from many spreadsheet files into a single output workbook."""

__version__ = "0.1.0"
