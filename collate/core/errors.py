"""Custom exceptions used across collate."""

from __future__ import annotations

from pathlib import Path


class CollateError(Exception):
    """Base error for the application."""


class ConfigError(CollateError):
    """Configuration related error."""


class TemplateSyntaxError(ConfigError):
    """Raised when a column template cannot be compiled."""


class InputError(CollateError):
    """Raised when the input directory cannot be scanned."""


class ReadError(CollateError):
    """Raised when a source workbook or its sheet cannot be read."""

    def __init__(self, message: str, path: Path | None = None, sheet: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.sheet = sheet


class WriteError(CollateError):
    """Raised when the output workbook cannot be written."""


class TemplateEvaluationError(CollateError):
    """Raised when a column template fails for a single row."""
