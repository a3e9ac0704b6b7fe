"""Row transformations: fill-down and generated columns."""

from .fill import fill_down
from .templater import (
    CompiledTemplate,
    FormatTemplateEngine,
    RowContext,
    TemplateEngine,
    parse_column_templates,
    prepend_columns,
    render_columns,
)

__all__ = [
    "CompiledTemplate",
    "FormatTemplateEngine",
    "RowContext",
    "TemplateEngine",
    "fill_down",
    "parse_column_templates",
    "prepend_columns",
    "render_columns",
]
