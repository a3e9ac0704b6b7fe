"""Generated leading columns driven by per-row text templates.

Templates use Python format-string syntax against three fields:

- ``cells``     the row's text cells, e.g. ``{cells[0]}``
- ``file_name`` base name of the source file, e.g. ``{file_name}``
- ``row_num``   zero-based row index after offset and cap, e.g. ``{row_num:03d}``

A template that fails for a row yields an empty string for that cell only.
"""

from __future__ import annotations

import csv
import io
import re
import string
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Protocol, Sequence

from collate.core.errors import TemplateEvaluationError, TemplateSyntaxError
from collate.core.events import CollateEvents

Row = List[str]

_FIELD_ROOT = re.compile(r"[.\[]")


@dataclass(frozen=True)
class RowContext:
    """Per-row data exposed to templates."""

    cells: tuple[str, ...]
    file_name: str
    row_num: int

    def as_fields(self) -> Dict[str, Any]:
        return {"cells": list(self.cells), "file_name": self.file_name, "row_num": self.row_num}


@dataclass(frozen=True)
class CompiledTemplate:
    """A parsed template ready for repeated evaluation."""

    index: int
    source: str
    fields: tuple[str, ...] = ()


class TemplateEngine(Protocol):
    """Capability used by the templater to compile and evaluate column templates."""

    def compile(self, text: str, index: int = 0) -> CompiledTemplate:  # pragma: no cover - interface definition
        ...

    def evaluate(self, template: CompiledTemplate, context: RowContext) -> str:  # pragma: no cover - interface definition
        ...


class FormatTemplateEngine:
    """Template engine backed by :class:`string.Formatter`."""

    def __init__(self) -> None:
        self._formatter = string.Formatter()

    def compile(self, text: str, index: int = 0) -> CompiledTemplate:
        try:
            parsed = list(self._formatter.parse(text))
        except ValueError as exc:
            raise TemplateSyntaxError(f"Column template #{index + 1} {text!r} is invalid: {exc}") from exc

        fields: list[str] = []
        for _, field_name, _, conversion in parsed:
            if field_name is None:
                continue
            if conversion not in (None, "r", "s", "a"):
                raise TemplateSyntaxError(
                    f"Column template #{index + 1} {text!r} uses unknown conversion '!{conversion}'"
                )
            root = _FIELD_ROOT.split(field_name, 1)[0]
            if root == "" or root.isdigit():
                raise TemplateSyntaxError(
                    f"Column template #{index + 1} {text!r} uses a positional field; name a field such as {{file_name}}"
                )
            fields.append(field_name)
        return CompiledTemplate(index=index, source=text, fields=tuple(fields))

    def evaluate(self, template: CompiledTemplate, context: RowContext) -> str:
        try:
            return self._formatter.vformat(template.source, (), context.as_fields())
        except KeyError as exc:
            raise TemplateEvaluationError(f"unknown field {exc}") from exc
        except IndexError as exc:
            raise TemplateEvaluationError(f"cell index out of range: {exc}") from exc
        except (AttributeError, TypeError, ValueError) as exc:
            raise TemplateEvaluationError(str(exc)) from exc


def parse_column_templates(text: str, engine: TemplateEngine) -> List[CompiledTemplate]:
    """Split a comma-separated template list and compile each entry.

    Entries follow delimited-text quoting, so ``"{cells[0]},{cells[1]}"``
    (with the quotes) is one template containing a comma. An empty string
    gives no templates.

    Raises:
        TemplateSyntaxError: When the list or any template cannot be parsed.
    """
    if text == "":
        return []
    try:
        record = next(csv.reader(io.StringIO(text), strict=True), [])
    except csv.Error as exc:
        raise TemplateSyntaxError(f"Cannot split column templates {text!r}: {exc}") from exc
    return [engine.compile(entry, index) for index, entry in enumerate(record)]


def render_columns(
    context: RowContext,
    templates: Sequence[CompiledTemplate],
    engine: TemplateEngine,
    events: CollateEvents | None = None,
) -> Row:
    """Evaluate every template for one row, substituting ``""`` for failures."""
    events = events or CollateEvents()
    values: Row = []
    for template in templates:
        try:
            value = engine.evaluate(template, context)
        except TemplateEvaluationError as exc:
            events.template_failed(template, context, exc)
            value = ""
        else:
            events.template_evaluated(template, context, value)
        values.append(value)
    return values


def insert_columns(row: Sequence[str], values: Sequence[str], position: int = 0) -> Row:
    """Insert ``values`` into ``row`` at ``position``; past the end appends."""
    cells = list(row)
    return cells[:position] + list(values) + cells[position:]


def prepend_columns(
    rows: Sequence[Sequence[str]],
    file_name: str,
    templates: Sequence[CompiledTemplate],
    engine: TemplateEngine,
    position: int = 0,
    events: CollateEvents | None = None,
) -> List[Row]:
    """Add the generated columns to every row of one file's sheet.

    ``row_num`` in each context is the row's index within ``rows``.
    """
    events = events or CollateEvents()
    out: List[Row] = []
    for row_num, row in enumerate(rows):
        context = RowContext(cells=tuple(row), file_name=file_name, row_num=row_num)
        values = render_columns(context, templates, engine, events)
        out.append(insert_columns(row, values, position))
    return out


def describe_fields(templates: Sequence[CompiledTemplate]) -> Mapping[str, tuple[str, ...]]:
    """Map each template source to the fields it references."""
    return {template.source: template.fields for template in templates}
