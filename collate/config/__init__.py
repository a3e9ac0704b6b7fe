"""Configuration for a collate run.

A run is described by one immutable :class:`CollateConfig`. Values come from
an optional YAML file and from command-line options; options given on the
command line win over the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from collate.core.errors import ConfigError


DEFAULT_COLUMNS = "{file_name}"
DEFAULT_PATTERN = "*.xlsx"


class CollateConfig(BaseModel):
    """Settings shared by every stage of the pipeline."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    input_dir: Path = Path(".")
    output_path: Path = Path("output.xlsx")
    sheet_name: str = Field(min_length=1)
    row_start: int = Field(default=0, ge=0)
    row_count: int = Field(default=0, ge=0)
    columns: str = DEFAULT_COLUMNS
    column_position: int = Field(default=0, ge=0)
    pattern: str = Field(default=DEFAULT_PATTERN, min_length=1)
    dry_run: bool = False

    @field_validator("sheet_name")
    @classmethod
    def _sheet_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("sheet name must not be blank")
        return value


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Read a YAML mapping of :class:`CollateConfig` fields."""

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Config file not found: {cfg_path}")
    try:
        with cfg_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file {cfg_path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {cfg_path} must contain a mapping")
    return data


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "config"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def build_config(
    file_values: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CollateConfig:
    """Merge file values with explicit overrides and validate.

    ``None`` overrides are ignored so unset CLI options fall back to the file
    and then to the model defaults.
    """

    merged: Dict[str, Any] = dict(file_values or {})
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    try:
        return CollateConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {_format_errors(exc)}") from exc
