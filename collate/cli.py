"""Typer based command line entry points for collate."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from collate.config import DEFAULT_PATTERN, CollateConfig, build_config, load_config_file
from collate.core.errors import CollateError, ConfigError
from collate.core.logger import configure_logging, get_logger
from collate.core.pipeline import Collator
from collate_io.utils.paths import list_input_files

EXIT_FAILURE = 1
EXIT_CONFIG = 2

app = typer.Typer(help="Collate one sheet from many spreadsheet files into a single workbook.")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging (every filled cell and template)."),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Set logging level (e.g. DEBUG/INFO/WARNING) when --verbose is not given.",
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this rotating file."),
) -> None:
    """Configure logging before executing commands."""

    level_value = logging.DEBUG if verbose else getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")
    configure_logging(level_value, log_file)


def _resolve_config(config_file: Optional[Path], overrides: Dict[str, Any]) -> CollateConfig:
    logger = get_logger()
    try:
        file_values = load_config_file(config_file) if config_file else {}
        return build_config(file_values, overrides)
    except ConfigError as exc:
        logger.error("collate.cli config_error: %s", exc)
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc


@app.command("run")
def run_command(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with run settings."),
    input_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Directory of spreadsheet files to process."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Workbook to write the results to."),
    sheet: Optional[str] = typer.Option(None, "--sheet", "-s", help="Sheet name to pull data from (and name the output sheet)."),
    row_start: Optional[int] = typer.Option(None, "--row-start", help="Zero-based row the data starts on, to skip headers."),
    row_count: Optional[int] = typer.Option(None, "--row-count", help="Number of rows to take per file, 0 for no limit."),
    columns: Optional[str] = typer.Option(
        None,
        "--columns",
        help="New columns to insert, comma-separated templates, e.g. '{file_name},{row_num}'.",
    ),
    position: Optional[int] = typer.Option(None, "--position", help="Column index the new columns are inserted at."),
    pattern: Optional[str] = typer.Option(None, "--pattern", help="File name glob, matched case-insensitively."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Collate and log without writing output."),
) -> None:
    """Collate every matching file and write a single-sheet workbook."""

    logger = get_logger()
    config = _resolve_config(
        config_file,
        {
            "input_dir": input_dir,
            "output_path": output,
            "sheet_name": sheet,
            "row_start": row_start,
            "row_count": row_count,
            "columns": columns,
            "column_position": position,
            "pattern": pattern,
            "dry_run": dry_run or None,
        },
    )

    try:
        collator = Collator(config, logger=logger)
    except ConfigError as exc:
        logger.error("collate.cli template_error columns=%r: %s", config.columns, exc)
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc

    try:
        result = collator.run()
    except CollateError as exc:
        logger.error("collate.cli run_failed dir=%s sheet=%s: %s", config.input_dir, config.sheet_name, exc)
        typer.secho(f"Collation failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if result.output_path is None:
        typer.echo(f"dry run: {result.rows} rows from {len(result.files)} files")
    else:
        typer.echo(f"wrote {result.rows} rows from {len(result.files)} files to {result.output_path}")


@app.command("files")
def files_command(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with run settings."),
    input_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Directory to scan."),
    pattern: Optional[str] = typer.Option(None, "--pattern", help="File name glob, matched case-insensitively."),
) -> None:
    """List the files a run would process, in processing order."""

    logger = get_logger()
    try:
        file_values = load_config_file(config_file) if config_file else {}
    except ConfigError as exc:
        logger.error("collate.cli config_error: %s", exc)
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc

    # same precedence as run: option, then config file, then CollateConfig defaults
    scan_dir = input_dir or Path(file_values.get("input_dir") or ".")
    scan_pattern = pattern or str(file_values.get("pattern") or DEFAULT_PATTERN)
    try:
        paths = list_input_files(scan_dir, scan_pattern)
    except CollateError as exc:
        logger.error("collate.cli scan_failed dir=%s: %s", scan_dir, exc)
        typer.secho(f"Scan failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_FAILURE) from exc
    for path in paths:
        typer.echo(path.name)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
