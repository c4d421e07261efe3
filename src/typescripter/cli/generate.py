"""CLI command implementation for generating the DataService module."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer

from typescripter.cli.errors import cli_error_handler
from typescripter.cli.formatting import OutputFormatter
from typescripter.diagnostics import Severity
from typescripter.generator import DataServiceGenerator
from typescripter.generator_config import GeneratorConfig
from typescripter.logging import setup_logging
from typescripter.snapshot import SnapshotLoader

logger = logging.getLogger(__name__)


def build_config(
    config_path: Path | None,
    base_path: str | None = None,
    output_dir: Path | None = None,
    lenient_duplicates: bool = False,
) -> GeneratorConfig:
    """Merge the optional config file with command-line overrides.

    Raises:
        GeneratorConfigError: If the merged configuration is invalid

    """
    properties: dict[str, Any] = {}
    if config_path is not None:
        properties = GeneratorConfig.load(config_path).model_dump(
            exclude_defaults=True
        )
    if base_path is not None:
        properties["base_path"] = base_path
    if output_dir is not None:
        properties["output_dir"] = output_dir
    if lenient_duplicates:
        properties["duplicate_policy"] = "lenient"
    return GeneratorConfig.from_properties(properties)


def generate_command(  # noqa: PLR0913 - CLI entry point with many options
    snapshot_path: Path,
    config_path: Path | None = None,
    base_path: str | None = None,
    output_dir: Path | None = None,
    lenient_duplicates: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for generating the DataService module.

    Exits with code 1 when the run fails or produced error diagnostics.

    Args:
        snapshot_path: Path to the descriptor snapshot file
        config_path: Optional generator configuration YAML file
        base_path: Base path override
        output_dir: Output directory override
        lenient_duplicates: Emit controllers with duplicate method names
        dry_run: Generate without writing the module
        verbose: Enable verbose output (sets log level to DEBUG)
        log_level: Logging level

    """
    setup_logging(level="DEBUG" if verbose else log_level)
    formatter = OutputFormatter()

    with cli_error_handler("generate"):
        config = build_config(config_path, base_path, output_dir, lenient_duplicates)
        formatter.show_startup_banner(snapshot_path, config.output_path, config.base_path)

        snapshot = SnapshotLoader.load(snapshot_path, config.controller_suffix)
        generator = DataServiceGenerator(config)
        result = generator.generate(snapshot)
        if not dry_run:
            result = generator.write(result)

        formatter.format_generation_result(result, dry_run=dry_run)
        if verbose and dry_run and result.module_text:
            typer.echo(result.module_text)

    if result.has_errors:
        error_count = sum(1 for d in result.diagnostics if d.severity is Severity.ERROR)
        logger.error("Generation finished with %d error(s)", error_count)
        raise typer.Exit(1)
