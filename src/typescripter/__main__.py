"""Main entry point for typescripter.

This module provides the command-line interface, including commands for:
- Generating the DataService TypeScript module from a descriptor snapshot
- Validating descriptor snapshots
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from typescripter.cli import generate_command, validate_snapshot_command

# .env in the working directory supplies TYPESCRIPTER_* settings
load_dotenv(Path.cwd() / ".env")

app = typer.Typer(name="typescripter")


@app.command()
def generate(  # noqa: PLR0913 - CLI entry point with many options
    snapshot: Annotated[
        Path,
        typer.Argument(
            help="Path to the descriptor snapshot (YAML or JSON)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Generator configuration YAML file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    base_path: Annotated[
        str | None,
        typer.Option(
            "--base-path",
            help="API base path, e.g. /api (overrides the config file)",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the generated module (overrides the config file)",
            file_okay=False,
            dir_okay=True,
            rich_help_panel="Output",
        ),
    ] = None,
    lenient_duplicates: Annotated[
        bool,
        typer.Option(
            "--lenient-duplicates",
            help="Emit controllers with duplicate method names instead of dropping them",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Generate without writing the module",
            rich_help_panel="Output",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output (sets log level to DEBUG)",
        ),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Generate the DataService TypeScript module from a descriptor snapshot.

    Example:
        typescripter generate snapshot.yaml --base-path /api -o ./client

    """
    generate_command(
        snapshot,
        config_path=config,
        base_path=base_path,
        output_dir=output_dir,
        lenient_duplicates=lenient_duplicates,
        dry_run=dry_run,
        verbose=verbose,
        log_level=log_level,
    )


@app.command(name="validate-snapshot")
def validate_snapshot(
    snapshot: Annotated[
        Path,
        typer.Argument(
            help="Path to the descriptor snapshot (YAML or JSON)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    controller_suffix: Annotated[
        str,
        typer.Option(
            "--controller-suffix",
            help="Suffix every controller name must end with",
        ),
    ] = "Controller",
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Validate a descriptor snapshot and list its controllers."""
    validate_snapshot_command(snapshot, controller_suffix, log_level)


if __name__ == "__main__":
    app()
