"""CLI command implementation for validating descriptor snapshots."""

from __future__ import annotations

import logging
from pathlib import Path

from typescripter.cli.errors import cli_error_handler
from typescripter.cli.formatting import OutputFormatter
from typescripter.logging import setup_logging
from typescripter.snapshot import SnapshotLoader

logger = logging.getLogger(__name__)


def validate_snapshot_command(
    snapshot_path: Path, controller_suffix: str = "Controller", log_level: str = "INFO"
) -> None:
    """CLI command implementation for validating snapshots.

    Args:
        snapshot_path: Path to the descriptor snapshot file
        controller_suffix: Suffix every controller name must end with
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("validate-snapshot"):
        snapshot = SnapshotLoader.load(snapshot_path, controller_suffix)
        OutputFormatter().format_snapshot(snapshot, controller_suffix)
