"""CLI command implementations for typescripter."""

from typescripter.cli.errors import cli_error_handler
from typescripter.cli.generate import generate_command
from typescripter.cli.validate import validate_snapshot_command

__all__ = [
    "cli_error_handler",
    "generate_command",
    "validate_snapshot_command",
]
