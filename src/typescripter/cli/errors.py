"""Rendering of generator failures for the command line."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.panel import Panel

from typescripter.errors import (
    DescriptorError,
    GeneratorConfigError,
    ModuleWriteError,
    PreambleError,
    SnapshotLoadError,
    TypeScripterError,
)

logger = logging.getLogger(__name__)
console = Console()

# Most specific class first
ERROR_GUIDANCE: tuple[tuple[type[TypeScripterError], str, str], ...] = (
    (
        SnapshotLoadError,
        "Invalid descriptor snapshot",
        "Run 'typescripter validate-snapshot' on the file to see every problem.",
    ),
    (
        DescriptorError,
        "Invalid descriptor",
        "Types use host notation such as 'List<User>', 'Int32?' or 'User[]'.",
    ),
    (
        GeneratorConfigError,
        "Invalid configuration",
        "Check the config file keys and the --base-path/--output-dir options.",
    ),
    (
        PreambleError,
        "Cannot render module header",
        "module_name and every model name must be valid TypeScript identifiers.",
    ),
    (
        ModuleWriteError,
        "Cannot write module",
        "Check that the output directory exists or can be created and is writable.",
    ),
)


def describe_error(error: TypeScripterError) -> tuple[str, str | None]:
    """Return the panel title and remediation hint for a generator error."""
    for error_type, title, hint in ERROR_GUIDANCE:
        if isinstance(error, error_type):
            return title, hint
    return type(error).__name__, None


def error_panel(error: TypeScripterError, command: str) -> Panel:
    """Build the red panel shown when a command fails."""
    title, hint = describe_error(error)
    body = f"[red]{error}[/red]"
    if hint:
        body = f"{body}\n\n[dim]{hint}[/dim]"
    return Panel(
        body,
        title=f"❌ {title}",
        subtitle=f"typescripter {command}",
        border_style="red",
    )


@contextmanager
def cli_error_handler(command: str) -> Generator[None]:
    """Show generator errors as Rich panels and exit with code 1.

    Errors outside the TypeScripterError hierarchy are programming errors and
    propagate with their traceback.

    Args:
        command: CLI command name shown under the panel.

    """
    try:
        yield
    except TypeScripterError as e:
        logger.error("typescripter %s failed: %s", command, e)
        console.print(error_panel(e, command))
        raise typer.Exit(1) from e
