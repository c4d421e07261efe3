"""Output formatting for typescripter CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from typescripter.diagnostics import Diagnostic, Severity
from typescripter.generator import GenerationResult
from typescripter.snapshot import DescriptorSnapshot

logger = logging.getLogger(__name__)
console = Console()


class OutputFormatter:
    """Handles formatting CLI output for different commands."""

    SEVERITY_STYLES = {
        Severity.WARNING: "[yellow]warning[/yellow]",
        Severity.ERROR: "[red]error[/red]",
    }

    def show_startup_banner(
        self, snapshot_path: Path, output_path: Path, base_path: str
    ) -> None:
        """Show startup banner for the generate command."""
        console.print(
            Panel(
                f"[bold]Snapshot:[/bold] {snapshot_path}\n"
                f"[bold]Output:[/bold] {output_path}\n"
                f"[bold]Base path:[/bold] {base_path or '[dim](none)[/dim]'}",
                title="🧬 TypeScripter",
                border_style="cyan",
            )
        )

    def format_generation_result(
        self, result: GenerationResult, dry_run: bool = False
    ) -> None:
        """Print the summary table and any diagnostics of a run."""
        summary = result.summary
        table = Table(
            title="📊 Generation Summary",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Controllers", justify="right")
        table.add_column("Methods", justify="right")
        table.add_column("Emitted", justify="right", style="green")
        table.add_column("Skipped", justify="right", style="yellow")
        table.add_row(
            str(summary.controllers),
            str(summary.methods_processed),
            str(summary.methods_emitted),
            str(summary.methods_skipped),
        )
        console.print(table)

        self.format_diagnostics(result.diagnostics)

        if not result.generated_modules:
            console.print("[yellow]⚠️  No base path configured, nothing generated.[/yellow]")
        elif dry_run:
            console.print(f"[cyan]Dry run: {result.output_path} not written.[/cyan]")
        elif result.written:
            console.print(f"[bold green]✅ Wrote {result.output_path}[/bold green]")
        else:
            console.print(f"[green]✅ {result.output_path} is up to date.[/green]")

    def format_diagnostics(self, diagnostics: list[Diagnostic]) -> None:
        """Print diagnostics as a table, if there are any."""
        if not diagnostics:
            return
        table = Table(
            title="⚠️  Diagnostics", show_header=True, header_style="bold magenta"
        )
        table.add_column("Severity")
        table.add_column("Kind", style="cyan")
        table.add_column("Location", style="white")
        table.add_column("Message")
        for diagnostic in diagnostics:
            table.add_row(
                self.SEVERITY_STYLES[diagnostic.severity],
                diagnostic.kind.value,
                diagnostic.location,
                diagnostic.message,
            )
        console.print(table)

    def format_snapshot(self, snapshot: DescriptorSnapshot, suffix: str) -> None:
        """Print a tree of the controllers and methods in a snapshot."""
        console.print(
            Panel(
                f"[green]✅ Snapshot is valid[/green]\n\n"
                f"[bold]Controllers:[/bold] {len(snapshot.controllers)}\n"
                f"[bold]Methods:[/bold] {snapshot.method_count}\n"
                f"[bold]Models:[/bold] {len(snapshot.models)}",
                title="📋 Snapshot Validation Results",
                border_style="green",
            )
        )
        tree = Tree("[bold blue]Controllers[/bold blue]")
        for controller in sorted(snapshot.controllers, key=lambda c: c.name.casefold()):
            branch = tree.add(f"[cyan]{controller.resource_name(suffix)}[/cyan]")
            for method in controller.exposed_methods():
                verb = f" [dim]({method.verb.value})[/dim]" if method.verb else ""
                branch.add(f"{method.name}{verb}")
        console.print(tree)
        logger.debug("Snapshot has %d controllers", len(snapshot.controllers))
