"""Output formatting for refitgen CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from refitgen.models import Diagnostic, DiagnosticSeverity

logger = logging.getLogger(__name__)
console = Console(stderr=True)


class OutputFormatter:
    """Handles formatting CLI output for different commands.

    Generated source goes to stdout; everything here is written to stderr so
    the two can be redirected separately.
    """

    SEVERITY_STYLES = {
        DiagnosticSeverity.WARNING: "[yellow]warning[/yellow]",
        DiagnosticSeverity.ERROR: "[red]error[/red]",
    }

    def format_diagnostics(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Print diagnostics as a table, or a success line when there are none."""
        if not diagnostics:
            console.print("[green]No convention warnings[/green]")
            return

        table = Table(
            title="Convention Diagnostics",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Id", style="cyan", no_wrap=True)
        table.add_column("Severity", no_wrap=True)
        table.add_column("Location", style="blue")
        table.add_column("Message")

        for diagnostic in diagnostics:
            table.add_row(
                diagnostic.descriptor.id,
                self.SEVERITY_STYLES[diagnostic.descriptor.severity],
                escape(str(diagnostic.location)),
                escape(diagnostic.message),
            )
            logger.debug("%s", diagnostic)

        console.print(table)

    def format_generation_summary(self, interface_count: int, file_count: int) -> None:
        """Print how many interfaces were generated from how many files."""
        console.print(
            f"[green]Generated {interface_count} stub(s) from {file_count} file(s)[/green]"
        )

    def format_synthesizers(self, names: Sequence[str], default: str) -> None:
        """Print the registered synthesizers."""
        table = Table(title="Available Synthesizers", show_header=True)
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Default")
        for name in names:
            table.add_row(name, "yes" if name == default else "")
        console.print(table)
