"""CLI command: surfacemap rules — list the rule catalog."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from surfacemap.scanner.models import RULES

console = Console()


@click.command()
def rules() -> None:
    """List the rules findings are reported under."""
    table = Table(title="Rules")
    table.add_column("ID", style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Severity")
    table.add_column("Confidence")
    table.add_column("Description")

    for rule in RULES:
        table.add_row(
            rule.id,
            rule.name,
            rule.severity.value,
            rule.confidence.value,
            rule.description,
        )

    console.print(table)
