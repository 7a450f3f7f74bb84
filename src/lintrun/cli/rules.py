"""CLI command: lintrun rules — list the built-in rules."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from lintrun.scanner.rules import ALL_RULES

console = Console()


@click.command()
def rules() -> None:
    """List available rules with their kind and default severity."""
    table = Table(title="Rules", show_lines=False)
    table.add_column("Identifier", style="cyan")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Severity")

    for rule in sorted(ALL_RULES, key=lambda r: r.identifier):
        table.add_row(
            rule.identifier,
            rule.description.name,
            rule.description.kind.value,
            rule.severity.value,
        )

    console.print(table)
