"""Rich console reporters — streaming lines and an end-of-run table."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lintrun.report.base import StreamingReporter
from lintrun.scanner.models import Finding, Severity

_SEVERITY_COLORS = {
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


class ConsoleReporter(StreamingReporter):
    """One line per finding as soon as each file is done."""

    realtime = True

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    def emit(self, findings: Sequence[Finding]) -> None:
        for finding in findings:
            color = _SEVERITY_COLORS.get(finding.severity, "white")
            self._console.print(
                f"{escape(str(finding.location))}: "
                f"[{color}]{finding.severity.value}[/{color}]: "
                f"{escape(finding.message)} [dim]({finding.rule_id})[/dim]"
            )


class TableReporter(StreamingReporter):
    """A single findings table once the run is complete."""

    realtime = False

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    def emit(self, findings: Sequence[Finding]) -> None:
        if not findings:
            self._console.print("[green]No findings.[/green]")
            return

        # Errors first, then file, then line
        ordered = sorted(
            findings,
            key=lambda f: (
                0 if f.severity == Severity.ERROR else 1,
                f.location.file,
                f.location.line,
            ),
        )

        table = Table(title="Findings", show_lines=False)
        table.add_column("Severity", style="bold", width=8)
        table.add_column("Location", style="cyan")
        table.add_column("Rule")
        table.add_column("Message", max_width=60)

        for finding in ordered:
            color = _SEVERITY_COLORS.get(finding.severity, "white")
            table.add_row(
                f"[{color}]{finding.severity.value}[/{color}]",
                escape(str(finding.location)),
                finding.rule_id,
                escape(finding.message),
            )

        self._console.print(table)
