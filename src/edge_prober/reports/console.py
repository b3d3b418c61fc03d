"""Console reporter for Edge Prober.

Prints the line-per-target report the operational runbooks expect::

    Testing connection to <hostname> on port <port> (<protocol>) - <description>...PASSED
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from edge_prober.core.models import ProbeOutcome, ProbeResult, ProbeTarget, RunReport


class ConsoleReporter:
    """Renders probe progress and results with rich."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False, soft_wrap=True)

    def clear(self) -> None:
        self.console.clear()

    def header(self) -> None:
        self.console.print("[yellow]Starting TCP/UDP connection tests...[/yellow]")

    def start(self, target: ProbeTarget) -> None:
        """Print the line prefix for a target; the outcome follows on the same line."""
        self.console.print(
            escape(
                f"Testing connection to {target.hostname} on port {target.port} "
                f"({target.protocol}) - {target.description}..."
            ),
            end="",
            soft_wrap=True,
        )

    def finish(self, result: ProbeResult) -> None:
        if result.outcome == ProbeOutcome.PASSED:
            self.console.print("[green]PASSED[/green]")
        elif result.outcome == ProbeOutcome.FAILED:
            self.console.print("[red]FAILED[/red]")
        else:
            self.console.print(
                f"[red] Unknown protocol '{escape(result.target.protocol)}'. Skipping.[/red]"
            )

    def summary(self, report: RunReport) -> None:
        self.console.print()
        self.console.print("[yellow]All tests complete.[/yellow]")
        self.console.print(
            f"[green]Passed: {report.passed}[/green] | "
            f"[red]Failed: {report.failed}[/red] | "
            f"Skipped: {report.skipped}"
        )
