"""Edge Prober CLI - Main entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from edge_prober import __version__
from edge_prober.core.config import Settings
from edge_prober.core.exceptions import EdgeProberError
from edge_prober.core.logging import configure_logging
from edge_prober.core.models import ProbeTarget

app = typer.Typer(
    name="edge-prober",
    help="Check TCP/UDP reachability of the Cloudflare tunnel and WARP edge",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

EXIT_FATAL = 2
EXIT_INTERRUPTED = 130

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        console.print(f"Edge Prober v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Edge Prober - Cloudflare edge connectivity checks."""
    pass


def _load_settings(config: Optional[Path]) -> Settings:
    try:
        return Settings.from_file_or_default(config)
    except EdgeProberError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_FATAL)


def _load_targets(settings: Settings, targets_file: Optional[Path]) -> list[ProbeTarget]:
    from edge_prober.core.targets import resolve_targets

    try:
        return resolve_targets(settings.targets, targets_file)
    except EdgeProberError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_FATAL)


@app.command()
def run(
    targets_file: Optional[Path] = typer.Option(
        None, "--targets", help="YAML or comma-separated file of targets to probe"
    ),
    config: Optional[Path] = typer.Option(None, help="Path to configuration file"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Exit with status 1 if any target fails"
    ),
    timeout: Optional[float] = typer.Option(
        None, help="Timeout in seconds for both TCP and UDP probes"
    ),
    tcp_timeout: Optional[float] = typer.Option(None, help="TCP connect timeout in seconds"),
    udp_timeout: Optional[float] = typer.Option(None, help="UDP send timeout in seconds"),
    json_output: Optional[Path] = typer.Option(
        None, help="Also write the run report as JSON to this file"
    ),
    clear: Optional[bool] = typer.Option(
        None, "--clear/--no-clear", help="Clear the terminal before running"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run/--no-dry-run", help="List targets without probing"
    ),
    log_level: Optional[str] = typer.Option(None, help="Log level (DEBUG, INFO, WARNING, ERROR)"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON on stderr"),
) -> None:
    """
    Probe every target and print PASSED/FAILED per line.

    Failed targets do not change the exit status unless --strict is given.
    """
    from edge_prober.core.orchestrator import ProbeRunOrchestrator
    from edge_prober.reports import ConsoleReporter, save_json_report

    settings = _load_settings(config)

    if strict is not None:
        settings.output.strict = strict
    if clear is not None:
        settings.output.clear_screen = clear
    if json_output is not None:
        settings.output.json_output = json_output
    if timeout is not None:
        settings.prober.tcp_timeout = timeout
        settings.prober.udp_timeout = timeout
    if tcp_timeout is not None:
        settings.prober.tcp_timeout = tcp_timeout
    if udp_timeout is not None:
        settings.prober.udp_timeout = udp_timeout
    if log_level is not None:
        if log_level.upper() not in LOG_LEVELS:
            err_console.print(f"[red]Error: unknown log level {escape(repr(log_level))}[/red]")
            raise typer.Exit(EXIT_FATAL)
        settings.logging.level = log_level.upper()
    if json_logs:
        settings.logging.json_format = True
    settings.dry_run = settings.dry_run or dry_run

    for name, value in (
        ("--tcp-timeout", settings.prober.tcp_timeout),
        ("--udp-timeout", settings.prober.udp_timeout),
    ):
        if value <= 0:
            err_console.print(f"[red]Error: {name} must be greater than 0[/red]")
            raise typer.Exit(EXIT_FATAL)

    configure_logging(
        level=settings.logging.level,
        json_format=settings.logging.json_format,
        log_file=settings.logging.log_file,
    )

    targets = _load_targets(settings, targets_file)

    if settings.dry_run:
        console.print("[yellow]DRY RUN - Targets that would be probed:[/yellow]")
        for target in targets:
            console.print(
                escape(
                    f"  • {target.hostname} on port {target.port} "
                    f"({target.protocol}) - {target.description}"
                )
            )
        return

    reporter = ConsoleReporter(console)
    if settings.output.clear_screen:
        reporter.clear()

    try:
        report = ProbeRunOrchestrator(settings).run(targets, reporter=reporter)
    except KeyboardInterrupt:
        console.print()
        err_console.print("[yellow]Interrupted[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED)
    except EdgeProberError as e:
        console.print()
        err_console.print(f"[red]Fatal: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_FATAL)

    if settings.output.json_output:
        try:
            path = save_json_report(report, settings.output.json_output)
        except OSError as e:
            err_console.print(f"[red]Error: could not write JSON report: {escape(str(e))}[/red]")
            raise typer.Exit(EXIT_FATAL)
        console.print(f"[green]✓ JSON report written to {escape(str(path))}[/green]")

    code = report.exit_code(strict=settings.output.strict)
    if code:
        raise typer.Exit(code)


@app.command()
def targets(
    targets_file: Optional[Path] = typer.Option(
        None, "--targets", help="YAML or comma-separated file of targets"
    ),
    config: Optional[Path] = typer.Option(None, help="Path to configuration file"),
) -> None:
    """List the targets a run would probe."""
    settings = _load_settings(config)
    configure_logging(
        level=settings.logging.level,
        json_format=settings.logging.json_format,
        log_file=settings.logging.log_file,
    )
    target_list = _load_targets(settings, targets_file)

    table = Table(title="Probe Targets")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Hostname", style="cyan")
    table.add_column("Port", justify="right")
    table.add_column("Protocol")
    table.add_column("Description")

    for index, target in enumerate(target_list, start=1):
        table.add_row(
            str(index),
            escape(target.hostname),
            str(target.port),
            escape(target.protocol),
            escape(target.description),
        )

    console.print(table)
    console.print(Panel.fit(f"{len(target_list)} targets", border_style="dim"))


if __name__ == "__main__":
    app()
