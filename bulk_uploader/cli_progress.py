"""Console rendering helpers for the bulk-up CLI."""
from __future__ import annotations

from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import RunResult, UploadResult

console = Console()
error_console = Console(stderr=True)


def _echo(message: str, target: Optional[Console] = None) -> None:
    (target or console).print(message, soft_wrap=True, highlight=False)


def render_configuration_summary(config: Dict[str, Any], target: Optional[Console] = None) -> None:
    """Render startup configuration summary."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else str(value)
        table.add_row(key, escape(rendered))

    panel = Panel(
        table,
        title="[bold green]bulk-up[/bold green]",
        subtitle="[dim]S3 folder upload[/dim]",
        border_style="blue",
    )
    (target or console).print(panel)


def print_error(message: str) -> None:
    """Print a fatal CLI error on stderr."""
    _echo(f"[bold red]ERROR:[/bold red] {escape(message)}", error_console)


class RunProgressDisplay:
    """
    Event-based console output for an upload run.

    One line per uploaded file as it completes, then one line per failure
    once the run is drained, then a completion marker.
    """

    def __init__(self, target: Optional[Console] = None):
        self._console = target or console

    def on_file_complete(self, result: UploadResult) -> None:
        _echo(f"[green]File successfully uploaded:[/green] {escape(result.key or '')}", self._console)

    def on_failure_report(self, result: UploadResult) -> None:
        # error already names the file path
        _echo(f"[red]Error:[/red] {escape(result.error or result.path)}", self._console)

    def on_finish(self, run_result: RunResult) -> None:
        _echo("[bold]Upload completed.[/bold]", self._console)
        status = "[green]ok[/green]" if run_result.success else "[red]incomplete[/red]"
        cancelled = " (cancelled)" if run_result.cancelled else ""
        _echo(
            f"[dim]uploaded={run_result.uploaded_files} failed={run_result.failed_files} "
            f"total={run_result.total_files}[/dim] {status}{cancelled}",
            self._console,
        )

    def attach(self, orchestrator: Any) -> "RunProgressDisplay":
        """Subscribe this display to an orchestrator's events."""
        orchestrator.on_file_complete(self.on_file_complete)
        orchestrator.on_failure_report(self.on_failure_report)
        orchestrator.on_finish(self.on_finish)
        return self
