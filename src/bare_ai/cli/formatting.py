"""Rich formatting helpers for the bare-ai CLI.

Provides functions that format audit records and provisioning reports for
terminal display. Rich auto-detects TTY and degrades gracefully when piped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from bare_ai.models.action import AuditRecord
    from bare_ai.provision.workflow import ProvisioningReport

_STATUS_STYLES = {
    "success": "green",
    "failed": "red",
    "skipped": "yellow",
}


def format_history(records: list[AuditRecord], console: Console) -> None:
    """Display audit records in a compact table, oldest first."""
    if not records:
        console.print("[dim]No audit records.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Time", style="dim")
    table.add_column("Status")
    table.add_column("Exit", justify="right")
    table.add_column("Description")
    table.add_column("Command", style="cyan")

    for record in records:
        style = _STATUS_STYLES.get(record.status.value, "")
        exit_code = "-" if record.exit_code is None else str(record.exit_code)
        table.add_row(
            record.captured_at.strftime("%Y-%m-%d %H:%M:%S"),
            f"[{style}]{record.status.value}[/{style}]",
            exit_code,
            escape(record.description),
            escape(record.command),
        )

    console.print(table)


def format_report(report: ProvisioningReport, console: Console) -> None:
    """Display the per-step outcome of a provisioning run."""
    console.print()
    console.print("[bold]Setup summary:[/bold]")
    for name, outcome in report.steps:
        color = {"done": "green", "failed": "red", "skipped": "yellow", "warning": "yellow"}.get(outcome.value, "dim")
        console.print(f"  {name:<14} [{color}]{outcome.value}[/{color}]")
