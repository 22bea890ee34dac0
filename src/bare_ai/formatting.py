"""Console output helpers shared by the executor, workflow, and CLI.

All functions print to a rich Console. Message text is escaped so command
strings containing square brackets are shown literally rather than parsed
as markup. Rich drops colors on its own when output is not a TTY.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from bare_ai.models.action import ProposedAction


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_proposed_action(action: ProposedAction, console: Console) -> None:
    """Display the disclosure block shown before every gated command."""
    console.print()
    console.print("[yellow]Proposed Action:[/yellow]")
    console.print(f"  Description: {escape(action.description)}", highlight=False)
    console.print(f"  Command: {escape(action.command)}", highlight=False)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def format_warning(message: str, console: Console) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False)


def format_success(message: str, console: Console) -> None:
    console.print(f"[green]{escape(message)}[/green]", highlight=False)


def format_info(message: str, console: Console) -> None:
    console.print(escape(message), highlight=False)
