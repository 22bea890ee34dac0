"""bare-ai history -- show the audit log."""

from __future__ import annotations

import click


@click.command()
@click.option("-n", "--limit", default=20, type=int, help="Maximum number of records to show.")
@click.pass_context
def history(ctx: click.Context, limit: int) -> None:
    """Show the most recent audit records, oldest first."""
    from bare_ai.audit.writer import read_audit_log
    from bare_ai.cli import _cli_session, _get_config
    from bare_ai.cli.formatting import format_history

    config = _get_config(ctx)
    with _cli_session(ctx) as console:
        format_history(read_audit_log(config.log_dir, limit=limit), console)
