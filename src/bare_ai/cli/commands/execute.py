"""bare-ai exec -- run one command behind the confirmation gate."""

from __future__ import annotations

import click


@click.command(name="exec")
@click.argument("command")
@click.option("-d", "--description", default=None, help="What the command is for (defaults to the command).")
@click.pass_context
def execute(ctx: click.Context, command: str, description: str | None) -> None:
    """Propose COMMAND, run it on approval, and record the outcome.

    Exits 0 only if the command ran and succeeded, so the result can be
    chained in scripts.
    """
    from bare_ai.cli import _cli_session, _get_config, _make_executor
    from bare_ai.models.action import ProposedAction

    config = _get_config(ctx)
    with _cli_session(ctx) as console:
        executor = _make_executor(config, console)
        ok = executor.execute(ProposedAction(command=command, description=description or command))
    if not ok:
        raise SystemExit(1)
