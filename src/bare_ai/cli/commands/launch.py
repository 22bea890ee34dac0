"""bare-ai launch -- start the agent with today's constitution."""

from __future__ import annotations

import os

import click


@click.command()
@click.pass_context
def launch(ctx: click.Context) -> None:
    """Start the agent CLI, the same way the 'bare' shell function does.

    Creates today's diary file, fills the date into the constitution, and
    hands it to the agent CLI as its initial instruction.
    """
    from bare_ai.cli import _cli_session, _get_config
    from bare_ai.formatting import format_warning
    from bare_ai.provision.launcher import API_KEY_VAR, launch_agent

    config = _get_config(ctx)
    with _cli_session(ctx) as console:
        if not os.environ.get(API_KEY_VAR):
            format_warning(f"{API_KEY_VAR} is not set. Add it to {config.bashrc_path}.", console)
        returncode = launch_agent(config)
    raise SystemExit(returncode)
