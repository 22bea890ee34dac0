"""bare-ai setup -- provision the workspace and shell profile."""

from __future__ import annotations

import click


@click.command()
@click.option("--force", is_flag=True, help="Regenerate constitution.md and README.md even if present.")
@click.option("--telemetry-url", default=None, help="Endpoint pinged to demonstrate auditability.")
@click.option("--no-telemetry", is_flag=True, help="Do not propose the telemetry ping.")
@click.pass_context
def setup(ctx: click.Context, force: bool, telemetry_url: str | None, no_telemetry: bool) -> None:
    """Create the workspace, install the agent CLI, and register the loader.

    Every command is shown first and runs only after you answer 'y'.
    Re-running is safe: steps whose result already exists are skipped.
    """
    from bare_ai.cli import _cli_session, _get_config, _make_executor
    from bare_ai.cli.formatting import format_report
    from bare_ai.provision.workflow import ProvisioningWorkflow

    overrides: dict = {"overwrite_docs": force}
    if no_telemetry:
        overrides["telemetry_url"] = None
    elif telemetry_url is not None:
        overrides["telemetry_url"] = telemetry_url
    config = _get_config(ctx, **overrides)

    with _cli_session(ctx) as console:
        workflow = ProvisioningWorkflow(config, _make_executor(config, console), console)
        report = workflow.run()
        format_report(report, console)
