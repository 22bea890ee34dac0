"""bare-ai CLI -- terminal interface for provisioning and gated execution.

This module is NEVER imported from bare_ai/__init__.py.
It is only loaded via the ``bare-ai`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click

from bare_ai.formatting import format_error, get_console
from bare_ai.models.config import DEFAULT_BASHRC, DEFAULT_MODEL, DEFAULT_WORKSPACE, WorkspaceConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from bare_ai.executor.gate import GatedExecutor


@click.group()
@click.option(
    "--workspace",
    default=DEFAULT_WORKSPACE,
    envvar="BARE_AI_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    help="BARE-AI configuration directory.",
)
@click.option(
    "--bashrc",
    default=DEFAULT_BASHRC,
    envvar="BARE_AI_BASHRC",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Shell profile that receives the loader function.",
)
@click.option(
    "--model",
    default=DEFAULT_MODEL,
    envvar="BARE_AI_MODEL",
    help="Model the agent CLI is started with.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, workspace: Path, bashrc: Path, model: str, verbose: bool) -> None:
    """BARE-AI: set up and audit a local agent workspace."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = WorkspaceConfig(
        workspace_dir=workspace, bashrc_path=bashrc, model=model
    )


def _get_config(ctx: click.Context, **overrides: object) -> WorkspaceConfig:
    """Return the group's WorkspaceConfig, with *overrides* applied."""
    config: WorkspaceConfig = ctx.obj["config"]
    if overrides:
        config = config.model_copy(update=overrides)
    return config


def _make_executor(config: WorkspaceConfig, console: Console) -> GatedExecutor:
    from bare_ai.audit.writer import AuditLogWriter
    from bare_ai.executor.gate import GatedExecutor

    return GatedExecutor(console, AuditLogWriter(config.log_dir))


@contextmanager
def _cli_session(ctx: click.Context) -> Iterator[Console]:
    """Yield a console and turn bare-ai errors into a formatted exit 1.

    ProvisioningError hints are printed beneath the error line.
    """
    from bare_ai.exceptions import BareAIError, ProvisioningError
    from bare_ai.formatting import format_warning

    console = get_console()
    try:
        yield console
    except SystemExit:
        raise
    except BareAIError as e:
        format_error(str(e), console)
        if isinstance(e, ProvisioningError):
            for hint in e.hints:
                format_warning(hint, console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from bare_ai.cli.commands.setup import setup  # noqa: E402
from bare_ai.cli.commands.execute import execute  # noqa: E402
from bare_ai.cli.commands.history import history  # noqa: E402
from bare_ai.cli.commands.launch import launch  # noqa: E402

cli.add_command(setup)
cli.add_command(execute)
cli.add_command(history)
cli.add_command(launch)
