"""GatedExecutor: human-in-the-loop command execution with an audit trail.

Every call to :meth:`GatedExecutor.run` shows the proposed action, waits
for the operator, runs or skips the command, and writes exactly one
:class:`~bare_ai.models.action.AuditRecord`. Failures are reported and
returned, never raised; callers decide whether a failure is fatal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from rich.markup import escape

from bare_ai.formatting import format_error, format_proposed_action, format_warning
from bare_ai.executor.shell import EXIT_NOT_RUNNABLE, HostShell
from bare_ai.models.action import ActionStatus, AuditRecord

if TYPE_CHECKING:
    from rich.console import Console

    from bare_ai.audit.writer import AuditLogWriter
    from bare_ai.executor.shell import ShellRunner
    from bare_ai.models.action import ProposedAction

logger = logging.getLogger(__name__)

CONFIRM_PROMPT = "Execute this command? (y/N): "

# Exit status shells report for a child stopped by Ctrl-C.
EXIT_INTERRUPTED = 130


def _local_now() -> datetime:
    return datetime.now().astimezone()


def is_affirmative(response: str | None) -> bool:
    """Return True only for an explicit ``y`` (any case).

    Empty, missing, or anything else declines.
    """
    if response is None:
        return False
    return response.strip().lower() == "y"


class GatedExecutor:
    """Asks before running each shell command and audits the outcome.

    Usage::

        executor = GatedExecutor(console, AuditLogWriter(log_dir))
        ok = executor.execute(ProposedAction("mkdir -p /tmp/x", "Create scratch dir"))

    Args:
        console: Rich console used for the disclosure block and notices.
        audit: Writer that persists one record per action.
        prompt_fn: Reads one line of operator input. Defaults to
            ``console.input``, which blocks indefinitely.
        shell: Runs approved commands. Defaults to :class:`HostShell`.
        clock: Returns the timezone-aware capture time for records.
    """

    def __init__(
        self,
        console: Console,
        audit: AuditLogWriter,
        *,
        prompt_fn: Callable[[str], str] | None = None,
        shell: ShellRunner | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._console = console
        self._audit = audit
        self._prompt_fn = prompt_fn or console.input
        self._shell = shell or HostShell()
        self._clock = clock or _local_now

    def execute(self, action: ProposedAction) -> bool:
        """Run *action* behind the confirmation gate.

        Returns:
            True if the command ran and exited 0; False if it failed or
            the operator declined.

        Raises:
            AuditWriteError: If the audit record could not be written.
        """
        return self.run(action).status is ActionStatus.SUCCESS

    def run(self, action: ProposedAction) -> AuditRecord:
        """Like :meth:`execute` but returns the full audit record."""
        format_proposed_action(action, self._console)
        approved = self._confirm()

        if not approved:
            format_warning(f"Skipping command: {action.command}", self._console)
            return self._record(action, ActionStatus.SKIPPED, None)

        self._console.print(f"[green]Executing:[/green] {escape(action.command)}", highlight=False)
        try:
            exit_code = self._shell.run(action.command)
        except KeyboardInterrupt:
            self._record(action, ActionStatus.FAILED, EXIT_INTERRUPTED)
            raise
        except Exception:
            logger.debug("Shell runner raised for %r", action.command, exc_info=True)
            self._record(action, ActionStatus.FAILED, EXIT_NOT_RUNNABLE)
            raise

        status = ActionStatus.SUCCESS if exit_code == 0 else ActionStatus.FAILED
        if status is ActionStatus.FAILED:
            format_error(
                f"Command failed with exit code {exit_code}: {action.command}",
                self._console,
            )
        return self._record(action, status, exit_code)

    def _confirm(self) -> bool:
        try:
            response = self._prompt_fn(CONFIRM_PROMPT)
        except (EOFError, KeyboardInterrupt):
            response = None
        self._console.print()
        return is_affirmative(response)

    def _record(
        self, action: ProposedAction, status: ActionStatus, exit_code: int | None
    ) -> AuditRecord:
        record = AuditRecord.capture(action, status, exit_code, self._clock())
        self._audit.write(record)
        logger.info(
            "Action %r finished: status=%s exit_code=%s",
            action.description,
            record.status,
            record.exit_code,
        )
        return record
