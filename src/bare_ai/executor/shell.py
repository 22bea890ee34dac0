"""The single point where command strings reach the host shell."""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Exit status POSIX shells report when a command cannot be found or run.
EXIT_NOT_RUNNABLE = 127


@runtime_checkable
class ShellRunner(Protocol):
    """Runs a command string and returns its exit code."""

    def run(self, command: str) -> int: ...


class HostShell:
    """Runs commands with ``/bin/sh -c``.

    The child inherits the environment and stdio, so its output streams
    straight to the operator. Shell metacharacters in *command* expand.
    """

    def run(self, command: str) -> int:
        logger.debug("Running via host shell: %s", command)
        try:
            completed = subprocess.run(command, shell=True, check=False)
        except (OSError, ValueError) as exc:
            logger.warning("Could not start host shell for %r: %s", command, exc)
            return EXIT_NOT_RUNNABLE
        return completed.returncode
