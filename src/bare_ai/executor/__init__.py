"""Gated command execution: confirm, run through the host shell, audit."""

from bare_ai.executor.gate import GatedExecutor, is_affirmative
from bare_ai.executor.shell import HostShell, ShellRunner

__all__ = ["GatedExecutor", "HostShell", "ShellRunner", "is_affirmative"]
