"""bare-ai exception hierarchy.

All bare-ai specific exceptions inherit from BareAIError.
A declined or failed gated command is never an exception; the executor
reports those through its return value.
"""

from __future__ import annotations

from pathlib import Path


class BareAIError(Exception):
    """Base exception for all bare-ai errors."""


class AuditWriteError(BareAIError):
    """Raised when an audit record cannot be persisted.

    Always propagated to the caller, never logged and ignored.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write audit record to {path}: {reason}")


class ProvisioningError(BareAIError):
    """Raised when a step that later steps depend on did not complete."""

    def __init__(self, step: str, message: str, hints: list[str] | None = None) -> None:
        self.step = step
        self.hints = list(hints or [])
        super().__init__(message)


class DependencyMissingError(ProvisioningError):
    """Raised when a required external program is not on PATH."""

    def __init__(self, step: str, program: str, hints: list[str] | None = None) -> None:
        self.program = program
        super().__init__(step, f"{program} not found on PATH.", hints)


class WorkspaceNotReadyError(BareAIError):
    """Raised when the agent is launched before the workspace is provisioned."""

    def __init__(self, missing: Path) -> None:
        self.missing = missing
        super().__init__(
            f"Constitution file not found at {missing}. Run 'bare-ai setup' first."
        )
