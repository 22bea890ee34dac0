"""bare-ai: bootstrap a local agent workspace behind a human-in-the-loop gate.

Every command that touches the host is shown to the operator, runs only
on an explicit ``y``, and leaves one JSON audit record behind.
"""

from bare_ai._version import __version__

from bare_ai.audit import AuditLogWriter, read_audit_log
from bare_ai.exceptions import (
    AuditWriteError,
    BareAIError,
    DependencyMissingError,
    ProvisioningError,
    WorkspaceNotReadyError,
)
from bare_ai.executor import GatedExecutor, HostShell, ShellRunner
from bare_ai.models import ActionStatus, AuditRecord, ProposedAction, WorkspaceConfig
from bare_ai.provision import ProvisioningReport, ProvisioningWorkflow, StepOutcome

__all__ = [
    "__version__",
    "ActionStatus",
    "AuditLogWriter",
    "AuditRecord",
    "AuditWriteError",
    "BareAIError",
    "DependencyMissingError",
    "GatedExecutor",
    "HostShell",
    "ProposedAction",
    "ProvisioningError",
    "ProvisioningReport",
    "ProvisioningWorkflow",
    "ShellRunner",
    "StepOutcome",
    "WorkspaceConfig",
    "WorkspaceNotReadyError",
    "read_audit_log",
]
