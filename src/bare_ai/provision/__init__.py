"""Idempotent provisioning of a bare-ai workspace and shell profile."""

from bare_ai.provision.launcher import launch_agent, prepare_session
from bare_ai.provision.workflow import (
    ProvisioningReport,
    ProvisioningWorkflow,
    StepOutcome,
    file_contains,
    write_file_command,
)

__all__ = [
    "ProvisioningReport",
    "ProvisioningWorkflow",
    "StepOutcome",
    "file_contains",
    "launch_agent",
    "prepare_session",
    "write_file_command",
]
