"""Data models for bare-ai: proposed actions, audit records, configuration."""

from bare_ai.models.action import ActionStatus, AuditRecord, ProposedAction
from bare_ai.models.config import WorkspaceConfig

__all__ = [
    "ActionStatus",
    "AuditRecord",
    "ProposedAction",
    "WorkspaceConfig",
]
