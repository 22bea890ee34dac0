"""Action and audit record models.

ProposedAction is the unit of work handed to the gated executor.
AuditRecord is the persisted outcome of one attempt at that work.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class ProposedAction:
    """A shell command awaiting operator approval.

    Attributes:
        command: Literal text passed to the host shell on approval.
        description: Human-readable intent, shown to the operator and
            never executed.
    """

    command: str
    description: str


class ActionStatus(str, enum.Enum):
    """Outcome of a gated action."""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"

    def __str__(self) -> str:
        return self.value


class AuditRecord(BaseModel):
    """One append-only audit entry.

    Field declaration order is the serialized key order.
    """

    model_config = {"frozen": True}

    timestamp: str
    command: str
    description: str
    status: ActionStatus
    exit_code: Optional[int] = None

    @classmethod
    def capture(
        cls,
        action: ProposedAction,
        status: ActionStatus,
        exit_code: int | None,
        captured_at: datetime,
    ) -> AuditRecord:
        """Build a record for *action* stamped with *captured_at*.

        Skipped actions never carry an exit code. A naive *captured_at* is
        taken as local time.
        """
        if captured_at.tzinfo is None:
            captured_at = captured_at.astimezone()
        if status is ActionStatus.SKIPPED:
            exit_code = None
        return cls(
            timestamp=captured_at.isoformat(timespec="milliseconds"),
            command=action.command,
            description=action.description,
            status=status,
            exit_code=exit_code,
        )

    @property
    def captured_at(self) -> datetime:
        return datetime.fromisoformat(self.timestamp)

    def to_json(self) -> str:
        """Serialize as a single-line, ASCII-only JSON object.

        Lone surrogates (undecodable bytes from argv) are written as
        ``\\udcXX`` escapes rather than rejected.
        """
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data["status"] = self.status.value
        return json.dumps(data, ensure_ascii=True)
