"""Audit log writer and reader.

Each record lives in its own file under the log directory, named from the
capture time down to the millisecond (``20250101_120000_123.log``). When
that name is already taken a numeric suffix is appended, so sorting the
filenames gives chronological order and no record ever replaces another.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from bare_ai.exceptions import AuditWriteError
from bare_ai.models.action import AuditRecord

logger = logging.getLogger(__name__)

LOG_SUFFIX = ".log"
_MAX_COLLISIONS = 1000


def record_filename(captured_at: datetime, attempt: int = 0) -> str:
    """Return the log filename for a record captured at *captured_at*.

    ``attempt`` > 0 adds a disambiguating suffix for records that share
    the same millisecond.
    """
    stem = f"{captured_at:%Y%m%d_%H%M%S}_{captured_at.microsecond // 1000:03d}"
    if attempt:
        stem = f"{stem}_{attempt:03d}"
    return stem + LOG_SUFFIX


class AuditLogWriter:
    """Writes AuditRecords into a directory, one file each.

    The directory is created on first write.
    """

    def __init__(self, log_dir: Path) -> None:
        self.log_dir = Path(log_dir)

    def write(self, record: AuditRecord) -> Path:
        """Persist *record* and return the path written.

        Raises:
            AuditWriteError: If the directory or file cannot be created.
        """
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AuditWriteError(self.log_dir, exc.strerror or str(exc)) from exc

        try:
            payload = record.to_json() + "\n"
        except (TypeError, ValueError) as exc:
            raise AuditWriteError(self.log_dir, f"record is not serializable: {exc}") from exc
        captured_at = record.captured_at
        for attempt in range(_MAX_COLLISIONS):
            path = self.log_dir / record_filename(captured_at, attempt)
            try:
                with path.open("x", encoding="utf-8") as fh:
                    fh.write(payload)
            except FileExistsError:
                continue
            except OSError as exc:
                raise AuditWriteError(path, exc.strerror or str(exc)) from exc
            logger.debug("Audit record %s written to %s", record.status, path)
            return path

        raise AuditWriteError(
            self.log_dir / record_filename(captured_at),
            f"more than {_MAX_COLLISIONS} records share this timestamp",
        )


def read_audit_log(log_dir: Path, limit: int | None = None) -> list[AuditRecord]:
    """Load every audit record under *log_dir* in chronological order.

    Files that do not parse as records are skipped with a warning. With
    *limit*, only the newest ``limit`` records are returned.
    """
    log_dir = Path(log_dir)
    if not log_dir.is_dir():
        return []

    records: list[AuditRecord] = []
    for path in sorted(log_dir.glob(f"*{LOG_SUFFIX}")):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            records.append(AuditRecord.model_validate(data))
        except (OSError, ValueError) as exc:
            logger.warning("Skipping unreadable audit record %s: %s", path, exc)

    if limit is not None:
        records = records[-limit:] if limit > 0 else []
    return records
