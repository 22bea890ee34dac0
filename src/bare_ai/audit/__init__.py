"""Append-only audit log: one JSON record per gated action."""

from bare_ai.audit.writer import AuditLogWriter, read_audit_log, record_filename

__all__ = ["AuditLogWriter", "read_audit_log", "record_filename"]
