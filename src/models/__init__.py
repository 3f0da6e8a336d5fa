"""
Data Models Package

This package contains all Pydantic models used by the ledger.
All data flowing through the system must conform to these schemas.
"""

from src.models.entry import (
    Entry,
    EntryDraft,
    EntryFilter,
    EntryForm,
    EntryType,
    RawEntryRecord,
    Totals,
    ValidationErrorCode,
    MAX_AMOUNT,
    coerce_amount,
    coerce_number,
    new_entry_id,
    now_millis,
    round_amount,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Entry models
    "Entry",
    "EntryDraft",
    "EntryFilter",
    "EntryForm",
    "EntryType",
    "RawEntryRecord",
    "Totals",
    "ValidationErrorCode",
    "MAX_AMOUNT",
    "coerce_amount",
    "coerce_number",
    "new_entry_id",
    "now_millis",
    "round_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
