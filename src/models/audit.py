"""
Audit Models for the Ledger

Every user action and every storage anomaly is recorded as an audit event.
This provides:
1. Traceability of every change to the entry collection
2. Debugging information when storage data is malformed
3. A readable history for the "Activity" panel

DESIGN DECISION: Audit events are append-only and never persisted with the
entries. The entry slot holds exactly the entry array and nothing else.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    One event type per user action, plus storage anomalies.
    """
    # Entry lifecycle
    ENTRY_ADDED = "entry_added"
    ENTRY_UPDATED = "entry_updated"
    ENTRY_DELETED = "entry_deleted"
    UPDATE_TARGET_MISSING = "update_target_missing"

    # Delete confirmation
    DELETE_REQUESTED = "delete_requested"
    DELETE_DECLINED = "delete_declined"

    # Inline editing
    EDIT_STARTED = "edit_started"
    EDIT_CANCELLED = "edit_cancelled"

    # Input validation
    VALIDATION_FAILED = "validation_failed"

    # View
    FILTER_CHANGED = "filter_changed"
    FORM_RESET = "form_reset"

    # Storage
    STORAGE_LOADED = "storage_loaded"
    STORAGE_READ_RECOVERED = "storage_read_recovered"
    STORAGE_RECORD_SKIPPED = "storage_record_skipped"
    STORAGE_WRITE_FAILED = "storage_write_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which entry is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'entry', 'storage', 'view')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one browser session)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entry_added(entry_id, "expense", "1500.00")
        event = AuditEventBuilder.delete_declined(entry_id)
    """

    @staticmethod
    def entry_added(
        entry_id: str,
        entry_type: str,
        amount: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"Entry added: {entry_type} ₹{amount}",
            details={
                "type": entry_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def entry_updated(
        entry_id: str,
        changes: dict[str, Any],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_UPDATED,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"Entry updated ({len(changes)} field(s) changed)",
            details={
                "changes": changes,
            },
            is_user_action=True,
        )

    @staticmethod
    def update_target_missing(
        entry_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UPDATE_TARGET_MISSING,
            severity=AuditSeverity.DEBUG,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description="Edit saved for an entry that no longer exists",
        )

    @staticmethod
    def entry_deleted(
        entry_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description="Entry deleted",
            is_user_action=True,
        )

    @staticmethod
    def delete_requested(
        entry_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_REQUESTED,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description="Delete confirmation requested",
            is_user_action=True,
        )

    @staticmethod
    def delete_declined(
        entry_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_DECLINED,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description="User declined to delete entry",
            is_user_action=True,
        )

    @staticmethod
    def edit_started(
        entry_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_STARTED,
            severity=AuditSeverity.DEBUG,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description="Inline edit started",
            is_user_action=True,
        )

    @staticmethod
    def edit_cancelled(
        entry_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_CANCELLED,
            severity=AuditSeverity.DEBUG,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description="Inline edit cancelled",
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        action: str,
        code: str,
        message: str,
        entry_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"{action.capitalize()} rejected: {message}",
            details={
                "action": action,
            },
            error_code=code,
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def filter_changed(
        previous: str,
        current: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_CHANGED,
            severity=AuditSeverity.DEBUG,
            entity_type="view",
            correlation_id=correlation_id,
            description=f"Filter changed: {previous} -> {current}",
            details={
                "previous": previous,
                "current": current,
            },
            is_user_action=True,
        )

    @staticmethod
    def form_reset(
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FORM_RESET,
            severity=AuditSeverity.DEBUG,
            entity_type="view",
            correlation_id=correlation_id,
            description="Create form reset",
            is_user_action=True,
        )

    @staticmethod
    def storage_loaded(
        key: str,
        entry_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOADED,
            entity_type="storage",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Loaded {entry_count} entries",
            details={
                "entry_count": entry_count,
            },
        )

    @staticmethod
    def storage_read_recovered(
        key: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_READ_RECOVERED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            correlation_id=correlation_id,
            description="Stored entries unreadable, starting empty",
            error_message=reason,
        )

    @staticmethod
    def storage_record_skipped(
        key: str,
        index: int,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Stored record #{index} skipped",
            details={
                "index": index,
            },
            error_message=reason,
        )

    @staticmethod
    def storage_write_failed(
        key: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            correlation_id=correlation_id,
            description="Saving entries failed",
            error_message=error_message,
        )
