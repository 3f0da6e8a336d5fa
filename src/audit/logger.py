"""
Audit Logger

DESIGN DECISION: Every user action and storage anomaly is logged.
This provides:
1. Complete traceability of changes to the ledger
2. Debugging capability when stored data is malformed
3. A short in-memory history the UI can show

The audit logger:
- Is synchronous, like everything else in the ledger
- Never raises: a logging failure must not abort a user action
- Supports correlation IDs to trace one session's events
"""

import logging
import sys
from collections import deque
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output through the stdlib root logger at `level`.

    Safe to call more than once; the last level wins.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. A bounded in-memory history (for the UI and tests)
    """

    def __init__(
        self,
        history_size: int = 200,
        correlation_id: Optional[UUID] = None,
    ):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep. 0 disables history.
            correlation_id: Attached to every event this logger builds.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._correlation_id = correlation_id
        self._logger = structlog.get_logger("ledger.audit")

    @property
    def correlation_id(self) -> Optional[UUID]:
        return self._correlation_id

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        log_dict = event.to_log_dict()

        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Never let logging break the action being logged
            sys.stderr.write(f"audit logging failed: {e}\n")

        if self._history.maxlen:
            self._history.append(event)

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._history))
        if limit is not None:
            return events[:limit]
        return events

    def log_entry_added(self, entry_id: str, entry_type: str, amount: str) -> None:
        self.log(AuditEventBuilder.entry_added(
            entry_id=entry_id,
            entry_type=entry_type,
            amount=amount,
            correlation_id=self._correlation_id,
        ))

    def log_entry_updated(self, entry_id: str, changes: dict[str, Any]) -> None:
        self.log(AuditEventBuilder.entry_updated(
            entry_id=entry_id,
            changes=changes,
            correlation_id=self._correlation_id,
        ))

    def log_update_target_missing(self, entry_id: str) -> None:
        self.log(AuditEventBuilder.update_target_missing(
            entry_id=entry_id,
            correlation_id=self._correlation_id,
        ))

    def log_entry_deleted(self, entry_id: str) -> None:
        self.log(AuditEventBuilder.entry_deleted(
            entry_id=entry_id,
            correlation_id=self._correlation_id,
        ))

    def log_delete_requested(self, entry_id: str) -> None:
        self.log(AuditEventBuilder.delete_requested(
            entry_id=entry_id,
            correlation_id=self._correlation_id,
        ))

    def log_delete_declined(self, entry_id: str) -> None:
        self.log(AuditEventBuilder.delete_declined(
            entry_id=entry_id,
            correlation_id=self._correlation_id,
        ))

    def log_edit_started(self, entry_id: str) -> None:
        self.log(AuditEventBuilder.edit_started(
            entry_id=entry_id,
            correlation_id=self._correlation_id,
        ))

    def log_edit_cancelled(self, entry_id: str) -> None:
        self.log(AuditEventBuilder.edit_cancelled(
            entry_id=entry_id,
            correlation_id=self._correlation_id,
        ))

    def log_validation_failed(
        self,
        action: str,
        code: str,
        message: str,
        entry_id: Optional[str] = None,
    ) -> None:
        """Log a rejected add or edit."""
        self.log(AuditEventBuilder.validation_failed(
            action=action,
            code=code,
            message=message,
            entry_id=entry_id,
            correlation_id=self._correlation_id,
        ))

    def log_filter_changed(self, previous: str, current: str) -> None:
        self.log(AuditEventBuilder.filter_changed(
            previous=previous,
            current=current,
            correlation_id=self._correlation_id,
        ))

    def log_form_reset(self) -> None:
        self.log(AuditEventBuilder.form_reset(
            correlation_id=self._correlation_id,
        ))

    def log_storage_loaded(self, key: str, entry_count: int) -> None:
        self.log(AuditEventBuilder.storage_loaded(
            key=key,
            entry_count=entry_count,
            correlation_id=self._correlation_id,
        ))

    def log_storage_read_recovered(self, key: str, reason: str) -> None:
        """Log that unreadable stored data was replaced by an empty ledger."""
        self.log(AuditEventBuilder.storage_read_recovered(
            key=key,
            reason=reason,
            correlation_id=self._correlation_id,
        ))

    def log_storage_record_skipped(self, key: str, index: int, reason: str) -> None:
        self.log(AuditEventBuilder.storage_record_skipped(
            key=key,
            index=index,
            reason=reason,
            correlation_id=self._correlation_id,
        ))

    def log_storage_write_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_write_failed(
            key=key,
            error_message=error_message,
            correlation_id=self._correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per browser session.
    """
    return uuid4()
