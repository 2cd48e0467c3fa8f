"""
Audit Logger

Every user operation on the tracker is logged through this module, both
successful changes and rejected input or storage failures.

The audit logger:
- Writes structured (JSON) records through structlog
- Never raises: a failing log call must not undo a user operation
- Keeps the last events in memory so the UI can show recent activity
"""

import logging
from collections import deque
from typing import Optional

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditEventType


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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog) to stderr at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log and keeps the most recent
    ones in memory.
    """

    def __init__(self, history_size: int = 200):
        self._logger = get_logger("finance_tracker.audit")
        self._recent: deque[AuditEvent] = deque(maxlen=history_size)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._recent.append(event)
        log_dict = event.to_log_dict()
        try:
            if event.severity.value == "error":
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            logging.getLogger(__name__).warning("Failed to write audit event: %s", e)

    def recent_events(self, limit: int = 20) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._recent))[:limit]

    def log_record_changed(
        self,
        event_type: AuditEventType,
        entity_type: str,
        entity_id,
        description: str,
        details: Optional[dict] = None,
    ) -> None:
        self.log(AuditEventBuilder.record_changed(
            event_type, entity_type, entity_id, description, details
        ))

    def log_transaction_added(self, transaction_id: int, type_: str, category: str, amount: str) -> None:
        self.log(AuditEventBuilder.transaction_added(transaction_id, type_, category, amount))

    def log_budget_spent_changed(self, category: str, old_spent: str, new_spent: str) -> None:
        self.log(AuditEventBuilder.budget_spent_changed(category, old_spent, new_spent))

    def log_reminder_notified(self, reminder_id: Optional[int], description: str) -> None:
        self.log(AuditEventBuilder.reminder_notified(reminder_id, description))

    def log_bulk_operation(
        self,
        event_type: AuditEventType,
        counts: dict[str, int],
        path: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.bulk_operation(event_type, counts, path))

    def log_validation_failed(self, operation: str, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(operation, issues))

    def log_storage_error(self, operation: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(operation, error_message))

    def log_file_error(self, operation: str, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.file_error(operation, path, error_message))
