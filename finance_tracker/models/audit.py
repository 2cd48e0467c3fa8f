"""
Audit Models for the Finance Tracker

Every user operation and every notification produces an audit event.
Events are written to the structured local log only; they are not part
of the persisted records.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"

    # Budgets
    BUDGET_SET = "budget_set"
    BUDGET_UPDATED = "budget_updated"
    BUDGET_DELETED = "budget_deleted"
    BUDGET_SPENT_CHANGED = "budget_spent_changed"

    # Reminders
    REMINDER_ADDED = "reminder_added"
    REMINDER_UPDATED = "reminder_updated"
    REMINDER_PAID = "reminder_paid"
    REMINDER_DELETED = "reminder_deleted"
    REMINDER_NOTIFIED = "reminder_notified"

    # Categories
    CATEGORY_ADDED = "category_added"
    CATEGORY_REMOVED = "category_removed"

    # Persistence and files
    DATA_SAVED = "data_saved"
    DATA_LOADED = "data_loaded"
    CSV_EXPORTED = "csv_exported"
    CSV_IMPORTED = "csv_imported"
    REPORT_EXPORTED = "report_exported"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    STORAGE_ERROR = "storage_error"
    FILE_ERROR = "file_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # What record is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of record (e.g., 'transaction', 'budget', 'reminder')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Identity of the record (id, or category name for budgets)"
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
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction)
        event = AuditEventBuilder.storage_error("save", str(exc))
    """

    @staticmethod
    def record_changed(
        event_type: AuditEventType,
        entity_type: str,
        entity_id: Optional[Any],
        description: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            description=description[:500],
            details=details or {},
            is_user_action=True,
        )

    @staticmethod
    def transaction_added(transaction_id: int, type_: str, category: str, amount: str) -> AuditEvent:
        return AuditEventBuilder.record_changed(
            AuditEventType.TRANSACTION_ADDED,
            "transaction",
            transaction_id,
            f"{type_} of {amount} added to {category or 'no category'}",
            {"type": type_, "category": category, "amount": amount},
        )

    @staticmethod
    def budget_spent_changed(category: str, old_spent: str, new_spent: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SPENT_CHANGED,
            entity_type="budget",
            entity_id=category,
            description=f"Budget spent for {category}: {old_spent} -> {new_spent}",
            details={"old_spent": old_spent, "new_spent": new_spent},
        )

    @staticmethod
    def reminder_notified(reminder_id: Optional[int], description: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_NOTIFIED,
            entity_type="reminder",
            entity_id=str(reminder_id) if reminder_id is not None else None,
            description=f"Payment reminder shown: {description}"[:500],
        )

    @staticmethod
    def bulk_operation(event_type: AuditEventType, counts: dict[str, int], path: Optional[str] = None) -> AuditEvent:
        details: dict[str, Any] = dict(counts)
        if path:
            details["path"] = path
        summary = ", ".join(f"{count} {name}" for name, count in counts.items())
        return AuditEvent(
            event_type=event_type,
            description=f"{event_type.value.replace('_', ' ').capitalize()}: {summary}",
            details=details,
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(operation: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"{operation}: input rejected with {len(issues)} issues",
            details={"operation": operation, "issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def storage_error(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def file_error(operation: str, path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"File error during {operation}",
            error_message=error_message,
            details={"operation": operation, "path": path},
        )
