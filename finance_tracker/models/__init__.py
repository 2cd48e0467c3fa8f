"""
Data Models Package

This package contains all Pydantic models used in the finance tracker.
All data flowing between the store, the handlers and the UI conforms to
these schemas.
"""

from finance_tracker.models.records import (
    Budget,
    BudgetProgress,
    CategorySpending,
    DateRange,
    PeriodComparison,
    Reminder,
    ReminderStatus,
    SpendingReport,
    TrackerSnapshot,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    quantize_amount,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Records
    "Budget",
    "Reminder",
    "ReminderStatus",
    "TrackerSnapshot",
    "Transaction",
    "TransactionType",
    "quantize_amount",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Reports
    "BudgetProgress",
    "CategorySpending",
    "DateRange",
    "PeriodComparison",
    "SpendingReport",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
