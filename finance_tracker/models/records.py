"""
Core Data Models for the Finance Tracker

These models define the records held in memory and persisted to the
local database:
1. Transaction - a single income or expense entry
2. Budget - a per-category spending limit with accumulated spend
3. Reminder - a dated payment obligation with a paid flag
4. TrackerSnapshot - all four collections, exchanged by save/load

DESIGN DECISION: Identities (transaction and reminder ids) are assigned
by the store on insert and never change afterwards. A record without an
id has not been persisted yet.
"""

import datetime as dt
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


CENT = Decimal("0.01")


def quantize_amount(value: Decimal) -> Decimal:
    """Round an amount to cents."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "Income"
    EXPENSE = "Expense"


class ReminderStatus(str, Enum):
    """Display status of a reminder. There is no way back from PAID."""
    PENDING = "Pending"
    PAID = "Paid"


# =============================================================================
# CORE RECORDS
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense entry.

    Mutated only by full replacement (see TransactionHandler.edit).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = Field(
        default=None,
        description="Store-assigned identity, None until inserted"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount, rounded to cents"
    )
    type: TransactionType = Field(
        ...,
        description="Income or Expense"
    )
    category: str = Field(
        default="",
        description="Free-text category, normally one of the category set"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )

    @field_validator('amount')
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        return quantize_amount(v)

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    def to_table_row(self, currency_symbol: str = "$") -> list[str]:
        """Row shown in the transactions table: date, type, category, amount, description."""
        return [
            self.date.isoformat(),
            self.type.value,
            self.category,
            f"{currency_symbol}{self.amount:.2f}",
            self.description,
        ]


class Budget(BaseModel):
    """
    A spending limit for one category.

    The category is the key: there is at most one budget per category.
    `spent` only grows through add_expense; it decreases only when the
    budget or a transaction is edited.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    category: str = Field(
        ...,
        min_length=1,
        description="Category this budget applies to (unique)"
    )
    limit: Decimal = Field(
        ...,
        description="Spending limit"
    )
    spent: Decimal = Field(
        default=Decimal("0.00"),
        description="Accumulated expense in this category"
    )

    @field_validator('limit', 'spent')
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        return quantize_amount(v)

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    def add_expense(self, amount: Decimal) -> None:
        self.spent = quantize_amount(self.spent + amount)


class Reminder(BaseModel):
    """A payment obligation due on a given date."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = Field(
        default=None,
        description="Store-assigned identity, None until inserted"
    )
    due_date: date = Field(
        ...,
        description="Date the payment is due"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What has to be paid"
    )
    paid: bool = Field(
        default=False,
        description="Set once the payment is made; never reset"
    )

    @property
    def status(self) -> ReminderStatus:
        return ReminderStatus.PAID if self.paid else ReminderStatus.PENDING

    def mark_paid(self) -> None:
        """Pending -> Paid. Calling it on a paid reminder changes nothing."""
        self.paid = True

    def is_due(self, today: date) -> bool:
        """True for an unpaid reminder due today or earlier."""
        return not self.paid and self.due_date <= today

    def to_table_row(self) -> list[str]:
        return [self.due_date.isoformat(), self.description, self.status.value]


class TrackerSnapshot(BaseModel):
    """
    Everything the tracker persists.

    Save writes one of these with a bulk replace; load reads one back.
    """

    transactions: list[Transaction] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
    reminders: list[Reminder] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.transactions or self.budgets or self.reminders or self.categories
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Input field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one form submission."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    def summary(self) -> str:
        """All error messages joined for display."""
        return "; ".join(
            issue.message for issue in self.issues if issue.severity == "error"
        )


# =============================================================================
# REPORT MODELS
# =============================================================================

class CategorySpending(BaseModel):
    """Expense total for one category."""

    category: str
    amount: Decimal
    percentage: float = Field(
        ...,
        description="Share of the total expense, 0-100"
    )


class SpendingReport(BaseModel):
    """
    Spending grouped by category.

    An empty `categories` list means there was no expense to report.
    """

    total: Decimal = Decimal("0.00")
    categories: list[CategorySpending] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def as_dict(self) -> dict[str, Decimal]:
        return {item.category: item.amount for item in self.categories}


class DateRange(BaseModel):
    """Inclusive date range."""

    start: date
    end: date

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


class PeriodComparison(BaseModel):
    """Expense totals of two periods side by side."""

    current: DateRange
    previous: DateRange
    current_total: Decimal
    previous_total: Decimal

    @property
    def difference(self) -> Decimal:
        return self.current_total - self.previous_total

    @property
    def absolute_difference(self) -> Decimal:
        return abs(self.difference)


class BudgetProgress(BaseModel):
    """
    Progress indicator for one budget.

    `maximum` is never negative and `fraction` is always within 0-1,
    whatever the budget limit is.
    """

    category: str
    spent: Decimal
    limit: Decimal
    maximum: Decimal
    fraction: float = Field(ge=0.0, le=1.0)

    @property
    def percent(self) -> int:
        return int(round(self.fraction * 100))

    @property
    def over_budget(self) -> bool:
        return self.spent > self.limit

    def label(self, currency_symbol: str = "$") -> str:
        return f"{self.category} ({currency_symbol}{self.spent:.2f} / {currency_symbol}{self.limit:.2f})"
