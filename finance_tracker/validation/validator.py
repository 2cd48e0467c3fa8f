"""
Input Validation

Every form in the UI submits raw text. This module turns that text into
typed values or reports exactly what is wrong with it.

Checks:
- Amounts and limits parse as finite decimal numbers
- Dates parse as YYYY-MM-DD calendar dates
- Transaction types are Income or Expense
- Required text fields (reminder description, category name) are not empty

IMPORTANT: Validation NEVER silently fixes issues beyond trimming
surrounding whitespace. A failed validation leaves all state untouched.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from finance_tracker.models.records import (
    Budget,
    Reminder,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    quantize_amount,
)


DATE_FORMAT_HINT = "YYYY-MM-DD"


class InputValidationError(Exception):
    """User input was rejected; carries the full validation result."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary())

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


class InputValidator:
    """
    Validates raw form input for transactions, budgets, reminders,
    categories and date filters.

    Each `validate_*` method returns the typed record or raises
    InputValidationError listing every issue found.
    """

    def _parse_amount(
        self,
        value: Union[str, Decimal, int, float, None],
        field: str,
        issues: list[ValidationIssue],
    ) -> Optional[Decimal]:
        if value is None or (isinstance(value, str) and not value.strip()):
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message=f"{field.capitalize()} is required",
            ))
            return None
        try:
            amount = Decimal(str(value).strip())
            # Values too large to hold in cents fail here too
            amount = quantize_amount(amount) if amount.is_finite() else None
        except InvalidOperation:
            amount = None
        if amount is None:
            issues.append(ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"Invalid {field} value '{value}'. Please enter a number.",
            ))
            return None
        return amount

    def _parse_date(
        self,
        value: Union[str, date, None],
        field: str,
        issues: list[ValidationIssue],
    ) -> Optional[date]:
        if isinstance(value, date):
            return value
        if value is None or not value.strip():
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message=f"{field.replace('_', ' ').capitalize()} is required",
            ))
            return None
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            issues.append(ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"Invalid date format '{value}'. Please use {DATE_FORMAT_HINT}.",
            ))
            return None

    def _parse_type(
        self,
        value: Union[str, TransactionType, None],
        issues: list[ValidationIssue],
    ) -> Optional[TransactionType]:
        if isinstance(value, TransactionType):
            return value
        text = (value or "").strip()
        for member in TransactionType:
            if text.lower() == member.value.lower():
                return member
        issues.append(ValidationIssue(
            field="type",
            issue_type="invalid_value",
            message=f"Invalid type '{text}'. Please enter Income or Expense.",
        ))
        return None

    def _require_text(
        self,
        value: Optional[str],
        field: str,
        issues: list[ValidationIssue],
    ) -> str:
        text = (value or "").strip()
        if not text:
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing",
                message=f"{field.capitalize()} cannot be empty",
            ))
        return text

    def _raise_if_invalid(self, issues: list[ValidationIssue]) -> None:
        result = ValidationResult(issues=issues)
        if result.has_errors:
            raise InputValidationError(result)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def validate_transaction(
        self,
        amount: Union[str, Decimal, int, float, None],
        type_: Union[str, TransactionType, None],
        category: Optional[str],
        date_value: Union[str, date, None],
        description: Optional[str] = "",
        transaction_id: Optional[int] = None,
    ) -> Transaction:
        issues: list[ValidationIssue] = []
        parsed_amount = self._parse_amount(amount, "amount", issues)
        parsed_type = self._parse_type(type_, issues)
        parsed_date = self._parse_date(date_value, "date", issues)
        self._raise_if_invalid(issues)

        return Transaction(
            id=transaction_id,
            amount=parsed_amount,
            type=parsed_type,
            category=(category or "").strip(),
            date=parsed_date,
            description=(description or "").strip(),
        )

    def validate_budget(
        self,
        category: Optional[str],
        limit: Union[str, Decimal, int, float, None],
    ) -> Budget:
        issues: list[ValidationIssue] = []
        name = self._require_text(category, "category", issues)
        parsed_limit = self._parse_amount(limit, "limit", issues)
        self._raise_if_invalid(issues)

        return Budget(category=name, limit=parsed_limit)

    def validate_amount(
        self,
        value: Union[str, Decimal, int, float, None],
        field: str = "amount",
    ) -> Decimal:
        issues: list[ValidationIssue] = []
        parsed = self._parse_amount(value, field, issues)
        self._raise_if_invalid(issues)
        return parsed

    def validate_reminder(
        self,
        due_date: Union[str, date, None],
        description: Optional[str],
        reminder_id: Optional[int] = None,
        paid: bool = False,
    ) -> Reminder:
        issues: list[ValidationIssue] = []
        parsed_date = self._parse_date(due_date, "due_date", issues)
        text = self._require_text(description, "description", issues)
        self._raise_if_invalid(issues)

        return Reminder(id=reminder_id, due_date=parsed_date, description=text, paid=paid)

    def validate_category(self, name: Optional[str]) -> str:
        issues: list[ValidationIssue] = []
        text = self._require_text(name, "category", issues)
        self._raise_if_invalid(issues)
        return text

    def validate_date_range(
        self,
        date_from: Union[str, date, None],
        date_to: Union[str, date, None],
    ) -> tuple[Optional[date], Optional[date]]:
        """
        Parse optional range bounds; a blank bound means unbounded.

        Raises:
            InputValidationError: If a non-blank bound is not a date
        """
        issues: list[ValidationIssue] = []
        parsed_from = None
        parsed_to = None
        if isinstance(date_from, date) or (date_from or "").strip():
            parsed_from = self._parse_date(date_from, "from_date", issues)
        if isinstance(date_to, date) or (date_to or "").strip():
            parsed_to = self._parse_date(date_to, "to_date", issues)
        self._raise_if_invalid(issues)
        return parsed_from, parsed_to

    def validate_period(
        self,
        start: Union[str, date, None],
        end: Union[str, date, None],
        name: str = "period",
    ) -> tuple[date, date]:
        """Both bounds required."""
        issues: list[ValidationIssue] = []
        parsed_start = self._parse_date(start, f"{name}_from", issues)
        parsed_end = self._parse_date(end, f"{name}_to", issues)
        self._raise_if_invalid(issues)
        return parsed_start, parsed_end
