"""
Tests for input validation

Every form submits raw text; these tests cover how that text is turned
into records or rejected.
"""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.models.records import TransactionType
from finance_tracker.validation import InputValidationError, InputValidator


@pytest.fixture
def validator():
    return InputValidator()


class TestTransactionValidation:
    """Tests for validate_transaction."""

    def test_valid_transaction(self, validator):
        """Test that well-formed text becomes a Transaction."""
        transaction = validator.validate_transaction(
            "100.00", "Expense", "Groceries", "2024-01-01", "Weekly shop"
        )
        assert transaction.amount == Decimal("100.00")
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.date == date(2024, 1, 1)
        assert transaction.id is None

    def test_type_is_case_insensitive(self, validator):
        """Test that 'income' is accepted as Income."""
        transaction = validator.validate_transaction("5", "income", "Salary", "2024-01-01")
        assert transaction.type == TransactionType.INCOME

    def test_invalid_amount(self, validator):
        """Test that a non-numeric amount is rejected."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_transaction("abc", "Expense", "Groceries", "2024-01-01")
        assert [i.field for i in exc_info.value.issues] == ["amount"]
        assert "Please enter a number" in str(exc_info.value)

    def test_non_finite_amount(self, validator):
        """Test that NaN and infinity are rejected."""
        for value in ("NaN", "Infinity"):
            with pytest.raises(InputValidationError):
                validator.validate_transaction(value, "Expense", "Groceries", "2024-01-01")

    def test_amount_too_large_for_cents(self, validator):
        """Test that an amount that cannot be held to the cent is rejected."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_transaction("1e30", "Expense", "Groceries", "2024-01-01")
        assert exc_info.value.issues[0].issue_type == "invalid_format"

        with pytest.raises(InputValidationError):
            validator.validate_budget("Groceries", "1e30")

    def test_invalid_date(self, validator):
        """Test that dates must be YYYY-MM-DD."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_transaction("10", "Expense", "Groceries", "01/02/2024")
        assert exc_info.value.issues[0].field == "date"
        assert "YYYY-MM-DD" in exc_info.value.issues[0].message

    def test_unknown_type(self, validator):
        """Test that only Income and Expense are accepted."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_transaction("10", "Transfer", "Groceries", "2024-01-01")
        assert exc_info.value.issues[0].field == "type"

    def test_all_issues_reported_together(self, validator):
        """Test that every problem is listed, not just the first."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_transaction("", "", "Groceries", "")
        fields = {issue.field for issue in exc_info.value.issues}
        assert fields == {"amount", "type", "date"}
        assert exc_info.value.result.error_count == 3

    def test_transaction_id_kept(self, validator):
        """Test that edit validation keeps the identity."""
        transaction = validator.validate_transaction(
            "1", "Expense", "Rent", "2024-01-01", transaction_id=12
        )
        assert transaction.id == 12


class TestOtherValidation:
    """Tests for budgets, reminders, categories and date ranges."""

    def test_valid_budget(self, validator):
        """Test that a budget starts with nothing spent."""
        budget = validator.validate_budget(" Groceries ", "200")
        assert budget.category == "Groceries"
        assert budget.limit == Decimal("200.00")
        assert budget.spent == Decimal("0.00")

    def test_budget_requires_category_and_limit(self, validator):
        """Test that empty category and bad limit are both reported."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_budget("", "lots")
        assert {i.field for i in exc_info.value.issues} == {"category", "limit"}

    def test_valid_reminder(self, validator):
        """Test reminder validation."""
        reminder = validator.validate_reminder("2024-03-01", "Electricity bill")
        assert reminder.due_date == date(2024, 3, 1)
        assert reminder.paid is False

    def test_reminder_requires_description(self, validator):
        """Test that an empty description is rejected."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_reminder("2024-03-01", "   ")
        assert exc_info.value.issues[0].field == "description"

    def test_category_trimmed(self, validator):
        """Test category names are trimmed and must not be empty."""
        assert validator.validate_category("  Travel ") == "Travel"
        with pytest.raises(InputValidationError):
            validator.validate_category("")

    def test_blank_date_range_is_unbounded(self, validator):
        """Test that blank bounds mean no bound."""
        assert validator.validate_date_range("", None) == (None, None)
        assert validator.validate_date_range("2024-01-01", "") == (date(2024, 1, 1), None)

    def test_invalid_date_range_bound(self, validator):
        """Test that a non-blank unparsable bound is an error."""
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate_date_range("yesterday", "2024-01-31")
        assert exc_info.value.issues[0].field == "from_date"

    def test_period_requires_both_bounds(self, validator):
        """Test that comparison periods need a start and an end."""
        assert validator.validate_period("2024-01-01", "2024-01-31") == (
            date(2024, 1, 1), date(2024, 1, 31)
        )
        with pytest.raises(InputValidationError):
            validator.validate_period("2024-01-01", "")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
