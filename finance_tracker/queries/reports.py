"""
Reports and Filters

DESIGN DECISION: Reports are DETERMINISTIC, read-only aggregations over
the in-memory transaction list. Nothing here touches the store or
mutates a record; each call recomputes from scratch.

Provided:
1. Spending by category (amount and share of total expense)
2. Period comparison (expense totals of two inclusive date ranges)
3. Text renderings of both, plus an ASCII bar chart
4. Budget progress indicators with a safe range
5. The compound search / date-range filter of the advanced view
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from finance_tracker.models.records import (
    Budget,
    BudgetProgress,
    CategorySpending,
    DateRange,
    PeriodComparison,
    SpendingReport,
    Transaction,
    quantize_amount,
)


ZERO = Decimal("0.00")


class ReportGenerator:
    """
    Builds reports from transactions and budgets.

    GUARANTEES:
    - Only expense transactions count towards spending
    - No division by zero: an empty or zero-total expense set gives an
      empty report
    - Progress fractions are always within 0-1
    """

    def __init__(self, currency_symbol: str = "$"):
        self._symbol = currency_symbol

    # -------------------------------------------------------------------------
    # Spending by category
    # -------------------------------------------------------------------------

    def spending_by_category(self, transactions: Iterable[Transaction]) -> SpendingReport:
        """Group expenses by category, sum them, and compute each share."""
        totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for transaction in transactions:
            if transaction.is_expense:
                totals[transaction.category] += transaction.amount

        totals = {category: amount for category, amount in totals.items() if amount != 0}
        total = sum(totals.values(), ZERO)
        if total == 0:
            return SpendingReport(total=ZERO)

        categories = [
            CategorySpending(
                category=category,
                amount=quantize_amount(amount),
                percentage=float(amount / total * 100),
            )
            for category, amount in totals.items()
        ]
        categories.sort(key=lambda item: (-item.amount, item.category))

        return SpendingReport(total=quantize_amount(total), categories=categories)

    def format_spending_report(self, report: SpendingReport) -> str:
        lines = ["Spending Breakdown:", ""]
        if report.is_empty:
            lines.append("No expenses recorded.")
        for item in report.categories:
            lines.append(
                f"{item.category}: {self._symbol}{item.amount:.2f} ({item.percentage:.1f}%)"
            )
        return "\n".join(lines)

    def ascii_chart(self, report: SpendingReport, width: int = 50) -> str:
        """One bar per category, scaled so the largest is `width` wide."""
        lines = ["ASCII Spending Chart:", ""]
        if report.is_empty:
            lines.append("No expenses recorded.")
            return "\n".join(lines)

        largest = max(abs(item.amount) for item in report.categories)
        for item in report.categories:
            bar_length = int(abs(item.amount) / largest * width) if largest else 0
            lines.append(
                f"{item.category:<15}: {'*' * bar_length} ({self._symbol}{item.amount:.2f})"
            )
        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Period comparison
    # -------------------------------------------------------------------------

    def expense_total(self, transactions: Iterable[Transaction], period: DateRange) -> Decimal:
        """Sum of expenses dated within `period` (both bounds inclusive)."""
        return quantize_amount(sum(
            (t.amount for t in transactions if t.is_expense and period.contains(t.date)),
            ZERO,
        ))

    def compare_periods(
        self,
        transactions: Sequence[Transaction],
        current: DateRange,
        previous: DateRange,
    ) -> PeriodComparison:
        return PeriodComparison(
            current=current,
            previous=previous,
            current_total=self.expense_total(transactions, current),
            previous_total=self.expense_total(transactions, previous),
        )

    def format_period_comparison(self, comparison: PeriodComparison) -> str:
        return "\n".join([
            f"Current Period Spending: {self._symbol}{comparison.current_total:.2f}",
            f"Previous Period Spending: {self._symbol}{comparison.previous_total:.2f}",
            f"Difference: {self._symbol}{comparison.difference:.2f}",
        ])

    # -------------------------------------------------------------------------
    # Budget progress
    # -------------------------------------------------------------------------

    def budget_progress(self, budget: Budget) -> BudgetProgress:
        """
        Progress of one budget.

        A limit of zero or below has no usable range: the indicator is
        full as soon as anything is spent, and empty otherwise.
        """
        maximum = max(budget.limit, ZERO)
        if budget.limit <= 0:
            fraction = 1.0 if budget.spent > 0 else 0.0
        else:
            fraction = float(budget.spent / budget.limit)
            fraction = min(max(fraction, 0.0), 1.0)

        return BudgetProgress(
            category=budget.category,
            spent=budget.spent,
            limit=budget.limit,
            maximum=maximum,
            fraction=fraction,
        )

    def all_budget_progress(self, budgets: Iterable[Budget]) -> list[BudgetProgress]:
        return [self.budget_progress(budget) for budget in budgets]

    # -------------------------------------------------------------------------
    # Advanced filter
    # -------------------------------------------------------------------------

    def filter_rows(
        self,
        rows: Sequence[Sequence[str]],
        search: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[int]:
        """
        Indexes of the table rows matching every active criterion.

        - `search`: case-insensitive substring of any cell
        - `date_from` / `date_to`: inclusive bounds on the first cell,
          each optional; while a bound is set, rows whose first cell is
          not a date are excluded
        """
        needle = (search or "").strip().lower()
        matches = []
        for index, row in enumerate(rows):
            if needle and not any(needle in str(cell).lower() for cell in row):
                continue
            if date_from is not None or date_to is not None:
                try:
                    row_date = date.fromisoformat(str(row[0]).strip())
                except (ValueError, IndexError):
                    continue
                if date_from is not None and row_date < date_from:
                    continue
                if date_to is not None and row_date > date_to:
                    continue
            matches.append(index)
        return matches

    def filter_transactions(
        self,
        transactions: Sequence[Transaction],
        search: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[Transaction]:
        rows = [t.to_table_row(self._symbol) for t in transactions]
        return [
            transactions[index]
            for index in self.filter_rows(rows, search, date_from, date_to)
        ]
