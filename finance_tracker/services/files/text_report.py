"""
Plain-text "PDF" export.

The export is a plain-text table written to whatever path the user
chose, `.pdf` extension or not. No PDF encoding is done.
"""

from pathlib import Path
from typing import Iterable, Union

from finance_tracker.models.records import Transaction


REPORT_TITLE = "Spending Report"


def format_report_line(transaction: Transaction, currency_symbol: str = "$") -> str:
    return (
        f"{transaction.date.isoformat()} | {transaction.type.value} | "
        f"{transaction.category} | {currency_symbol}{transaction.amount:.2f} | "
        f"{transaction.description}"
    )


def render_text_report(transactions: Iterable[Transaction], currency_symbol: str = "$") -> str:
    lines = [REPORT_TITLE, ""]
    lines.extend(format_report_line(t, currency_symbol) for t in transactions)
    return "\n".join(lines) + "\n"


def write_text_report(
    path: Union[str, Path],
    transactions: Iterable[Transaction],
    currency_symbol: str = "$",
) -> int:
    """Write the report; returns the number of transaction lines."""
    transactions = list(transactions)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_text_report(transactions, currency_symbol))
    return len(transactions)
