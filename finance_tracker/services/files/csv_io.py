"""
CSV Import / Export

File format (one transaction per line after the header):

    Date,Type,Category,Amount,Description
    2024-01-01,Expense,Groceries,100.00,Weekly shop

LIMITATION: this is a naive comma-split format, kept for compatibility
with files written by earlier versions. There is no quoting or escaping:
a description containing a comma is cut at the first comma on import,
and a category containing a comma shifts every following field.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Union

from finance_tracker.models.records import Transaction, TransactionType, quantize_amount


CSV_HEADER = "Date,Type,Category,Amount,Description"
FIELD_COUNT = 5


class FileFormatError(Exception):
    """A line of an imported file could not be parsed."""

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        super().__init__(f"Line {line_number}: {message}")


def format_csv_line(transaction: Transaction) -> str:
    return ",".join([
        transaction.date.isoformat(),
        transaction.type.value,
        transaction.category,
        f"{transaction.amount:.2f}",
        transaction.description,
    ])


def write_csv(path: Union[str, Path], transactions: Iterable[Transaction]) -> int:
    """
    Write transactions to `path`, header first.

    Returns the number of transactions written. OSError propagates.
    """
    count = 0
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(CSV_HEADER + "\n")
        for transaction in transactions:
            f.write(format_csv_line(transaction) + "\n")
            count += 1
    return count


def parse_csv_line(line: str, line_number: int) -> Transaction:
    """
    Parse one data line.

    Fields past the fifth are ignored.

    Raises:
        FileFormatError: If the date, type or amount cannot be parsed
    """
    parts = line.split(",")
    raw_date, raw_type, category, raw_amount, description = parts[:FIELD_COUNT]

    try:
        parsed_date = date.fromisoformat(raw_date.strip())
    except ValueError:
        raise FileFormatError(line_number, f"invalid date '{raw_date}'")

    try:
        type_ = TransactionType(raw_type.strip())
    except ValueError:
        raise FileFormatError(line_number, f"invalid type '{raw_type}'")

    try:
        amount = quantize_amount(Decimal(raw_amount.strip()))
    except InvalidOperation:
        raise FileFormatError(line_number, f"invalid amount '{raw_amount}'")
    if not amount.is_finite():
        raise FileFormatError(line_number, f"invalid amount '{raw_amount}'")

    return Transaction(
        date=parsed_date,
        type=type_,
        category=category,
        amount=amount,
        description=description,
    )


def read_csv(path: Union[str, Path]) -> list[Transaction]:
    """
    Read transactions from `path`.

    The first line is skipped as the header. Lines with fewer than five
    fields (blank lines included) are skipped. The returned transactions
    have no id yet.

    Raises:
        FileFormatError: On the first line that cannot be parsed or is
            not UTF-8 text
        OSError: If the file cannot be read
    """
    transactions = []
    with open(path, "rb") as f:
        for line_number, raw_line in enumerate(f, start=1):
            if line_number == 1:
                continue
            try:
                line = raw_line.decode("utf-8").rstrip("\r\n")
            except UnicodeDecodeError:
                raise FileFormatError(line_number, "not valid UTF-8 text")
            if len(line.split(",")) < FIELD_COUNT:
                continue
            transactions.append(parse_csv_line(line, line_number))
    return transactions
