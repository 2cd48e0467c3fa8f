"""
Application State

The single owned container for everything the tracker holds in memory.
Handlers receive it explicitly; nothing else keeps a copy of these lists.
"""

from typing import Iterable, Optional

from finance_tracker.models.records import (
    Budget,
    Reminder,
    TrackerSnapshot,
    Transaction,
)


class AppState:
    """
    In-memory records of one tracker session.

    - transactions: in insertion order (this is the table order)
    - budgets: keyed by category, one per category
    - reminders: in insertion order
    - categories: unique names in display order
    """

    def __init__(self, categories: Optional[Iterable[str]] = None):
        self.transactions: list[Transaction] = []
        self.budgets: dict[str, Budget] = {}
        self.reminders: list[Reminder] = []
        self.categories: list[str] = []
        for name in categories or []:
            self.add_category(name)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_transaction(self, transaction_id: int) -> Optional[int]:
        """Position of the transaction with this id, or None."""
        for index, transaction in enumerate(self.transactions):
            if transaction.id == transaction_id:
                return index
        return None

    def find_reminder(self, reminder_id: int) -> Optional[int]:
        for index, reminder in enumerate(self.reminders):
            if reminder.id == reminder_id:
                return index
        return None

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, name: str) -> bool:
        """Add a category; False if it was already present."""
        if name in self.categories:
            return False
        self.categories.append(name)
        return True

    def remove_category(self, name: str) -> bool:
        if name not in self.categories:
            return False
        self.categories.remove(name)
        return True

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> TrackerSnapshot:
        """Deep copy of the current state, as persisted by a save."""
        return TrackerSnapshot(
            transactions=[t.model_copy() for t in self.transactions],
            budgets=[b.model_copy() for b in self.budgets.values()],
            reminders=[r.model_copy() for r in self.reminders],
            categories=list(self.categories),
        )

    def replace_with(self, snapshot: TrackerSnapshot) -> None:
        """Clear everything, then take over the snapshot's records."""
        self.transactions = list(snapshot.transactions)
        self.budgets = {budget.category: budget for budget in snapshot.budgets}
        self.reminders = list(snapshot.reminders)
        self.categories = []
        for name in snapshot.categories:
            self.add_category(name)

    def counts(self) -> dict[str, int]:
        return {
            "transactions": len(self.transactions),
            "budgets": len(self.budgets),
            "reminders": len(self.reminders),
            "categories": len(self.categories),
        }
