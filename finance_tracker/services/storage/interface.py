"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
The handlers only talk to this interface; the SQLite implementation is
the one used by the application.

The interface is intentionally simple - we're not building a full ORM.
Just the operations the tracker needs:
1. Schema creation
2. Bulk replace / bulk load of everything (explicit Save / Load)
3. Per-row insert, update and delete for the edit dialogs

All operations are synchronous and each one manages its own connection.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from finance_tracker.models.records import (
    Budget,
    Reminder,
    TrackerSnapshot,
    Transaction,
)


class RecordStorageInterface(ABC):
    """
    Abstract interface for the tracker's record store.

    Any storage implementation must implement these methods.
    Implementations raise StorageError (or a subclass) on failure.
    """

    @abstractmethod
    def create_schema(self) -> None:
        """Create the four tables if they do not exist yet."""
        pass

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def replace_all(self, snapshot: TrackerSnapshot) -> None:
        """
        Delete every row in every table, then insert the snapshot.

        Runs as one commit/rollback unit: on failure the store keeps its
        previous contents.

        Raises:
            StorageError: If the replace fails
        """
        pass

    @abstractmethod
    def load_all(self) -> TrackerSnapshot:
        """
        Read every row of every table.

        Raises:
            StorageError: If the store cannot be read
        """
        pass

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @abstractmethod
    def insert_transaction(self, transaction: Transaction) -> Transaction:
        """
        Insert a transaction.

        Returns:
            A copy of the transaction carrying its store-assigned id
        """
        pass

    @abstractmethod
    def update_transaction(self, transaction: Transaction, budgets: Sequence[Budget] = ()) -> None:
        """
        Rewrite every field of an existing transaction.

        Any `budgets` given are saved in the same commit: either every
        write lands or none does.

        Raises:
            NotFoundError: If no transaction has this id
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> bool:
        """
        Delete a transaction by id.

        Returns:
            True if a row was deleted, False if the id did not exist
        """
        pass

    @abstractmethod
    def replace_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        """
        Replace the whole transactions table in one commit.

        Returns:
            The inserted transactions carrying their new ids, in order
        """
        pass

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    @abstractmethod
    def save_budget(self, budget: Budget) -> None:
        """Insert the budget, or overwrite the one with the same category."""
        pass

    @abstractmethod
    def delete_budget(self, category: str) -> bool:
        """
        Delete the budget of a category.

        Returns:
            True if a row was deleted, False if there was no such budget
        """
        pass

    # -------------------------------------------------------------------------
    # Reminders
    # -------------------------------------------------------------------------

    @abstractmethod
    def insert_reminder(self, reminder: Reminder) -> Reminder:
        """
        Insert a reminder.

        Returns:
            A copy of the reminder carrying its store-assigned id
        """
        pass

    @abstractmethod
    def update_reminder(self, reminder: Reminder) -> None:
        """
        Rewrite every field of an existing reminder.

        Raises:
            NotFoundError: If no reminder has this id
        """
        pass

    @abstractmethod
    def delete_reminder(self, reminder_id: int) -> bool:
        """
        Delete a reminder by id.

        Returns:
            True if a row was deleted, False if the id did not exist
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class ConnectionError(StorageError):
    """Could not open the database."""
    pass
