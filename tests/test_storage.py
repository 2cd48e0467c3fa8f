"""
Tests for the SQLite record store

Each test gets its own database file under tmp_path.
"""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.config import DatabaseSettings
from finance_tracker.models.records import (
    Budget,
    Reminder,
    TrackerSnapshot,
    Transaction,
    TransactionType,
)
from finance_tracker.services.storage import (
    ConnectionError,
    NotFoundError,
    SQLiteClient,
    SQLiteRecordStorage,
    StorageError,
)


def make_transaction(amount="10.00", type_=TransactionType.EXPENSE, category="Groceries", day=1, description=""):
    return Transaction(
        amount=Decimal(amount),
        type=type_,
        category=category,
        date=date(2024, 1, day),
        description=description,
    )


class TestTransactionStorage:
    """Tests for per-row transaction operations."""

    def test_insert_assigns_increasing_ids(self, storage):
        """Test that the store assigns a new id to each insert."""
        first = storage.insert_transaction(make_transaction())
        second = storage.insert_transaction(make_transaction(day=2))
        assert first.id is not None
        assert second.id > first.id

    def test_insert_does_not_mutate_input(self, storage):
        """Test that insert returns a copy carrying the id."""
        transaction = make_transaction()
        saved = storage.insert_transaction(transaction)
        assert transaction.id is None
        assert saved.amount == transaction.amount

    def test_ids_are_not_reused(self, storage):
        """Test that deleting the last row does not free its id."""
        first = storage.insert_transaction(make_transaction())
        storage.delete_transaction(first.id)
        second = storage.insert_transaction(make_transaction())
        assert second.id > first.id

    def test_update_transaction(self, storage):
        """Test full replacement of a stored transaction."""
        saved = storage.insert_transaction(make_transaction())
        updated = saved.model_copy(update={"amount": Decimal("99.99"), "category": "Rent"})
        storage.update_transaction(updated)

        loaded = storage.load_all().transactions
        assert len(loaded) == 1
        assert loaded[0].amount == Decimal("99.99")
        assert loaded[0].category == "Rent"

    def test_update_transaction_saves_budgets_in_same_commit(self, storage):
        """Test that budgets passed with an update are written with it."""
        storage.save_budget(Budget(category="Groceries", limit=Decimal("500")))
        saved = storage.insert_transaction(make_transaction())
        storage.update_transaction(
            saved.model_copy(update={"amount": Decimal("25.00")}),
            [Budget(category="Groceries", limit=Decimal("500"), spent=Decimal("25.00"))],
        )

        loaded = storage.load_all()
        assert loaded.transactions[0].amount == Decimal("25.00")
        assert loaded.budgets[0].spent == Decimal("25.00")

    def test_update_missing_raises(self, storage):
        """Test that updating an unknown id raises NotFoundError."""
        missing = make_transaction().model_copy(update={"id": 404})
        with pytest.raises(NotFoundError):
            storage.update_transaction(missing)

    def test_delete_missing_is_noop(self, storage):
        """Test that deleting an unknown id returns False."""
        storage.insert_transaction(make_transaction())
        assert storage.delete_transaction(404) is False
        assert len(storage.load_all().transactions) == 1

    def test_replace_transactions(self, storage):
        """Test that replace_transactions swaps the whole table."""
        storage.insert_transaction(make_transaction(description="old"))
        saved = storage.replace_transactions([
            make_transaction(description="a"),
            make_transaction(description="b"),
        ])
        assert [t.id is not None for t in saved] == [True, True]

        loaded = storage.load_all().transactions
        assert [t.description for t in loaded] == ["a", "b"]

    def test_amounts_keep_cents(self, storage):
        """Test that amounts come back exactly as two-decimal values."""
        storage.insert_transaction(make_transaction(amount="0.10"))
        storage.insert_transaction(make_transaction(amount="-1234.56"))
        amounts = [t.amount for t in storage.load_all().transactions]
        assert amounts == [Decimal("0.10"), Decimal("-1234.56")]


class TestBudgetAndReminderStorage:
    """Tests for budget and reminder rows."""

    def test_save_budget_upserts(self, storage):
        """Test that saving a budget twice keeps one row per category."""
        storage.save_budget(Budget(category="Groceries", limit=Decimal("100")))
        storage.save_budget(Budget(category="Groceries", limit=Decimal("150"), spent=Decimal("20")))

        budgets = storage.load_all().budgets
        assert len(budgets) == 1
        assert budgets[0].limit == Decimal("150.00")
        assert budgets[0].spent == Decimal("20.00")

    def test_delete_budget(self, storage):
        """Test deleting an existing and a missing budget."""
        storage.save_budget(Budget(category="Rent", limit=Decimal("900")))
        assert storage.delete_budget("Rent") is True
        assert storage.delete_budget("Rent") is False

    def test_reminder_paid_flag_round_trip(self, storage):
        """Test that the paid flag is stored and read back."""
        saved = storage.insert_reminder(Reminder(due_date=date(2024, 2, 1), description="Rent"))
        storage.update_reminder(saved.model_copy(update={"paid": True}))

        reminders = storage.load_all().reminders
        assert reminders[0].id == saved.id
        assert reminders[0].paid is True

    def test_update_missing_reminder_raises(self, storage):
        """Test that updating an unknown reminder raises NotFoundError."""
        with pytest.raises(NotFoundError):
            storage.update_reminder(Reminder(id=5, due_date=date(2024, 2, 1), description="x"))

    def test_delete_missing_reminder_is_noop(self, storage):
        """Test that deleting an unknown reminder returns False."""
        assert storage.delete_reminder(5) is False


class TestBulkOperations:
    """Tests for replace_all / load_all."""

    def test_replace_all_then_load_all(self, storage):
        """Test that a snapshot survives a save/load cycle with its ids."""
        snapshot = TrackerSnapshot(
            transactions=[
                make_transaction(description="first").model_copy(update={"id": 3}),
                make_transaction(description="second").model_copy(update={"id": 8}),
            ],
            budgets=[Budget(category="Groceries", limit=Decimal("100"), spent=Decimal("30"))],
            reminders=[Reminder(id=2, due_date=date(2024, 2, 1), description="Rent", paid=True)],
            categories=["Groceries", "Rent"],
        )
        storage.replace_all(snapshot)
        loaded = storage.load_all()

        assert [t.id for t in loaded.transactions] == [3, 8]
        assert [t.description for t in loaded.transactions] == ["first", "second"]
        assert loaded.budgets == snapshot.budgets
        assert loaded.reminders == snapshot.reminders
        assert sorted(loaded.categories) == ["Groceries", "Rent"]

    def test_replace_all_clears_previous_rows(self, storage):
        """Test that a save replaces everything that was stored before."""
        storage.insert_transaction(make_transaction())
        storage.save_budget(Budget(category="Old", limit=Decimal("1")))
        storage.replace_all(TrackerSnapshot(categories=["Only"]))

        loaded = storage.load_all()
        assert loaded.transactions == []
        assert loaded.budgets == []
        assert loaded.categories == ["Only"]

    def test_data_persists_across_clients(self, db_settings, storage):
        """Test that a second connection sees what the first saved."""
        storage.insert_transaction(make_transaction(description="kept"))

        other_client = SQLiteClient(db_settings)
        try:
            loaded = SQLiteRecordStorage(other_client).load_all()
        finally:
            other_client.dispose()
        assert [t.description for t in loaded.transactions] == ["kept"]

    def test_create_schema_is_idempotent(self, storage):
        """Test that creating the schema twice keeps existing data."""
        storage.insert_transaction(make_transaction())
        storage.create_schema()
        assert len(storage.load_all().transactions) == 1


class TestStorageErrors:
    """Tests for error wrapping."""

    def test_unusable_path_raises_connection_error(self, tmp_path):
        """Test that a database path under a regular file cannot be opened."""
        blocker = tmp_path / "not_a_directory"
        blocker.write_text("x")
        client = SQLiteClient(DatabaseSettings(path=str(blocker / "tracker.db")))

        with pytest.raises(ConnectionError):
            SQLiteRecordStorage(client).create_schema()

    def test_connection_error_is_storage_error(self):
        """Test the storage exception hierarchy."""
        assert issubclass(ConnectionError, StorageError)
        assert issubclass(NotFoundError, StorageError)

    def test_missing_schema_raises_storage_error(self, client):
        """Test that reading before the schema exists is a StorageError."""
        with pytest.raises(StorageError):
            SQLiteRecordStorage(client).load_all()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
