"""
SQLite Storage Implementation

The tracker keeps its records in a local SQLite file through SQLAlchemy.
Four tables mirror the in-memory collections:

    transactions(id, date, type, category, amount, description)
    budgets(category PK, limit_amount, spent)
    reminders(id, dueDate, description, paid)
    categories(category PK)

Each operation opens its own session and closes it when done. Every
SQLAlchemy failure is wrapped in a StorageError so callers only deal
with the storage interface's exceptions.
"""

import os
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Optional, Sequence

from sqlalchemy import Column, Date, Float, Integer, String, Text, create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from finance_tracker.audit import get_logger
from finance_tracker.config import DatabaseSettings, get_settings
from finance_tracker.models.records import (
    Budget,
    Reminder,
    TrackerSnapshot,
    Transaction,
    TransactionType,
)
from finance_tracker.services.storage.interface import (
    ConnectionError,
    DuplicateError,
    NotFoundError,
    RecordStorageInterface,
    StorageError,
)


logger = get_logger(__name__)

# Declarative base class for ORM rows
Base = declarative_base()


class TransactionRow(Base):
    __tablename__ = "transactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=True)
    amount = Column(Float, nullable=False)
    description = Column(Text, nullable=True)


class BudgetRow(Base):
    __tablename__ = "budgets"

    category = Column(String, primary_key=True)
    limit_amount = Column(Float, nullable=False)
    spent = Column(Float, nullable=False, default=0.0)


class ReminderRow(Base):
    __tablename__ = "reminders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    due_date = Column("dueDate", Date, nullable=False)
    description = Column(Text, nullable=False)
    # Boolean stored as 0/1
    paid = Column(Integer, nullable=False, default=0)


class CategoryRow(Base):
    __tablename__ = "categories"

    category = Column(String, primary_key=True)


def _to_decimal(value: Optional[float]) -> Decimal:
    return Decimal(str(value if value is not None else 0))


class SQLiteClient:
    """
    Low-level database wrapper.

    Owns the engine and session factory and hands out one session per
    operation.
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None):
        self._settings = settings or get_settings().database
        self._engine = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def url(self) -> str:
        return self._settings.url

    def connect(self):
        """Create the engine (and the database directory) on first use."""
        if self._engine is None:
            try:
                if self._settings.path != ":memory:":
                    directory = os.path.dirname(os.path.abspath(os.path.expanduser(self._settings.path)))
                    os.makedirs(directory, exist_ok=True)
                self._engine = create_engine(
                    self._settings.url,
                    echo=self._settings.echo,
                    connect_args={"check_same_thread": False},
                )
                self._session_factory = sessionmaker(
                    autocommit=False,
                    autoflush=False,
                    bind=self._engine,
                )
            except (OSError, SQLAlchemyError) as e:
                raise ConnectionError(f"Failed to open database {self._settings.path}: {e}")
        return self._engine

    def create_all(self) -> None:
        try:
            Base.metadata.create_all(bind=self.connect())
        except SQLAlchemyError as e:
            raise ConnectionError(f"Failed to create schema: {e}")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Yield a session and commit it on success.

        Any failure rolls the session back; SQLAlchemy errors are raised
        as storage errors.
        """
        self.connect()
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError as e:
            session.rollback()
            raise DuplicateError(f"Constraint violated: {e.orig}") from e
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Database error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


class SQLiteRecordStorage(RecordStorageInterface):
    """
    SQLite implementation of the record store.

    Rows are converted to and from the pydantic records at this boundary;
    nothing above this class sees an ORM object.
    """

    def __init__(self, client: Optional[SQLiteClient] = None):
        self._client = client or SQLiteClient()

    # -------------------------------------------------------------------------
    # Row conversion
    # -------------------------------------------------------------------------

    def _transaction_to_row(self, transaction: Transaction, keep_id: bool = True) -> TransactionRow:
        row = TransactionRow(
            date=transaction.date,
            type=transaction.type.value,
            category=transaction.category,
            amount=float(transaction.amount),
            description=transaction.description,
        )
        if keep_id and transaction.id is not None:
            row.id = transaction.id
        return row

    def _row_to_transaction(self, row: TransactionRow) -> Transaction:
        return Transaction(
            id=row.id,
            date=row.date,
            type=TransactionType(row.type),
            category=row.category or "",
            amount=_to_decimal(row.amount),
            description=row.description or "",
        )

    def _budget_to_row(self, budget: Budget) -> BudgetRow:
        return BudgetRow(
            category=budget.category,
            limit_amount=float(budget.limit),
            spent=float(budget.spent),
        )

    def _row_to_budget(self, row: BudgetRow) -> Budget:
        return Budget(
            category=row.category,
            limit=_to_decimal(row.limit_amount),
            spent=_to_decimal(row.spent),
        )

    def _reminder_to_row(self, reminder: Reminder, keep_id: bool = True) -> ReminderRow:
        row = ReminderRow(
            due_date=reminder.due_date,
            description=reminder.description,
            paid=1 if reminder.paid else 0,
        )
        if keep_id and reminder.id is not None:
            row.id = reminder.id
        return row

    def _row_to_reminder(self, row: ReminderRow) -> Reminder:
        return Reminder(
            id=row.id,
            due_date=row.due_date,
            description=row.description,
            paid=bool(row.paid),
        )

    # -------------------------------------------------------------------------
    # Schema and bulk operations
    # -------------------------------------------------------------------------

    def create_schema(self) -> None:
        self._client.create_all()

    def replace_all(self, snapshot: TrackerSnapshot) -> None:
        """Delete everything, then insert the snapshot, in one commit."""
        with self._client.session() as session:
            session.query(TransactionRow).delete()
            session.query(BudgetRow).delete()
            session.query(ReminderRow).delete()
            session.query(CategoryRow).delete()

            session.add_all(self._transaction_to_row(t) for t in snapshot.transactions)
            session.add_all(self._budget_to_row(b) for b in snapshot.budgets)
            session.add_all(self._reminder_to_row(r) for r in snapshot.reminders)
            session.add_all(CategoryRow(category=name) for name in snapshot.categories)

        logger.info(
            "store_replaced",
            transactions=len(snapshot.transactions),
            budgets=len(snapshot.budgets),
            reminders=len(snapshot.reminders),
            categories=len(snapshot.categories),
        )

    def load_all(self) -> TrackerSnapshot:
        with self._client.session() as session:
            transactions = [
                self._row_to_transaction(row)
                for row in session.query(TransactionRow).order_by(TransactionRow.id).all()
            ]
            budgets = [
                self._row_to_budget(row)
                for row in session.query(BudgetRow).all()
            ]
            reminders = [
                self._row_to_reminder(row)
                for row in session.query(ReminderRow).order_by(ReminderRow.id).all()
            ]
            categories = [row.category for row in session.query(CategoryRow).all()]

        return TrackerSnapshot(
            transactions=transactions,
            budgets=budgets,
            reminders=reminders,
            categories=categories,
        )

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        with self._client.session() as session:
            row = self._transaction_to_row(transaction, keep_id=False)
            session.add(row)
            session.flush()
            new_id = row.id
        return transaction.model_copy(update={"id": new_id})

    def update_transaction(self, transaction: Transaction, budgets: Sequence[Budget] = ()) -> None:
        with self._client.session() as session:
            row = session.get(TransactionRow, transaction.id)
            if row is None:
                raise NotFoundError(f"Transaction not found: {transaction.id}")
            row.date = transaction.date
            row.type = transaction.type.value
            row.category = transaction.category
            row.amount = float(transaction.amount)
            row.description = transaction.description
            for budget in budgets:
                session.merge(self._budget_to_row(budget))

    def delete_transaction(self, transaction_id: int) -> bool:
        with self._client.session() as session:
            deleted = (
                session.query(TransactionRow)
                .filter(TransactionRow.id == transaction_id)
                .delete()
            )
        return deleted > 0

    def replace_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        with self._client.session() as session:
            session.query(TransactionRow).delete()
            rows = [self._transaction_to_row(t, keep_id=False) for t in transactions]
            session.add_all(rows)
            session.flush()
            ids = [row.id for row in rows]
        return [t.model_copy(update={"id": new_id}) for t, new_id in zip(transactions, ids)]

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    def save_budget(self, budget: Budget) -> None:
        with self._client.session() as session:
            session.merge(self._budget_to_row(budget))

    def delete_budget(self, category: str) -> bool:
        with self._client.session() as session:
            deleted = (
                session.query(BudgetRow)
                .filter(BudgetRow.category == category)
                .delete()
            )
        return deleted > 0

    # -------------------------------------------------------------------------
    # Reminders
    # -------------------------------------------------------------------------

    def insert_reminder(self, reminder: Reminder) -> Reminder:
        with self._client.session() as session:
            row = self._reminder_to_row(reminder, keep_id=False)
            session.add(row)
            session.flush()
            new_id = row.id
        return reminder.model_copy(update={"id": new_id})

    def update_reminder(self, reminder: Reminder) -> None:
        with self._client.session() as session:
            row = session.get(ReminderRow, reminder.id)
            if row is None:
                raise NotFoundError(f"Reminder not found: {reminder.id}")
            row.due_date = reminder.due_date
            row.description = reminder.description
            row.paid = 1 if reminder.paid else 0

    def delete_reminder(self, reminder_id: int) -> bool:
        with self._client.session() as session:
            deleted = (
                session.query(ReminderRow)
                .filter(ReminderRow.id == reminder_id)
                .delete()
            )
        return deleted > 0
