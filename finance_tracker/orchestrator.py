"""
Main Orchestrator for the Finance Tracker

This module ties together all the components and defines the command
handlers the UI calls for:
1. Transactions (add, edit, delete, advanced filter)
2. Budgets (set, edit, delete, progress)
3. Reminders (add, mark paid, edit, delete, due check)
4. Reports (spending breakdown, period comparison)
5. Categories (add, remove, suggestions per type)
6. Data files (save, load, CSV import/export, text report export)

DESIGN DECISION: The in-memory AppState is authoritative. Every handler
validates first, writes through to the store second and mutates memory
last. A rejected input or a failed store call therefore leaves the
in-memory state exactly as it was.

Handlers never raise for user-facing failures. They return a
CommandResult the UI can show as-is, and every outcome is audited.
The handlers do not import Streamlit.
"""

import queue
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.audit import AuditLogger, get_logger
from finance_tracker.config import Settings, get_settings
from finance_tracker.models.audit import AuditEventType
from finance_tracker.models.records import (
    Budget,
    BudgetProgress,
    DateRange,
    Reminder,
    SpendingReport,
    TransactionType,
    ValidationIssue,
)
from finance_tracker.queries import ReportGenerator
from finance_tracker.reminders import ReminderScheduler, due_reminders
from finance_tracker.services.files import (
    FileFormatError,
    read_csv,
    write_csv,
    write_text_report,
)
from finance_tracker.services.storage import (
    RecordStorageInterface,
    SQLiteClient,
    SQLiteRecordStorage,
    StorageError,
)
from finance_tracker.state import AppState
from finance_tracker.validation import InputValidationError, InputValidator


logger = get_logger(__name__)

PathLike = Union[str, Path]


# =============================================================================
# RESULTS
# =============================================================================

class CommandResult(BaseModel):
    """
    Outcome of one UI command.

    `data` carries the affected record (or records) on success; `issues`
    lists every input problem when validation rejected the command.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool = Field(..., description="Whether the command took effect")
    message: str = Field(default="", description="Text to show to the user")
    data: Any = Field(default=None, description="Affected record(s)")
    row: Optional[list[str]] = Field(
        default=None,
        description="Formatted table row of the affected record"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @classmethod
    def ok(cls, message: str = "", data: Any = None, row: Optional[list[str]] = None) -> "CommandResult":
        return cls(success=True, message=message, data=data, row=row)

    @classmethod
    def failed(cls, message: str, issues: Optional[list[ValidationIssue]] = None) -> "CommandResult":
        return cls(success=False, message=message, issues=issues or [])


class NotificationQueue:
    """
    Thread-safe inbox for reminder notifications.

    The reminder scheduler pushes from its own thread; the UI drains the
    queue on its next refresh.
    """

    def __init__(self):
        self._queue: queue.Queue[tuple[Reminder, str]] = queue.Queue()

    def push(self, reminder: Reminder, message: str) -> None:
        self._queue.put((reminder, message))

    def drain(self) -> list[str]:
        messages = []
        while True:
            try:
                _, message = self._queue.get_nowait()
            except queue.Empty:
                return messages
            messages.append(message)


# =============================================================================
# HANDLERS
# =============================================================================

class _Handler:
    """Shared failure reporting for all handlers."""

    def __init__(
        self,
        state: AppState,
        storage: RecordStorageInterface,
        validator: Optional[InputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._state = state
        self._storage = storage
        self._validator = validator or InputValidator()
        self._audit_logger = audit_logger or AuditLogger()

    def _invalid(self, operation: str, error: InputValidationError) -> CommandResult:
        self._audit_logger.log_validation_failed(
            operation,
            [{"field": i.field, "type": i.issue_type, "message": i.message} for i in error.issues],
        )
        return CommandResult.failed(error.result.summary(), error.issues)

    def _storage_failed(self, operation: str, error: StorageError) -> CommandResult:
        self._audit_logger.log_storage_error(operation, str(error))
        return CommandResult.failed(f"Database error: {error}")


class TransactionHandler(_Handler):
    """
    Transaction commands.

    Budgets follow expenses: adding an expense raises the spent amount of
    the budget for its category (when one exists), and editing re-applies
    the difference. Deleting leaves budgets unchanged.
    """

    def __init__(
        self,
        state: AppState,
        storage: RecordStorageInterface,
        validator: Optional[InputValidator] = None,
        reports: Optional[ReportGenerator] = None,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "$",
    ):
        super().__init__(state, storage, validator, audit_logger)
        self._reports = reports or ReportGenerator(currency_symbol)
        self._symbol = currency_symbol

    def rows(self) -> list[list[str]]:
        return [t.to_table_row(self._symbol) for t in self._state.transactions]

    def add(
        self,
        amount: Union[str, Decimal, None],
        type_: Union[str, TransactionType, None],
        category: Optional[str],
        date_value: Union[str, date, None],
        description: Optional[str] = "",
    ) -> CommandResult:
        try:
            transaction = self._validator.validate_transaction(
                amount, type_, category, date_value, description
            )
        except InputValidationError as e:
            return self._invalid("add_transaction", e)

        try:
            saved = self._storage.insert_transaction(transaction)
        except StorageError as e:
            return self._storage_failed("add_transaction", e)

        self._state.transactions.append(saved)
        self._audit_logger.log_transaction_added(
            saved.id, saved.type.value, saved.category, str(saved.amount)
        )

        message = "Transaction added"
        budgets = self._budgets_after({saved.category: saved.amount}) if saved.is_expense else []
        try:
            for budget in budgets:
                self._storage.save_budget(budget)
            self._commit_budgets(budgets)
        except StorageError as e:
            self._audit_logger.log_storage_error("update_budget_spent", str(e))
            message = f"Transaction added, but its budget could not be updated: {e}"

        return CommandResult.ok(message, data=saved, row=saved.to_table_row(self._symbol))

    def edit(
        self,
        transaction_id: int,
        amount: Union[str, Decimal, None],
        type_: Union[str, TransactionType, None],
        category: Optional[str],
        date_value: Union[str, date, None],
        description: Optional[str] = "",
    ) -> CommandResult:
        index = self._state.find_transaction(transaction_id)
        if index is None:
            return CommandResult.failed(f"Transaction {transaction_id} not found")

        try:
            updated = self._validator.validate_transaction(
                amount, type_, category, date_value, description, transaction_id=transaction_id
            )
        except InputValidationError as e:
            return self._invalid("edit_transaction", e)

        old = self._state.transactions[index]
        deltas: dict[str, Decimal] = {}
        if old.is_expense:
            deltas[old.category] = deltas.get(old.category, Decimal("0")) - old.amount
        if updated.is_expense:
            deltas[updated.category] = deltas.get(updated.category, Decimal("0")) + updated.amount
        budgets = self._budgets_after(deltas)

        try:
            self._storage.update_transaction(updated, budgets)
        except StorageError as e:
            return self._storage_failed("edit_transaction", e)

        self._state.transactions[index] = updated
        self._commit_budgets(budgets)

        self._audit_logger.log_record_changed(
            AuditEventType.TRANSACTION_UPDATED,
            "transaction",
            transaction_id,
            f"Transaction {transaction_id} edited",
            {"amount": str(updated.amount), "category": updated.category},
        )
        return CommandResult.ok("Transaction updated", data=updated, row=updated.to_table_row(self._symbol))

    def delete(self, transaction_id: int) -> CommandResult:
        """Delete by id. A missing id is not an error; nothing is removed."""
        try:
            self._storage.delete_transaction(transaction_id)
        except StorageError as e:
            return self._storage_failed("delete_transaction", e)

        index = self._state.find_transaction(transaction_id)
        if index is None:
            return CommandResult.ok("No such transaction; nothing deleted", data=None)

        removed = self._state.transactions.pop(index)
        self._audit_logger.log_record_changed(
            AuditEventType.TRANSACTION_DELETED,
            "transaction",
            transaction_id,
            f"Transaction {transaction_id} deleted",
        )
        return CommandResult.ok("Transaction deleted", data=removed)

    def filter(
        self,
        search: Optional[str] = None,
        date_from: Union[str, date, None] = None,
        date_to: Union[str, date, None] = None,
    ) -> CommandResult:
        """Advanced view: search text and an optional inclusive date range."""
        try:
            start, end = self._validator.validate_date_range(date_from, date_to)
        except InputValidationError as e:
            return self._invalid("filter_transactions", e)

        matches = self._reports.filter_transactions(self._state.transactions, search, start, end)
        return CommandResult.ok(f"{len(matches)} matching transactions", data=matches)

    def _budgets_after(self, deltas: dict[str, Decimal]) -> list[Budget]:
        """Copies of the affected budgets with each delta added to `spent`."""
        updated = []
        for category, delta in deltas.items():
            budget = self._state.budgets.get(category)
            if budget is None or delta == 0:
                continue
            changed = budget.model_copy()
            changed.add_expense(delta)
            updated.append(changed)
        return updated

    def _commit_budgets(self, budgets: list[Budget]) -> None:
        for budget in budgets:
            previous = self._state.budgets[budget.category]
            self._state.budgets[budget.category] = budget
            self._audit_logger.log_budget_spent_changed(
                budget.category, str(previous.spent), str(budget.spent)
            )


class BudgetHandler(_Handler):
    """Budget commands. One budget per category."""

    def __init__(
        self,
        state: AppState,
        storage: RecordStorageInterface,
        validator: Optional[InputValidator] = None,
        reports: Optional[ReportGenerator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(state, storage, validator, audit_logger)
        self._reports = reports or ReportGenerator()

    def set(self, category: Optional[str], limit: Union[str, Decimal, None]) -> CommandResult:
        """Create a budget, or overwrite one (which resets its spent amount)."""
        try:
            budget = self._validator.validate_budget(category, limit)
        except InputValidationError as e:
            return self._invalid("set_budget", e)

        try:
            self._storage.save_budget(budget)
        except StorageError as e:
            return self._storage_failed("set_budget", e)

        replaced = budget.category in self._state.budgets
        self._state.budgets[budget.category] = budget
        self._audit_logger.log_record_changed(
            AuditEventType.BUDGET_UPDATED if replaced else AuditEventType.BUDGET_SET,
            "budget",
            budget.category,
            f"Budget for {budget.category} set to {budget.limit}",
            {"limit": str(budget.limit)},
        )
        return CommandResult.ok("Budget set", data=budget)

    def edit(
        self,
        category: str,
        limit: Union[str, Decimal, None],
        spent: Union[str, Decimal, None] = None,
    ) -> CommandResult:
        """Change the limit, and the spent amount when one is given."""
        name = (category or "").strip()
        existing = self._state.budgets.get(name)
        if existing is None:
            return CommandResult.failed(f"No budget for category '{name}'")

        try:
            new_limit = self._validator.validate_amount(limit, "limit")
            if spent is None or (isinstance(spent, str) and not spent.strip()):
                new_spent = existing.spent
            else:
                new_spent = self._validator.validate_amount(spent, "spent")
        except InputValidationError as e:
            return self._invalid("edit_budget", e)

        updated = Budget(category=name, limit=new_limit, spent=new_spent)
        try:
            self._storage.save_budget(updated)
        except StorageError as e:
            return self._storage_failed("edit_budget", e)

        self._state.budgets[name] = updated
        self._audit_logger.log_record_changed(
            AuditEventType.BUDGET_UPDATED,
            "budget",
            name,
            f"Budget for {name} edited",
            {"limit": str(updated.limit), "spent": str(updated.spent)},
        )
        return CommandResult.ok("Budget updated", data=updated)

    def delete(self, category: str) -> CommandResult:
        name = (category or "").strip()
        try:
            self._storage.delete_budget(name)
        except StorageError as e:
            return self._storage_failed("delete_budget", e)

        removed = self._state.budgets.pop(name, None)
        if removed is None:
            return CommandResult.ok("No such budget; nothing deleted")

        self._audit_logger.log_record_changed(
            AuditEventType.BUDGET_DELETED, "budget", name, f"Budget for {name} deleted"
        )
        return CommandResult.ok("Budget deleted", data=removed)

    def progress(self) -> list[BudgetProgress]:
        return self._reports.all_budget_progress(self._state.budgets.values())


class ReminderHandler(_Handler):
    """Reminder commands. A paid reminder stays paid."""

    def rows(self) -> list[list[str]]:
        return [r.to_table_row() for r in self._state.reminders]

    def add(self, due_date: Union[str, date, None], description: Optional[str]) -> CommandResult:
        try:
            reminder = self._validator.validate_reminder(due_date, description)
        except InputValidationError as e:
            return self._invalid("add_reminder", e)

        try:
            saved = self._storage.insert_reminder(reminder)
        except StorageError as e:
            return self._storage_failed("add_reminder", e)

        self._state.reminders.append(saved)
        self._audit_logger.log_record_changed(
            AuditEventType.REMINDER_ADDED,
            "reminder",
            saved.id,
            f"Reminder added: {saved.description}",
            {"due_date": saved.due_date.isoformat()},
        )
        return CommandResult.ok("Reminder added", data=saved, row=saved.to_table_row())

    def mark_paid(self, reminder_id: int) -> CommandResult:
        index = self._state.find_reminder(reminder_id)
        if index is None:
            return CommandResult.failed(f"Reminder {reminder_id} not found")

        current = self._state.reminders[index]
        if current.paid:
            return CommandResult.ok("Reminder already paid", data=current)

        updated = current.model_copy()
        updated.mark_paid()
        try:
            self._storage.update_reminder(updated)
        except StorageError as e:
            return self._storage_failed("mark_reminder_paid", e)

        self._state.reminders[index] = updated
        self._audit_logger.log_record_changed(
            AuditEventType.REMINDER_PAID,
            "reminder",
            reminder_id,
            f"Reminder paid: {updated.description}",
        )
        return CommandResult.ok("Reminder marked as paid", data=updated, row=updated.to_table_row())

    def edit(
        self,
        reminder_id: int,
        due_date: Union[str, date, None],
        description: Optional[str],
    ) -> CommandResult:
        """Change date and description; the paid flag is kept."""
        index = self._state.find_reminder(reminder_id)
        if index is None:
            return CommandResult.failed(f"Reminder {reminder_id} not found")

        current = self._state.reminders[index]
        try:
            updated = self._validator.validate_reminder(
                due_date, description, reminder_id=reminder_id, paid=current.paid
            )
        except InputValidationError as e:
            return self._invalid("edit_reminder", e)

        try:
            self._storage.update_reminder(updated)
        except StorageError as e:
            return self._storage_failed("edit_reminder", e)

        self._state.reminders[index] = updated
        self._audit_logger.log_record_changed(
            AuditEventType.REMINDER_UPDATED,
            "reminder",
            reminder_id,
            f"Reminder {reminder_id} edited",
        )
        return CommandResult.ok("Reminder updated", data=updated, row=updated.to_table_row())

    def delete(self, reminder_id: int) -> CommandResult:
        try:
            self._storage.delete_reminder(reminder_id)
        except StorageError as e:
            return self._storage_failed("delete_reminder", e)

        index = self._state.find_reminder(reminder_id)
        if index is None:
            return CommandResult.ok("No such reminder; nothing deleted")

        removed = self._state.reminders.pop(index)
        self._audit_logger.log_record_changed(
            AuditEventType.REMINDER_DELETED,
            "reminder",
            reminder_id,
            f"Reminder {reminder_id} deleted",
        )
        return CommandResult.ok("Reminder deleted", data=removed)

    def due(self, today: Optional[date] = None) -> list[Reminder]:
        return due_reminders(self._state.reminders, today or date.today())


class ReportHandler(_Handler):
    """Report commands that take raw date input."""

    def __init__(
        self,
        state: AppState,
        storage: RecordStorageInterface,
        validator: Optional[InputValidator] = None,
        reports: Optional[ReportGenerator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(state, storage, validator, audit_logger)
        self._reports = reports or ReportGenerator()

    def spending(self) -> SpendingReport:
        return self._reports.spending_by_category(self._state.transactions)

    def compare_periods(
        self,
        current_from: Union[str, date, None],
        current_to: Union[str, date, None],
        previous_from: Union[str, date, None],
        previous_to: Union[str, date, None],
    ) -> CommandResult:
        """Expense totals of two inclusive periods; the message is the text report."""
        try:
            current = self._validator.validate_period(current_from, current_to, "current")
            previous = self._validator.validate_period(previous_from, previous_to, "previous")
        except InputValidationError as e:
            return self._invalid("compare_periods", e)

        comparison = self._reports.compare_periods(
            self._state.transactions,
            DateRange(start=current[0], end=current[1]),
            DateRange(start=previous[0], end=previous[1]),
        )
        return CommandResult.ok(self._reports.format_period_comparison(comparison), data=comparison)


class CategoryHandler(_Handler):
    """
    Category list commands.

    Categories live in memory and are persisted only by Save. Removing
    a category does not touch transactions or budgets that use it.
    """

    def __init__(
        self,
        state: AppState,
        storage: RecordStorageInterface,
        validator: Optional[InputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        income_categories: Optional[list[str]] = None,
    ):
        super().__init__(state, storage, validator, audit_logger)
        self._income_categories = list(income_categories or ["Salary", "Bonus", "Other"])

    def add(self, name: Optional[str]) -> CommandResult:
        try:
            category = self._validator.validate_category(name)
        except InputValidationError as e:
            return self._invalid("add_category", e)

        if not self._state.add_category(category):
            return CommandResult.failed(f"Category '{category}' already exists")

        self._audit_logger.log_record_changed(
            AuditEventType.CATEGORY_ADDED, "category", category, f"Category added: {category}"
        )
        return CommandResult.ok("Category added", data=category)

    def remove(self, name: Optional[str]) -> CommandResult:
        category = (name or "").strip()
        if not self._state.remove_category(category):
            return CommandResult.ok("No such category; nothing removed")

        self._audit_logger.log_record_changed(
            AuditEventType.CATEGORY_REMOVED, "category", category, f"Category removed: {category}"
        )
        return CommandResult.ok("Category removed", data=category)

    def categories_for(self, type_: Union[str, TransactionType]) -> list[str]:
        """Categories to offer in the add form for this transaction type."""
        value = type_.value if isinstance(type_, TransactionType) else str(type_).strip()
        if value.lower() == TransactionType.INCOME.value.lower():
            return list(self._income_categories)
        return [c for c in self._state.categories if c not in self._income_categories]

    def list(self) -> list[str]:
        return list(self._state.categories)


class DataFileHandler(_Handler):
    """
    Whole-state and file commands.

    - save / load: bulk replace between memory and the store
    - export_csv / import_csv: transactions only
    - export_pdf: plain-text report (no real PDF is produced)
    """

    def __init__(
        self,
        state: AppState,
        storage: RecordStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "$",
    ):
        super().__init__(state, storage, audit_logger=audit_logger)
        self._symbol = currency_symbol

    def save(self) -> CommandResult:
        try:
            self._storage.replace_all(self._state.snapshot())
        except StorageError as e:
            return self._storage_failed("save_data", e)

        counts = self._state.counts()
        self._audit_logger.log_bulk_operation(AuditEventType.DATA_SAVED, counts)
        return CommandResult.ok("Data saved successfully!", data=counts)

    def load(self) -> CommandResult:
        return self._load("load_data")

    def restore(self) -> CommandResult:
        """
        Startup load of the stored records.

        Categories are persisted only by Save, so a store without any
        keeps the configured default categories.
        """
        return self._load("restore_data", keep_default_categories=True)

    def _load(self, operation: str, keep_default_categories: bool = False) -> CommandResult:
        try:
            snapshot = self._storage.load_all()
        except StorageError as e:
            return self._storage_failed(operation, e)

        if keep_default_categories and not snapshot.categories:
            snapshot = snapshot.model_copy(update={"categories": list(self._state.categories)})
        self._state.replace_with(snapshot)
        counts = self._state.counts()
        self._audit_logger.log_bulk_operation(AuditEventType.DATA_LOADED, counts)
        return CommandResult.ok("Data loaded successfully!", data=counts)

    def export_csv(self, path: PathLike) -> CommandResult:
        try:
            count = write_csv(path, self._state.transactions)
        except OSError as e:
            self._audit_logger.log_file_error("export_csv", str(path), str(e))
            return CommandResult.failed(f"Error exporting CSV: {e}")

        self._audit_logger.log_bulk_operation(
            AuditEventType.CSV_EXPORTED, {"transactions": count}, str(path)
        )
        return CommandResult.ok("CSV exported successfully!", data=count)

    def import_csv(self, path: PathLike) -> CommandResult:
        """Replace all transactions with the file's. Budgets are not touched."""
        try:
            transactions = read_csv(path)
        except (OSError, FileFormatError) as e:
            self._audit_logger.log_file_error("import_csv", str(path), str(e))
            return CommandResult.failed(f"Error importing CSV: {e}")

        try:
            saved = self._storage.replace_transactions(transactions)
        except StorageError as e:
            return self._storage_failed("import_csv", e)

        self._state.transactions = saved
        self._audit_logger.log_bulk_operation(
            AuditEventType.CSV_IMPORTED, {"transactions": len(saved)}, str(path)
        )
        return CommandResult.ok("CSV imported successfully!", data=len(saved))

    def export_pdf(self, path: PathLike) -> CommandResult:
        try:
            count = write_text_report(path, self._state.transactions, self._symbol)
        except OSError as e:
            self._audit_logger.log_file_error("export_pdf", str(path), str(e))
            return CommandResult.failed(f"Error exporting PDF: {e}")

        self._audit_logger.log_bulk_operation(
            AuditEventType.REPORT_EXPORTED, {"transactions": count}, str(path)
        )
        return CommandResult.ok("PDF exported successfully!", data=count)


# =============================================================================
# APPLICATION
# =============================================================================

class FinanceTracker:
    """
    All application components, wired to one state and one store.

    Lifecycle: start() launches the reminder check, shutdown() stops it
    and releases the database connection.
    """

    def __init__(
        self,
        state: AppState,
        storage: RecordStorageInterface,
        reports: ReportGenerator,
        audit_logger: AuditLogger,
        notifications: NotificationQueue,
        scheduler: Optional[ReminderScheduler] = None,
        income_categories: Optional[list[str]] = None,
        currency_symbol: str = "$",
        client: Optional[SQLiteClient] = None,
    ):
        validator = InputValidator()
        self.state = state
        self.storage = storage
        self.reports = reports
        self.audit_logger = audit_logger
        self.notifications = notifications
        self.scheduler = scheduler
        self.currency_symbol = currency_symbol
        self._client = client

        self.transactions = TransactionHandler(
            state, storage, validator, reports, audit_logger, currency_symbol
        )
        self.budgets = BudgetHandler(state, storage, validator, reports, audit_logger)
        self.reminders = ReminderHandler(state, storage, validator, audit_logger)
        self.report_commands = ReportHandler(state, storage, validator, reports, audit_logger)
        self.categories = CategoryHandler(
            state, storage, validator, audit_logger, income_categories
        )
        self.files = DataFileHandler(state, storage, audit_logger, currency_symbol)
        self.startup_result: Optional[CommandResult] = None

    def start(self) -> None:
        if self.scheduler:
            self.scheduler.start()

    def shutdown(self) -> None:
        if self.scheduler:
            self.scheduler.stop()
        if self._client:
            self._client.dispose()


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[RecordStorageInterface] = None,
    notifier: Optional[Callable[[Reminder, str], None]] = None,
) -> FinanceTracker:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use; defaults to get_settings()
        storage: Record store to use; defaults to SQLite at the configured path
        notifier: Receiver of reminder notifications; defaults to the
                  tracker's NotificationQueue

    Records already in the store are loaded into memory. A failed load
    does not raise: the tracker starts empty and `startup_result` holds
    the error message.

    Returns:
        A FinanceTracker whose scheduler has not been started yet

    Raises:
        StorageError: If the database cannot be opened or its schema created
    """
    settings = settings or get_settings()
    app_settings = settings.app
    reminder_settings = settings.reminders

    client = None
    if storage is None:
        client = SQLiteClient(settings.database)
        storage = SQLiteRecordStorage(client)
    storage.create_schema()

    audit_logger = AuditLogger()
    reports = ReportGenerator(app_settings.currency_symbol)
    state = AppState(app_settings.default_categories_list)
    notifications = NotificationQueue()

    scheduler = None
    if reminder_settings.enabled:
        scheduler = ReminderScheduler(
            provider=lambda: list(state.reminders),
            notifier=notifier or notifications.push,
            interval=reminder_settings.check_interval_seconds,
            audit_logger=audit_logger,
        )

    tracker = FinanceTracker(
        state=state,
        storage=storage,
        reports=reports,
        audit_logger=audit_logger,
        notifications=notifications,
        scheduler=scheduler,
        income_categories=app_settings.income_categories_list,
        currency_symbol=app_settings.currency_symbol,
        client=client,
    )

    tracker.startup_result = tracker.files.restore()
    if not tracker.startup_result.success:
        logger.warning("stored_data_not_loaded", error=tracker.startup_result.message)

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        reminders_enabled=reminder_settings.enabled,
        **tracker.state.counts(),
    )
    return tracker
