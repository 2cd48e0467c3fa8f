"""
Daily Reminder Check

A single background thread that periodically looks for unpaid reminders
that are due and hands one notification per reminder to a notifier.

The check runs once right after start() and then every `interval`
seconds of elapsed wall-clock time (not at calendar-day boundaries).
There is no acknowledgment state: a reminder that is still unpaid and
due is notified again on every cycle.

The scheduler only reads reminders. It iterates over a copy of the list
returned by the provider, so the UI thread may keep editing the state.
"""

import threading
from datetime import date
from typing import Callable, Iterable, Optional

from finance_tracker.audit import AuditLogger, get_logger
from finance_tracker.models.records import Reminder


Notifier = Callable[[Reminder, str], None]
ReminderProvider = Callable[[], Iterable[Reminder]]

DAY_SECONDS = 24 * 60 * 60

logger = get_logger(__name__)


def due_reminders(reminders: Iterable[Reminder], today: date) -> list[Reminder]:
    """Unpaid reminders whose due date is `today` or earlier."""
    return [reminder for reminder in list(reminders) if reminder.is_due(today)]


def reminder_message(reminder: Reminder) -> str:
    return f"Upcoming payment due: {reminder.description}"


class ReminderScheduler:
    """
    Cancellable periodic reminder check.

    Lifecycle: start() once at application startup, stop() at shutdown.
    A stopped scheduler can be started again.
    """

    def __init__(
        self,
        provider: ReminderProvider,
        notifier: Notifier,
        interval: float = DAY_SECONDS,
        today: Callable[[], date] = date.today,
        audit_logger: Optional[AuditLogger] = None,
    ):
        if interval <= 0:
            raise ValueError("Reminder check interval must be positive")
        self._provider = provider
        self._notifier = notifier
        self._interval = interval
        self._today = today
        self._audit_logger = audit_logger
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run,
                name="reminder-check",
                daemon=True,
            )
            self._thread.start()
        logger.info("reminder_scheduler_started", interval_seconds=self._interval)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("reminder_scheduler_stopped")

    def check_now(self) -> list[Reminder]:
        """Run one check on the calling thread; returns the notified reminders."""
        due = due_reminders(self._provider(), self._today())
        for reminder in due:
            message = reminder_message(reminder)
            try:
                self._notifier(reminder, message)
            except Exception as e:
                logger.error("reminder_notification_failed", error=str(e), reminder_id=reminder.id)
                continue
            if self._audit_logger:
                self._audit_logger.log_reminder_notified(reminder.id, reminder.description)
        return due

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.check_now()
            except Exception as e:
                logger.error("reminder_check_failed", error=str(e))
            if self._stop_event.wait(self._interval):
                break
