"""
Tests for the periodic reminder check

The background thread is exercised with a long interval: only the
immediate first check runs while the test waits on it.
"""

import threading

import pytest
from datetime import date

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEventType
from finance_tracker.models.records import Reminder
from finance_tracker.orchestrator import NotificationQueue
from finance_tracker.reminders import ReminderScheduler, due_reminders, reminder_message


TODAY = date(2024, 3, 10)


@pytest.fixture
def reminders():
    return [
        Reminder(id=1, due_date=date(2024, 3, 1), description="Rent"),
        Reminder(id=2, due_date=TODAY, description="Electricity"),
        Reminder(id=3, due_date=date(2024, 3, 20), description="Water"),
        Reminder(id=4, due_date=date(2024, 2, 1), description="Phone", paid=True),
    ]


class TestDueReminders:
    """Tests for selecting due reminders."""

    def test_due_reminders(self, reminders):
        """Test unpaid reminders due today or earlier."""
        assert [r.id for r in due_reminders(reminders, TODAY)] == [1, 2]

    def test_message(self, reminders):
        """Test the notification text."""
        assert reminder_message(reminders[0]) == "Upcoming payment due: Rent"


class TestReminderScheduler:
    """Tests for ReminderScheduler."""

    def test_check_now_notifies_each_due_reminder(self, reminders):
        """Test one notification per due reminder."""
        received = []
        scheduler = ReminderScheduler(
            provider=lambda: reminders,
            notifier=lambda reminder, message: received.append(message),
            today=lambda: TODAY,
        )
        notified = scheduler.check_now()

        assert [r.id for r in notified] == [1, 2]
        assert received == [
            "Upcoming payment due: Rent",
            "Upcoming payment due: Electricity",
        ]

    def test_no_suppression_between_checks(self, reminders):
        """Test that an unpaid reminder is notified again on the next check."""
        received = []
        scheduler = ReminderScheduler(
            provider=lambda: reminders,
            notifier=lambda reminder, message: received.append(reminder.id),
            today=lambda: TODAY,
        )
        scheduler.check_now()
        scheduler.check_now()
        assert received == [1, 2, 1, 2]

    def test_failing_notifier_does_not_stop_check(self, reminders):
        """Test that one failed notification does not skip the others."""
        received = []

        def notifier(reminder, message):
            if reminder.id == 1:
                raise RuntimeError("display unavailable")
            received.append(reminder.id)

        scheduler = ReminderScheduler(lambda: reminders, notifier, today=lambda: TODAY)
        scheduler.check_now()
        assert received == [2]

    def test_notifications_are_audited(self, reminders):
        """Test that each notification is logged."""
        audit_logger = AuditLogger()
        scheduler = ReminderScheduler(
            lambda: reminders,
            lambda reminder, message: None,
            today=lambda: TODAY,
            audit_logger=audit_logger,
        )
        scheduler.check_now()

        events = audit_logger.recent_events()
        assert [e.event_type for e in events] == [AuditEventType.REMINDER_NOTIFIED] * 2

    def test_start_fires_immediately_and_stop_ends_thread(self, reminders):
        """Test the lifecycle: first check on start, clean stop."""
        fired = threading.Event()
        queue = NotificationQueue()

        def notifier(reminder, message):
            queue.push(reminder, message)
            fired.set()

        scheduler = ReminderScheduler(
            lambda: reminders,
            notifier,
            interval=3600,
            today=lambda: TODAY,
        )
        scheduler.start()
        try:
            assert fired.wait(timeout=5)
            assert scheduler.is_running is True
        finally:
            scheduler.stop()

        assert scheduler.is_running is False
        assert "Upcoming payment due: Rent" in queue.drain()

    def test_start_twice_keeps_one_thread(self, reminders):
        """Test that a second start is ignored while running."""
        scheduler = ReminderScheduler(lambda: [], lambda r, m: None, interval=3600)
        scheduler.start()
        try:
            first_thread = scheduler._thread
            scheduler.start()
            assert scheduler._thread is first_thread
        finally:
            scheduler.stop()

    def test_interval_must_be_positive(self):
        """Test that a zero interval is rejected."""
        with pytest.raises(ValueError):
            ReminderScheduler(lambda: [], lambda r, m: None, interval=0)

    def test_provider_list_is_copied(self, reminders):
        """Test that changing the list during a check does not break it."""

        def notifier(reminder, message):
            reminders.append(Reminder(due_date=TODAY, description="added during check"))

        scheduler = ReminderScheduler(lambda: reminders, notifier, today=lambda: TODAY)
        assert len(scheduler.check_now()) == 2


class TestNotificationQueue:
    """Tests for the UI notification inbox."""

    def test_drain_empties_queue(self, reminders):
        """Test that drain returns messages once, in order."""
        queue = NotificationQueue()
        queue.push(reminders[0], "first")
        queue.push(reminders[1], "second")
        assert queue.drain() == ["first", "second"]
        assert queue.drain() == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
