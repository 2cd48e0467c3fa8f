"""Reminder scheduling package."""

from finance_tracker.reminders.scheduler import (
    ReminderScheduler,
    due_reminders,
    reminder_message,
)

__all__ = ["ReminderScheduler", "due_reminders", "reminder_message"]
