"""Reminder scheduling, notification dispatch and event persistence."""

from .event_store import JsonEventStore
from .notifications import NotificationService, ScheduledNotification
from .reminder_scheduler import ReminderScheduler, ScheduledReminder, pending_fire_times

__all__ = [
    "JsonEventStore",
    "NotificationService",
    "ReminderScheduler",
    "ScheduledNotification",
    "ScheduledReminder",
    "pending_fire_times",
]
