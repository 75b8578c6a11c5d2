"""Reminder notification dispatch on the asyncio event loop.

NotificationService is constructed explicitly and injected where needed.
Timers are tracked per event so deletions can cancel them, but every fire
re-validates the event and reminder first, so an untracked or late timer
never shows a notification for a deleted event or a disabled reminder.
"""

from __future__ import annotations

import asyncio
import datetime
import logging
from dataclasses import dataclass, field

from calendarkit.calendar.models import Event, Reminder
from calendarkit.core.protocols import EventLookup, NotificationProvider
from calendarkit.core.timezone_utils import now_utc

from .reminder_scheduler import ReminderScheduler

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "Calendar Reminder"


@dataclass
class ScheduledNotification:
    """Handle for one armed reminder timer."""

    event_id: str
    reminder_id: str
    fire_at: datetime.datetime
    handle: asyncio.TimerHandle | None = field(default=None, repr=False)

    @property
    def cancelled(self) -> bool:
        return self.handle is not None and self.handle.cancelled()

    def cancel(self) -> None:
        if self.handle is not None:
            self.handle.cancel()


def notification_body(event: Event) -> str:
    """Body text for an event reminder."""
    if event.time:
        return f"{event.title} at {event.time}"
    return event.title


class NotificationService:
    """Schedules reminder notifications and shows them through a provider."""

    def __init__(
        self,
        provider: NotificationProvider,
        event_lookup: EventLookup,
        scheduler: ReminderScheduler | None = None,
    ):
        """Initialize service.

        Args:
            provider: Platform notification API
            event_lookup: Returns the current event for an ID, None once deleted
            scheduler: Reminder scheduler (defaults to one using now_utc)
        """
        self.provider = provider
        self.event_lookup = event_lookup
        self.scheduler = scheduler or ReminderScheduler()
        self.permission_granted = False
        self._scheduled: dict[str, list[ScheduledNotification]] = {}
        self.shown_count = 0

    async def request_permission(self) -> bool:
        """Ask the provider for permission and remember the answer."""
        try:
            self.permission_granted = bool(await self.provider.request_permission())
        except Exception:
            logger.exception("Notification permission request failed")
            self.permission_granted = False
        logger.info("Notification permission granted: %s", self.permission_granted)
        return self.permission_granted

    def schedule(
        self, event: Event, now: datetime.datetime | None = None
    ) -> list[ScheduledNotification]:
        """Arm timers for the pending reminders of event.

        Previously armed timers for the event are cancelled first, so this
        can be called again after every edit. Must be called from within a
        running event loop.
        """
        self.cancel_event(event.id)
        if not self.permission_granted:
            logger.debug("Permission not granted; not scheduling reminders for %s", event.id)
            return []

        loop = asyncio.get_running_loop()
        now = now or self.scheduler.time_provider()
        armed: list[ScheduledNotification] = []
        for scheduled in self.scheduler.pending(event, now):
            delay = (scheduled.fire_at - now).total_seconds()
            entry = ScheduledNotification(
                event_id=event.id,
                reminder_id=scheduled.reminder.id,
                fire_at=scheduled.fire_at,
            )
            entry.handle = loop.call_later(delay, self._fire, event.id, scheduled.reminder.id)
            armed.append(entry)
            logger.debug(
                "Scheduled reminder %s for event %s in %.0fs", entry.reminder_id, event.id, delay
            )
        if armed:
            self._scheduled[event.id] = armed
        return armed

    def scheduled_for(self, event_id: str) -> list[ScheduledNotification]:
        """Currently armed timers for an event."""
        return list(self._scheduled.get(event_id, []))

    def cancel_event(self, event_id: str) -> int:
        """Cancel armed timers for an event. Returns the number cancelled."""
        entries = self._scheduled.pop(event_id, [])
        for entry in entries:
            entry.cancel()
        return len(entries)

    def cancel_all(self) -> None:
        """Cancel every armed timer."""
        for event_id in list(self._scheduled):
            self.cancel_event(event_id)

    def _current_reminder(self, event: Event, reminder_id: str) -> Reminder | None:
        for reminder in event.reminders:
            if reminder.id == reminder_id:
                return reminder
        return None

    def _fire(self, event_id: str, reminder_id: str) -> None:
        """Timer callback: re-validate, then show the notification."""
        entries = self._scheduled.get(event_id, [])
        remaining = [e for e in entries if e.reminder_id != reminder_id]
        if remaining:
            self._scheduled[event_id] = remaining
        else:
            self._scheduled.pop(event_id, None)

        if not self.permission_granted:
            logger.debug("Dropping reminder %s: permission revoked", reminder_id)
            return
        event = self.event_lookup(event_id)
        if event is None:
            logger.debug("Dropping reminder %s: event %s was deleted", reminder_id, event_id)
            return
        reminder = self._current_reminder(event, reminder_id)
        if reminder is None or not reminder.enabled:
            logger.debug("Dropping reminder %s: removed or disabled", reminder_id)
            return
        self._show(event)

    def _show(self, event: Event) -> None:
        try:
            self.provider.show(NOTIFICATION_TITLE, notification_body(event), tag=event.id)
            self.shown_count += 1
        except Exception:
            logger.exception("Notification provider failed for event %s", event.id)

    async def show_test_notification(self) -> bool:
        """Show a sample notification, asking for permission if needed."""
        if not self.permission_granted and not await self.request_permission():
            return False
        now = now_utc()
        self._show(
            Event(
                id="test",
                title="Test Notification",
                date=now.date(),
                time="12:00",
                category="test",
                created_at=now,
                updated_at=now,
            )
        )
        return True
