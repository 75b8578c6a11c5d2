"""Reminder fire-time computation for calendarkit events."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from dataclasses import dataclass

from calendarkit.calendar.models import Event, Reminder
from calendarkit.core.timezone_utils import (
    TimezoneResolver,
    convert_event_time,
    now_utc,
    zone_for,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledReminder:
    """A reminder paired with the absolute instant it should fire."""

    reminder: Reminder
    fire_at: datetime.datetime


def event_instant(
    event: Event, resolver: TimezoneResolver | None = None
) -> datetime.datetime:
    """Return the event's start as an aware datetime in the local zone.

    A missing time means midnight in the event's declared timezone.
    """
    time_str = event.time or "00:00"
    local_date, local_time = convert_event_time(
        event.date, time_str, event.timezone, "local", resolver=resolver
    )
    hour, minute = (int(part) for part in local_time.split(":"))
    return datetime.datetime.combine(
        local_date, datetime.time(hour, minute), tzinfo=zone_for("local", resolver)
    )


def pending_fire_times(
    event: Event,
    now: datetime.datetime | None = None,
    resolver: TimezoneResolver | None = None,
) -> list[ScheduledReminder]:
    """Return enabled reminders of event that have not fired yet.

    Args:
        event: Event whose reminders to schedule
        now: Reference instant; naive values are taken as UTC
        resolver: Optional timezone resolver

    Returns:
        ScheduledReminder entries with fire_at > now, in reminder order
    """
    if now is None:
        now = now_utc()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=datetime.UTC)

    start = event_instant(event, resolver)
    pending: list[ScheduledReminder] = []
    for reminder in event.reminders:
        if not reminder.enabled:
            continue
        fire_at = start - datetime.timedelta(minutes=reminder.time)
        if fire_at > now:
            pending.append(ScheduledReminder(reminder=reminder, fire_at=fire_at))
        else:
            logger.debug(
                "Reminder %s of event %s already due at %s", reminder.id, event.id, fire_at
            )
    return pending


class ReminderScheduler:
    """Computes pending reminder fire times against an injected clock."""

    def __init__(
        self,
        time_provider: Callable[[], datetime.datetime] = now_utc,
        resolver: TimezoneResolver | None = None,
    ):
        self.time_provider = time_provider
        self.resolver = resolver

    def pending(
        self, event: Event, now: datetime.datetime | None = None
    ) -> list[ScheduledReminder]:
        """Pending reminders of event, recomputed against the current time."""
        return pending_fire_times(event, now or self.time_provider(), resolver=self.resolver)

    def pending_for_events(
        self, events: list[Event], now: datetime.datetime | None = None
    ) -> list[tuple[Event, ScheduledReminder]]:
        """Pending reminders across events, ordered by fire time."""
        now = now or self.time_provider()
        entries = [
            (event, scheduled)
            for event in events
            for scheduled in self.pending(event, now)
        ]
        return sorted(entries, key=lambda item: item[1].fire_at)
