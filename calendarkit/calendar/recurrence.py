"""Recurrence expansion logic for calendarkit events."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Any

from dateutil.relativedelta import relativedelta

from calendarkit.exceptions import InvalidRecurrenceError, RecurrenceTooLongError

from .models import Event, Occurrence

logger = logging.getLogger(__name__)

DEFAULT_MAX_OCCURRENCES = 10_000


@dataclass
class RecurrenceExpanderConfig:
    """Configuration for recurrence expansion."""

    max_occurrences: int = DEFAULT_MAX_OCCURRENCES

    @classmethod
    def from_settings(cls, settings: Any) -> RecurrenceExpanderConfig:
        """Extract recurrence configuration from a settings object.

        Args:
            settings: Configuration object (e.g. Config) or None

        Returns:
            RecurrenceExpanderConfig with values from settings or defaults
        """
        return cls(
            max_occurrences=getattr(settings, "max_occurrences", DEFAULT_MAX_OCCURRENCES),
        )


def _step(anchor: datetime.date, recurrence_type: str, n: int) -> datetime.date:
    """Return the n-th occurrence date counted from the anchor.

    Monthly steps are always taken from the anchor so a 31st that clamps
    to the 29th in February comes back to the 31st in March.
    """
    if recurrence_type == "weekly":
        return anchor + datetime.timedelta(weeks=n)
    return anchor + relativedelta(months=n)


def _occurrence_count(start: datetime.date, end: datetime.date, recurrence_type: str) -> int:
    """Number of steps from start that land on or before end."""
    if recurrence_type == "weekly":
        return (end - start).days // 7 + 1
    months = (end.year - start.year) * 12 + (end.month - start.month)
    # The clamped date for the last month may still be after end
    if _step(start, recurrence_type, months) > end:
        months -= 1
    return months + 1


class RecurrenceExpander:
    """Expands a stored event definition into concrete per-day occurrences."""

    def __init__(self, settings: Any = None):
        """Initialize expander with configuration settings.

        Args:
            settings: Optional configuration object with recurrence settings
        """
        config = RecurrenceExpanderConfig.from_settings(settings)
        self.max_occurrences = config.max_occurrences

    def validate(self, event: Event) -> None:
        """Check the recurrence invariant of a recurring event.

        Raises:
            InvalidRecurrenceError: If recurrence fields are missing or inconsistent
        """
        if not event.is_recurring:
            return
        if event.recurrence_type is None:
            raise InvalidRecurrenceError(f"Event {event.id} is recurring but has no recurrence_type")
        if event.recurrence_type not in ("weekly", "monthly"):
            raise InvalidRecurrenceError(
                f"Event {event.id} has unsupported recurrence_type {event.recurrence_type!r}"
            )
        if event.recurrence_end is None:
            raise InvalidRecurrenceError(f"Event {event.id} is recurring but has no recurrence_end")
        if event.recurrence_end < event.date:
            raise InvalidRecurrenceError(
                f"Event {event.id} recurrence_end {event.recurrence_end} is before {event.date}"
            )

    def occurrence_dates(self, event: Event) -> list[datetime.date]:
        """Return the ascending list of dates the event occurs on.

        Raises:
            InvalidRecurrenceError: If recurrence configuration is malformed
            RecurrenceTooLongError: If the series exceeds max_occurrences
        """
        if not event.is_recurring:
            return [event.date]

        self.validate(event)
        assert event.recurrence_type is not None and event.recurrence_end is not None

        count = _occurrence_count(event.date, event.recurrence_end, event.recurrence_type)
        if count > self.max_occurrences:
            raise RecurrenceTooLongError(
                f"Event {event.id} would produce {count} occurrences "
                f"(limit {self.max_occurrences})"
            )

        dates = [_step(event.date, event.recurrence_type, n) for n in range(count)]
        logger.debug(
            "Expanded event %s (%s) to %d occurrences", event.id, event.recurrence_type, len(dates)
        )
        return dates

    def expand(self, event: Event) -> list[Occurrence]:
        """Expand an event into its occurrences in ascending date order."""
        return [_make_occurrence(event, d) for d in self.occurrence_dates(event)]

    def expand_between(
        self, event: Event, start: datetime.date, end: datetime.date
    ) -> list[Occurrence]:
        """Expand an event, keeping only occurrences within [start, end]."""
        return [
            _make_occurrence(event, d)
            for d in self.occurrence_dates(event)
            if start <= d <= end
        ]


def _make_occurrence(event: Event, display_date: datetime.date) -> Occurrence:
    # Fields were validated on the source event
    return Occurrence.model_construct(**dict(event), display_date=display_date)


_default_expander = RecurrenceExpander()


def expand(event: Event) -> list[Occurrence]:
    """Expand an event with default settings (convenience function)."""
    return _default_expander.expand(event)
