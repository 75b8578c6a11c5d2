"""Per-day occurrence lookup over a collection of events."""

from __future__ import annotations

import datetime
import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

from .models import Event, Occurrence
from .recurrence import RecurrenceExpander

logger = logging.getLogger(__name__)

_default_expander = RecurrenceExpander()


def occurrences_on(
    events: Iterable[Event],
    day: datetime.date,
    expander: RecurrenceExpander | None = None,
) -> list[Occurrence]:
    """Return all occurrences landing on day, in the input events' order.

    Args:
        events: Stored event definitions
        day: Target calendar day
        expander: Optional expander (defaults to module default settings)

    Returns:
        List of occurrences; empty when nothing falls on day
    """
    expander = expander or _default_expander
    result: list[Occurrence] = []
    for event in events:
        result.extend(expander.expand_between(event, day, day))
    return result


def occurrences_between(
    events: Iterable[Event],
    start: datetime.date,
    end: datetime.date,
    expander: RecurrenceExpander | None = None,
) -> dict[datetime.date, list[Occurrence]]:
    """Group occurrences in [start, end] by display date.

    Every day in the range has an entry, possibly empty. Each event is
    expanded once, which makes this the cheap path for month and week views.
    """
    expander = expander or _default_expander
    by_day: dict[datetime.date, list[Occurrence]] = {
        start + datetime.timedelta(days=i): [] for i in range((end - start).days + 1)
    }
    for event in events:
        for occurrence in expander.expand_between(event, start, end):
            by_day[occurrence.display_date].append(occurrence)
    return by_day


class OccurrenceIndex:
    """Memoized day -> occurrences lookup for a fixed event collection.

    Build one per rendered collection; rebuild it whenever the events change.
    """

    def __init__(self, events: Sequence[Event], expander: RecurrenceExpander | None = None):
        self._events = list(events)
        self._expander = expander or _default_expander
        self._by_day: dict[datetime.date, list[Occurrence]] = defaultdict(list)
        for event in self._events:
            for occurrence in self._expander.expand(event):
                self._by_day[occurrence.display_date].append(occurrence)
        logger.debug(
            "Indexed %d events across %d days", len(self._events), len(self._by_day)
        )

    def on(self, day: datetime.date) -> list[Occurrence]:
        """Return occurrences on day, in the input events' order."""
        return list(self._by_day.get(day, []))

    def days(self) -> list[datetime.date]:
        """Return the sorted days that have at least one occurrence."""
        return sorted(self._by_day)

    def __len__(self) -> int:
        return sum(len(items) for items in self._by_day.values())
