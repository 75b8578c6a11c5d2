"""Export filtering shared by all codec formats."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from calendarkit.calendar.models import Event, ExportOptions
from calendarkit.calendar.recurrence import RecurrenceExpander

logger = logging.getLogger(__name__)


def filter_events(
    events: Iterable[Event],
    options: ExportOptions | None,
    expander: RecurrenceExpander | None = None,
) -> list[Event]:
    """Apply export options to an event collection, keeping input order.

    - categories: keep only events whose category id is listed; an empty or
      missing list keeps everything
    - include_recurring: drop recurring events when False
    - date_range: keep events with at least one occurrence in the range
    """
    events = list(events)
    if options is None:
        return events

    result = events
    if options.categories:
        wanted = set(options.categories)
        result = [e for e in result if e.category_id in wanted]

    if not options.include_recurring:
        result = [e for e in result if not e.is_recurring]

    if options.date_range is not None:
        expander = expander or RecurrenceExpander()
        date_range = options.date_range
        result = [
            e
            for e in result
            if expander.expand_between(e, date_range.start, date_range.end)
        ]

    if len(result) != len(events):
        logger.debug("Export filter kept %d of %d events", len(result), len(events))
    return result
