"""Event models, recurrence expansion and per-day lookup."""

from .categories import UNCATEGORIZED, CategoryResolver
from .grid import CalendarGrid
from .models import (
    DateRange,
    Event,
    EventCategory,
    ExportOptions,
    ImportResult,
    Occurrence,
    Reminder,
)
from .occurrence_index import OccurrenceIndex, occurrences_between, occurrences_on
from .recurrence import RecurrenceExpander, expand

__all__ = [
    "UNCATEGORIZED",
    "CalendarGrid",
    "CategoryResolver",
    "DateRange",
    "Event",
    "EventCategory",
    "ExportOptions",
    "ImportResult",
    "Occurrence",
    "OccurrenceIndex",
    "RecurrenceExpander",
    "Reminder",
    "expand",
    "occurrences_between",
    "occurrences_on",
]
