"""CSV export/import for calendarkit events."""

from __future__ import annotations

import csv
import datetime
import io
import logging
import uuid
from collections.abc import Iterable

from pydantic import ValidationError

from calendarkit.calendar.categories import IMPORTED_CATEGORY_ID, CategoryResolver
from calendarkit.calendar.models import Event, EventCategory, ExportOptions, ImportResult
from calendarkit.exceptions import ImportParseError, ImportValidationError

from .filters import filter_events

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Title", "Date", "Time", "Location", "Description", "Category", "Timezone"]
INVALID_CSV = "Invalid CSV format"

_TIMEZONES = ("local", "JST")


def _quote(value: str) -> str:
    """Wrap a value in double quotes, doubling embedded quotes."""
    return '"' + value.replace('"', '""') + '"'


def _quote_if_needed(value: str) -> str:
    if any(ch in value for ch in (",", '"', "\n", "\r")):
        return _quote(value)
    return value


def to_csv(
    events: Iterable[Event],
    options: ExportOptions | None = None,
    categories: Iterable[EventCategory] = (),
) -> str:
    """Serialize events to CSV text.

    Title, Location and Description are always quoted; other columns are
    quoted only when they contain a delimiter, quote or line break.
    """
    resolver = CategoryResolver(categories)
    rows = [",".join(CSV_HEADERS)]
    for event in filter_events(events, options):
        row = [
            _quote(event.title),
            event.date.isoformat(),
            event.time or "",
            _quote(event.location or ""),
            _quote(event.description or ""),
            _quote_if_needed(resolver.resolve(event).name),
            event.timezone,
        ]
        rows.append(",".join(row))
    return "\n".join(rows)


def _read_rows(text: str) -> tuple[list[str], list[tuple[int, list[str]]]]:
    """Split CSV text into the header and numbered data rows.

    Raises:
        ImportParseError: If there is no header or the text is not CSV
    """
    reader = csv.reader(io.StringIO(text))
    try:
        header = next(reader, None)
        if not header or not any(h.strip() for h in header):
            raise ImportParseError(INVALID_CSV)
        rows = []
        for row in reader:
            if not any(value.strip() for value in row):
                continue
            rows.append((reader.line_num, row))
    except csv.Error as e:
        raise ImportParseError(INVALID_CSV) from e
    return header, rows


def _row_to_event(line: int, row: list[str], columns: int) -> Event:
    """Map one CSV row onto an Event by column position.

    Raises:
        ImportValidationError: If required fields are missing or invalid
    """
    values = row + [""] * (max(columns, len(CSV_HEADERS)) - len(row))
    title, date_str, time_str, location, description, category_name, timezone = values[:7]

    if not title.strip() or not date_str.strip():
        raise ImportValidationError(f"Row {line}: Missing required fields", line)

    timezone = timezone.strip() or "local"
    try:
        if timezone not in _TIMEZONES:
            raise ValueError(f"unknown timezone {timezone!r}")
        event_date = datetime.date.fromisoformat(date_str.strip())
        return Event(
            id=f"imported-{uuid.uuid4().hex}",
            title=title,
            date=event_date,
            time=time_str.strip() or None,
            location=location or None,
            description=description or None,
            category=EventCategory(
                id=IMPORTED_CATEGORY_ID,
                name=category_name.strip() or "Imported",
                color="#6B7280",
            ),
            is_recurring=False,
            timezone=timezone,
            reminders=[],
        )
    except (ValueError, ValidationError) as e:
        logger.debug("Row %d failed validation: %s", line, e)
        raise ImportValidationError(f"Row {line}: Invalid format", line) from e


def from_csv(text: str) -> ImportResult:
    """Import events from CSV text.

    The first line is the header. Rows missing Title or Date, or carrying
    unparsable values, are skipped and reported by line number.
    """
    try:
        header, rows = _read_rows(text)
    except ImportParseError as e:
        logger.warning("CSV import failed: %s", e)
        return ImportResult.failed(str(e))

    result = ImportResult(success=True)
    for line, row in rows:
        try:
            result.events.append(_row_to_event(line, row, len(header)))
        except ImportValidationError as e:
            result.add_error(str(e))

    result.events_added = len(result.events)
    result.events_skipped = len(rows) - len(result.events)
    result.success = not result.errors
    logger.info("CSV import: %d added, %d skipped", result.events_added, result.events_skipped)
    return result
