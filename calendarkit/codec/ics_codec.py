"""iCalendar (ICS) export/import for calendarkit events."""

from __future__ import annotations

import datetime
import logging
import uuid
from collections.abc import Iterable
from typing import Any

from icalendar import Calendar
from pydantic import ValidationError

from calendarkit.calendar.models import Event, ExportOptions, ImportResult
from calendarkit.core.timezone_utils import now_utc
from calendarkit.exceptions import ImportParseError, ImportValidationError

from .filters import filter_events

logger = logging.getLogger(__name__)

PRODUCT_ID = "-//Calendar App//EN"
INVALID_ICS = "Invalid ICS format"


def _escape_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\n", "\\n")


def to_ics(
    events: Iterable[Event],
    options: ExportOptions | None = None,
    product_id: str = PRODUCT_ID,
) -> str:
    """Serialize events to an iCalendar document.

    Events are written as all-day entries (DTSTART and DTEND are both the
    event date). Optional DESCRIPTION and LOCATION lines are omitted when
    empty. Lines are CRLF separated.
    """
    stamp = now_utc().strftime("%Y%m%dT%H%M%SZ")
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{product_id}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for event in filter_events(events, options):
        day = event.date.strftime("%Y%m%d")
        lines.extend(
            [
                "BEGIN:VEVENT",
                f"UID:{event.id}",
                f"DTSTART:{day}",
                f"DTEND:{day}",
                f"SUMMARY:{event.title}",
                f"DESCRIPTION:{_escape_newlines(event.description)}" if event.description else "",
                f"LOCATION:{event.location}" if event.location else "",
                f"DTSTAMP:{stamp}",
                "END:VEVENT",
            ]
        )
    lines.append("END:VCALENDAR")
    return "\r\n".join(line for line in lines if line)


def _parse_calendar(text: str) -> Calendar:
    """Parse ICS text.

    Raises:
        ImportParseError: If the text is not an iCalendar document
    """
    if not text or not text.strip():
        raise ImportParseError(INVALID_ICS)
    try:
        return Calendar.from_ical(text)
    except ValueError as e:
        raise ImportParseError(INVALID_ICS) from e


def _text(component: Any, name: str) -> str | None:
    value = component.get(name)
    if value is None:
        return None
    value = str(value)
    return value or None


def _component_to_event(component: Any, position: int) -> Event:
    """Map one VEVENT onto an Event.

    Raises:
        ImportValidationError: If SUMMARY or DTSTART is missing or invalid
    """
    summary = _text(component, "SUMMARY")
    dtstart = component.get("DTSTART")
    if not summary or not summary.strip() or dtstart is None:
        raise ImportValidationError(f"Event {position}: Missing required fields", position)

    try:
        # Broken values only fail when .dt is read
        start = dtstart.dt
    except (AttributeError, ValueError) as e:
        logger.debug("VEVENT %d has an unreadable DTSTART: %s", position, e)
        raise ImportValidationError(f"Event {position}: Invalid format", position) from e
    if not isinstance(start, datetime.date):
        raise ImportValidationError(f"Event {position}: Invalid format", position)

    time_str = None
    if isinstance(start, datetime.datetime):
        time_str = start.strftime("%H:%M")
        start = start.date()

    try:
        return Event(
            id=_text(component, "UID") or f"imported-{uuid.uuid4().hex}",
            title=summary,
            date=start,
            time=time_str,
            description=_text(component, "DESCRIPTION"),
            location=_text(component, "LOCATION"),
        )
    except ValidationError as e:
        logger.debug("VEVENT %d failed validation: %s", position, e)
        raise ImportValidationError(f"Event {position}: Invalid format", position) from e


def from_ics(text: str) -> ImportResult:
    """Import VEVENT entries from an iCalendar document.

    Times are taken as written (wall clock of DTSTART) and stored as local.
    """
    try:
        calendar = _parse_calendar(text)
    except ImportParseError as e:
        logger.warning("ICS import failed: %s", e)
        return ImportResult.failed(str(e))

    components = calendar.walk("VEVENT")
    result = ImportResult(success=True)
    for position, component in enumerate(components, start=1):
        try:
            result.events.append(_component_to_event(component, position))
        except ImportValidationError as e:
            result.add_error(str(e))

    result.events_added = len(result.events)
    result.events_skipped = len(components) - len(result.events)
    result.success = not result.errors
    logger.info("ICS import: %d added, %d skipped", result.events_added, result.events_skipped)
    return result
