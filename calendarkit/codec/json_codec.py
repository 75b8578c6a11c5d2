"""JSON export/import for calendarkit events."""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from calendarkit.calendar.models import Event, ExportOptions, ImportResult
from calendarkit.core.timezone_utils import now_utc
from calendarkit.exceptions import ImportParseError, ImportValidationError

from .filters import filter_events

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
INVALID_JSON = "Invalid JSON format"


def to_json(
    events: Iterable[Event],
    options: ExportOptions | None = None,
    version: str = EXPORT_VERSION,
) -> str:
    """Serialize events to the JSON export document.

    The document is ``{version, exportDate, events, options}``.
    """
    options = options or ExportOptions(format="json")
    selected = filter_events(events, options)
    document = {
        "version": version,
        "exportDate": now_utc().isoformat(),
        "events": [e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in selected],
        "options": options.model_dump(mode="json", by_alias=True, exclude_none=True),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def _parse_records(text: str) -> list[Any]:
    """Return the candidate event records of a JSON document.

    Raises:
        ImportParseError: If the text is not JSON or has no event container
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError, RecursionError) as e:
        raise ImportParseError(INVALID_JSON) from e

    if isinstance(data, dict):
        records = data.get("events") or []
    elif isinstance(data, list):
        records = data
    else:
        raise ImportParseError(INVALID_JSON)

    if not isinstance(records, list):
        raise ImportParseError(INVALID_JSON)
    return records


def _validate_record(record: Any, position: int) -> Event:
    """Build an Event from one record.

    Raises:
        ImportValidationError: If required fields are missing or invalid
    """
    if not isinstance(record, dict):
        raise ImportValidationError(f"Event {position}: Invalid format", position)
    title = record.get("title")
    if not record.get("date") or not isinstance(title, str) or not title.strip():
        raise ImportValidationError(f"Event {position}: Missing required fields", position)

    data = dict(record)
    data.setdefault("id", f"imported-{uuid.uuid4().hex}")
    try:
        return Event.model_validate(data)
    except ValidationError as e:
        logger.debug("Event %d failed validation: %s", position, e)
        raise ImportValidationError(f"Event {position}: Invalid format", position) from e


def from_json(text: str) -> ImportResult:
    """Import events from a JSON export document.

    Records missing title or date are skipped and reported; an unparseable
    document fails as a whole with a single error.
    """
    try:
        records = _parse_records(text)
    except ImportParseError as e:
        logger.warning("JSON import failed: %s", e)
        return ImportResult.failed(str(e))

    result = ImportResult(success=True)
    for position, record in enumerate(records, start=1):
        try:
            result.events.append(_validate_record(record, position))
        except ImportValidationError as e:
            result.add_error(str(e))

    result.events_added = len(result.events)
    result.events_skipped = len(records) - len(result.events)
    result.success = not result.errors
    logger.info(
        "JSON import: %d added, %d skipped", result.events_added, result.events_skipped
    )
    return result
