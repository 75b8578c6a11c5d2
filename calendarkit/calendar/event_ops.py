"""Create, update and delete helpers for stored event collections.

All helpers return new objects; the input collections are never mutated.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from typing import Any

from calendarkit.core.timezone_utils import now_utc

from .models import Event

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = frozenset({"id", "created_at", "createdAt"})
_TIMESTAMP_FIELDS = frozenset({"updated_at", "updatedAt"})
_FIELD_BY_ALIAS = {info.alias: name for name, info in Event.model_fields.items() if info.alias}


def new_event_id() -> str:
    """Return a fresh, unique event ID."""
    return f"event-{uuid.uuid4().hex}"


def create_event(**fields: Any) -> Event:
    """Create an event from form fields, assigning id and timestamps.

    Raises:
        pydantic.ValidationError: If the fields do not form a valid event
    """
    now = now_utc()
    data = {k: v for k, v in fields.items() if k not in _IMMUTABLE_FIELDS | _TIMESTAMP_FIELDS}
    event = Event.model_validate({**data, "id": new_event_id(), "created_at": now, "updated_at": now})
    logger.debug("Created event %s (%r)", event.id, event.title)
    return event


def update_event(events: Iterable[Event], event_id: str, **updates: Any) -> list[Event]:
    """Return events with one event updated and its updated_at refreshed.

    id and created_at cannot be changed and updated_at cannot be set. Updates
    may use snake_case or camelCase keys. Unknown ids leave the list as is.

    Raises:
        pydantic.ValidationError: If the updated event would be invalid
    """
    ignored = (_IMMUTABLE_FIELDS | _TIMESTAMP_FIELDS).intersection(updates)
    if ignored:
        logger.warning("Ignoring managed fields in update of %s: %s", event_id, sorted(ignored))
    # camelCase keys would shadow the snake_case dump when revalidated
    changes = {
        _FIELD_BY_ALIAS.get(k, k): v
        for k, v in updates.items()
        if k not in _IMMUTABLE_FIELDS | _TIMESTAMP_FIELDS
    }

    result: list[Event] = []
    for event in events:
        if event.id == event_id:
            merged = {**event.model_dump(), **changes, "updated_at": now_utc()}
            event = Event.model_validate(merged)
        result.append(event)
    return result


def delete_event(events: Iterable[Event], event_id: str) -> list[Event]:
    """Return events without the event with event_id."""
    return [event for event in events if event.id != event_id]


def find_event(events: Iterable[Event], event_id: str) -> Event | None:
    """Return the event with event_id, or None."""
    for event in events:
        if event.id == event_id:
            return event
    return None
