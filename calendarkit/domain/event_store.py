"""JSON-backed event store for calendarkit with atomic writes."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from calendarkit.calendar.models import Event

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_FILE = "calendar-events.json"


class JsonEventStore:
    """Persistent event list stored as a JSON array of camelCase records.

    Satisfies the EventStore protocol: load() returns every stored event,
    save() replaces the file contents.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Create a JsonEventStore.

        Args:
            path: Optional path to JSON file. Defaults to ./calendar-events.json.
        """
        self._path = Path(path) if path else Path.cwd() / DEFAULT_EVENTS_FILE
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Any) -> JsonEventStore:
        """Build a store at the events_path of a settings object (e.g. Config)."""
        return cls(getattr(settings, "events_path", None))

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Event]:
        """Load events from disk.

        A missing file is an empty store. An unreadable file logs a warning
        and also loads as empty; records that fail validation are dropped
        with a warning.
        """
        with self._lock:
            if not self._path.exists():
                logger.debug("Event store file not found; starting empty: %s", self._path)
                return []
            try:
                with self._path.open("r", encoding="utf-8") as fh:
                    data = json.load(fh)
                if not isinstance(data, list):
                    raise ValueError("event store JSON root must be an array")  # noqa: TRY004
            except (OSError, ValueError) as exc:
                logger.warning("Failed to read event store %s: %s", self._path, exc)
                return []

        events: list[Event] = []
        for index, record in enumerate(data):
            try:
                events.append(Event.model_validate(record))
            except ValidationError as exc:
                logger.warning("Dropping invalid stored event #%d: %s", index, exc)
        logger.debug("Loaded %d events from %s", len(events), self._path)
        return events

    def save(self, events: list[Event]) -> None:
        """Persist events atomically.

        Writes to a temporary file in the same directory then replaces the
        store file, so readers never see a partial write.

        Raises:
            OSError: If the file cannot be written
        """
        data = [e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in events]
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = None
            try:
                with tempfile.NamedTemporaryFile(
                    "w", dir=self._path.parent, delete=False, encoding="utf-8"
                ) as tf:
                    tmp_path = Path(tf.name)
                    json.dump(data, tf, ensure_ascii=False, indent=2)
                    tf.flush()
                    os.fsync(tf.fileno())
                tmp_path.replace(self._path)
            except OSError:
                if tmp_path is not None:
                    with contextlib.suppress(OSError):
                        tmp_path.unlink()
                raise
        logger.info("Saved %d events to %s", len(events), self._path)
