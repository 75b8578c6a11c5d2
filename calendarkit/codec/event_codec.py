"""Format-dispatching facade over the JSON, CSV and ICS adapters."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from calendarkit.calendar.models import Event, EventCategory, ExportFormat, ExportOptions, ImportResult

from . import csv_codec, ics_codec, json_codec

logger = logging.getLogger(__name__)

MIME_TYPES: dict[str, str] = {
    "json": "application/json",
    "csv": "text/csv",
    "ics": "text/calendar",
}


class EventCodec:
    """Serializes event collections to and from the supported file formats."""

    def __init__(self, settings: Any = None, categories: Iterable[EventCategory] = ()):
        """Initialize codec.

        Args:
            settings: Optional configuration object (export_version, product_id)
            categories: Known categories, used to name categories in CSV output
        """
        self.export_version = getattr(settings, "export_version", json_codec.EXPORT_VERSION)
        self.product_id = getattr(settings, "product_id", ics_codec.PRODUCT_ID)
        self.categories = list(categories)

    def to_json(self, events: Iterable[Event], options: ExportOptions | None = None) -> str:
        return json_codec.to_json(events, options, version=self.export_version)

    def from_json(self, text: str) -> ImportResult:
        return json_codec.from_json(text)

    def to_csv(self, events: Iterable[Event], options: ExportOptions | None = None) -> str:
        return csv_codec.to_csv(events, options, categories=self.categories)

    def from_csv(self, text: str) -> ImportResult:
        return csv_codec.from_csv(text)

    def to_ics(self, events: Iterable[Event], options: ExportOptions | None = None) -> str:
        return ics_codec.to_ics(events, options, product_id=self.product_id)

    def from_ics(self, text: str) -> ImportResult:
        return ics_codec.from_ics(text)

    def export(self, events: Iterable[Event], options: ExportOptions) -> str:
        """Serialize events in the format named by options.format."""
        exporters = {"json": self.to_json, "csv": self.to_csv, "ics": self.to_ics}
        logger.debug("Exporting events as %s", options.format)
        return exporters[options.format](events, options)

    def import_text(self, text: str, fmt: ExportFormat) -> ImportResult:
        """Import events from text in the given format.

        Raises:
            ValueError: If fmt is not a supported format
        """
        importers = {"json": self.from_json, "csv": self.from_csv, "ics": self.from_ics}
        if fmt not in importers:
            raise ValueError(f"Unsupported import format: {fmt!r}")
        return importers[fmt](text)

    @staticmethod
    def filename_for(options: ExportOptions, stem: str = "calendar-export") -> str:
        """Suggested download filename for an export."""
        return f"{stem}.{options.format}"

    @staticmethod
    def mime_type_for(options: ExportOptions) -> str:
        """MIME type of an export."""
        return MIME_TYPES[options.format]
