"""Import/export adapters for calendarkit events."""

from .csv_codec import from_csv, to_csv
from .event_codec import EventCodec
from .ics_codec import from_ics, to_ics
from .json_codec import from_json, to_json

__all__ = [
    "EventCodec",
    "from_csv",
    "from_ics",
    "from_json",
    "to_csv",
    "to_ics",
    "to_json",
]
