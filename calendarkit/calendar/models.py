"""Data models for calendar events - calendarkit version."""

import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from calendarkit.core.timezone_utils import is_valid_time
from calendarkit.core.timezone_utils import now_utc as _now_utc

RecurrenceType = Literal["weekly", "monthly"]
TimezoneMode = Literal["local", "JST"]
ReminderType = Literal["notification", "email"]
ExportFormat = Literal["ics", "json", "csv"]


class CalendarModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EventCategory(CalendarModel):
    """User-defined event category."""

    id: str = Field(..., description="Unique category ID")
    name: str = Field(..., description="Display name")
    color: str = Field(default="#6B7280", description="Hex color")
    icon: Optional[str] = Field(default=None, description="Optional icon glyph")

    model_config = ConfigDict(frozen=True)


class Reminder(CalendarModel):
    """Reminder owned by an event."""

    id: str = Field(..., description="Reminder ID")
    type: ReminderType = Field(default="notification", description="Delivery channel")
    time: int = Field(default=0, ge=0, description="Minutes before the event")
    enabled: bool = Field(default=True, description="Whether the reminder fires")


class Event(CalendarModel):
    """Stored event definition; one row per user entry, not per occurrence."""

    # Core properties
    id: str = Field(..., description="Event ID")
    title: str = Field(..., description="Event title")
    description: Optional[str] = Field(default=None, description="Event description")

    # Time information
    date: datetime.date = Field(..., description="Anchor date (first occurrence)")
    time: Optional[str] = Field(default=None, description="Start time, HH:mm 24h")
    timezone: TimezoneMode = Field(default="local", description="Timezone mode of date/time")

    location: Optional[str] = Field(default=None, description="Event location")
    color: Optional[str] = Field(default=None, description="Hex color override")
    category: Union[EventCategory, str] = Field(
        default="uncategorized", description="Category or category ID"
    )

    # Recurrence
    is_recurring: bool = Field(default=False, description="Recurring event flag")
    recurrence_type: Optional[RecurrenceType] = Field(default=None, description="Recurrence step")
    recurrence_end: Optional[datetime.date] = Field(
        default=None, description="Last possible occurrence date, inclusive"
    )

    reminders: list[Reminder] = Field(default_factory=list, description="Reminders")

    # Metadata
    created_at: datetime.datetime = Field(default_factory=_now_utc, description="Creation time")
    updated_at: datetime.datetime = Field(default_factory=_now_utc, description="Last modification time")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        """Titles are stored trimmed and must not be empty."""
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("time", mode="before")
    @classmethod
    def time_well_formed(cls, value: Optional[str]) -> Optional[str]:
        """Accept HH:mm or an empty value (no time)."""
        if value is None or value == "":
            return None
        if not is_valid_time(value):
            raise ValueError(f"time must be HH:mm, got {value!r}")
        return value

    @field_validator("recurrence_type", "recurrence_end", mode="before")
    @classmethod
    def empty_as_none(cls, value: object) -> object:
        """Forms submit empty strings for unset recurrence fields."""
        return None if value == "" else value

    @property
    def category_id(self) -> str:
        """ID of the referenced category, whichever form is stored."""
        if isinstance(self.category, EventCategory):
            return self.category.id
        return self.category

    @field_serializer("date", "recurrence_end", when_used="unless-none")
    def serialize_date(self, d: datetime.date) -> str:
        """Serialize dates as yyyy-MM-dd."""
        return d.isoformat()

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, dt: datetime.datetime) -> str:
        """Serialize timestamps to ISO format."""
        return dt.isoformat()


class Occurrence(Event):
    """One concrete day on which an event appears. Derived, never stored."""

    display_date: datetime.date = Field(..., description="Day this occurrence is shown on")

    @field_serializer("display_date")
    def serialize_display_date(self, d: datetime.date) -> str:
        """Serialize display date as yyyy-MM-dd."""
        return d.isoformat()


class DateRange(CalendarModel):
    """Inclusive date range."""

    start: datetime.date
    end: datetime.date

    def contains(self, day: datetime.date) -> bool:
        """Check if day lies within the range."""
        return self.start <= day <= self.end


class ExportOptions(CalendarModel):
    """Options shared by all export formats."""

    format: ExportFormat = Field(default="json", description="Output format")
    date_range: Optional[DateRange] = Field(
        default=None, description="Only export events with an occurrence in this range"
    )
    include_recurring: bool = Field(default=True, description="Include recurring events")
    categories: Optional[list[str]] = Field(
        default=None, description="Category IDs to keep; empty or absent keeps all"
    )


class ImportResult(CalendarModel):
    """Result of an import operation."""

    success: bool
    events_added: int = 0
    events_skipped: int = 0
    errors: list[str] = Field(default_factory=list)

    # Accepted events, not part of the serialized result
    events: list[Event] = Field(default_factory=list, exclude=True)

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)

    @classmethod
    def failed(cls, message: str) -> "ImportResult":
        """Result for a document that could not be parsed at all."""
        return cls(success=False, events_added=0, events_skipped=0, errors=[message])
