"""Custom exception hierarchy for calendarkit.

Recurrence and time errors are raised to the caller. Import errors are
raised inside the codecs and converted into ImportResult entries, so an
import never raises for bad input; it reports.
"""


class CalendarKitError(Exception):
    """Base exception for all calendarkit errors."""


class RecurrenceError(CalendarKitError):
    """Base for errors raised while expanding a recurring event."""


class InvalidRecurrenceError(RecurrenceError):
    """Recurrence configuration is malformed.

    Raised when:
    - is_recurring is set but recurrence_type or recurrence_end is missing
    - recurrence_end falls before the anchor date
    - recurrence_type is not a supported step
    """


class RecurrenceTooLongError(RecurrenceError):
    """Recurrence would produce more occurrences than the configured cap."""


class InvalidTimeError(CalendarKitError):
    """Time-of-day string is not HH:mm, or a timezone mode is unknown."""


class EventImportError(CalendarKitError):
    """Base for import failures."""


class ImportParseError(EventImportError):
    """Whole document could not be parsed.

    Aborts the import; the codec reports a single error message.
    """


class ImportValidationError(EventImportError):
    """A single record failed validation.

    Non-fatal: collected into ImportResult.errors and the record is skipped.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position
