"""Unit tests for the calendarkit exception hierarchy."""

import pytest

from calendarkit.exceptions import (
    CalendarKitError,
    EventImportError,
    ImportParseError,
    ImportValidationError,
    InvalidRecurrenceError,
    InvalidTimeError,
    RecurrenceError,
    RecurrenceTooLongError,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("exc", "parent"),
    [
        (InvalidRecurrenceError, RecurrenceError),
        (RecurrenceTooLongError, RecurrenceError),
        (ImportParseError, EventImportError),
        (ImportValidationError, EventImportError),
        (InvalidTimeError, CalendarKitError),
        (RecurrenceError, CalendarKitError),
        (EventImportError, CalendarKitError),
    ],
)
def test_hierarchy(exc, parent):
    assert issubclass(exc, parent)


def test_validation_error_carries_position():
    error = ImportValidationError("Event 3: Invalid format", 3)
    assert error.position == 3
    assert str(error) == "Event 3: Invalid format"
    assert ImportValidationError("bad").position is None
