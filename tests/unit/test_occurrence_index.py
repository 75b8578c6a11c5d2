"""Unit tests for calendarkit.calendar.occurrence_index."""
import datetime

import pytest

from calendarkit.calendar.occurrence_index import (
    OccurrenceIndex,
    occurrences_between,
    occurrences_on,
)
from calendarkit.exceptions import InvalidRecurrenceError

pytestmark = pytest.mark.unit

D = datetime.date


def test_occurrences_on_empty_day_returns_empty_list(sample_events) -> None:
    result = occurrences_on(sample_events, D(2024, 1, 2))
    assert result == []
    assert isinstance(result, list)


def test_occurrences_on_no_events() -> None:
    assert occurrences_on([], D(2024, 1, 1)) == []


def test_occurrences_on_keeps_input_order(sample_events, make_event) -> None:
    """Occurrences come back in the input events' order, not sorted by time."""
    late = make_event(id="late", title="Late", date=D(2024, 1, 8), time="18:00")
    events = [late, *sample_events]
    ids = [o.id for o in occurrences_on(events, D(2024, 1, 8))]
    # late (18:00), standup (weekly, 09:30), dentist (14:00)
    assert ids == ["late", "standup", "dentist"]


def test_occurrences_on_recurring_day(sample_events) -> None:
    result = occurrences_on(sample_events, D(2024, 2, 29))
    assert [o.id for o in result] == ["rent"]
    assert result[0].display_date == D(2024, 2, 29)


def test_occurrences_on_propagates_invalid_recurrence(make_event) -> None:
    broken = make_event(is_recurring=True, recurrence_type="weekly")
    with pytest.raises(InvalidRecurrenceError):
        occurrences_on([broken], D(2024, 1, 15))


def test_occurrences_between_has_every_day(sample_events) -> None:
    by_day = occurrences_between(sample_events, D(2024, 1, 1), D(2024, 1, 31))
    assert len(by_day) == 31
    assert [o.id for o in by_day[D(2024, 1, 1)]] == ["standup"]
    assert [o.id for o in by_day[D(2024, 1, 8)]] == ["standup", "dentist"]
    assert [o.id for o in by_day[D(2024, 1, 31)]] == ["rent"]
    assert by_day[D(2024, 1, 2)] == []


def test_occurrences_between_matches_occurrences_on(sample_events) -> None:
    start, end = D(2024, 1, 1), D(2024, 4, 30)
    by_day = occurrences_between(sample_events, start, end)
    for day, items in by_day.items():
        assert [o.id for o in items] == [o.id for o in occurrences_on(sample_events, day)]


def test_index_memoizes_lookup(sample_events) -> None:
    index = OccurrenceIndex(sample_events)
    assert [o.id for o in index.on(D(2024, 1, 29))] == ["standup"]
    assert index.on(D(2024, 1, 2)) == []
    # 5 standups + 4 rents + 1 dentist
    assert len(index) == 10
    assert index.days()[0] == D(2024, 1, 1)
    assert index.days()[-1] == D(2024, 4, 30)


def test_index_on_returns_copy(sample_events) -> None:
    index = OccurrenceIndex(sample_events)
    index.on(D(2024, 1, 1)).clear()
    assert len(index.on(D(2024, 1, 1))) == 1
