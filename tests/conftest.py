"""Shared fixtures for calendarkit tests."""

import datetime
from collections.abc import Callable, Generator
from typing import Any

import pytest

from calendarkit.calendar.models import Event, EventCategory, Reminder


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, Any, None]:
    """Pin the "local" zone to UTC and clear time overrides between tests.

    Tests that need another local zone or a frozen clock set
    CALENDARKIT_LOCAL_TIMEZONE / CALENDARKIT_TEST_TIME themselves.
    """
    monkeypatch.setenv("CALENDARKIT_LOCAL_TIMEZONE", "UTC")
    monkeypatch.delenv("CALENDARKIT_TEST_TIME", raising=False)
    monkeypatch.delenv("CALENDARKIT_DEBUG", raising=False)
    monkeypatch.delenv("CALENDARKIT_LOG_LEVEL", raising=False)
    yield


@pytest.fixture
def frozen_time(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Return a setter that freezes now_utc() at an ISO timestamp."""

    def _freeze(iso: str) -> None:
        monkeypatch.setenv("CALENDARKIT_TEST_TIME", iso)

    return _freeze


@pytest.fixture
def work_category() -> EventCategory:
    return EventCategory(id="work", name="Work", color="#3B82F6", icon="💼")


@pytest.fixture
def personal_category() -> EventCategory:
    return EventCategory(id="personal", name="Personal", color="#10B981")


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for events with deterministic defaults."""
    created = datetime.datetime(2024, 1, 1, 9, 0, tzinfo=datetime.UTC)

    def _make(**overrides: Any) -> Event:
        data: dict[str, Any] = {
            "id": "evt-1",
            "title": "Team sync",
            "date": datetime.date(2024, 1, 15),
            "category": "work",
            "created_at": created,
            "updated_at": created,
        }
        data.update(overrides)
        return Event(**data)

    return _make


@pytest.fixture
def sample_events(work_category: EventCategory, personal_category: EventCategory) -> list[Event]:
    """A small mixed collection: one-off, weekly and monthly events."""
    created = datetime.datetime(2024, 1, 1, 9, 0, tzinfo=datetime.UTC)
    return [
        Event(
            id="standup",
            title="Standup",
            description="Daily sync\nBring blockers",
            date=datetime.date(2024, 1, 1),
            time="09:30",
            location="Room 4, Floor 2",
            category=work_category,
            is_recurring=True,
            recurrence_type="weekly",
            recurrence_end=datetime.date(2024, 1, 29),
            reminders=[Reminder(id="r1", type="notification", time=10, enabled=True)],
            created_at=created,
            updated_at=created,
        ),
        Event(
            id="rent",
            title="Pay rent",
            date=datetime.date(2024, 1, 31),
            category=personal_category,
            is_recurring=True,
            recurrence_type="monthly",
            recurrence_end=datetime.date(2024, 4, 30),
            created_at=created,
            updated_at=created,
        ),
        Event(
            id="dentist",
            title="Dentist",
            date=datetime.date(2024, 1, 8),
            time="14:00",
            timezone="JST",
            category=personal_category,
            created_at=created,
            updated_at=created,
        ),
    ]


def pytest_configure(config: Any) -> None:
    """Register test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
