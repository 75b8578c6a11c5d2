"""Protocol definitions for calendarkit's external collaborators.

The core never performs storage or displays UI itself; callers inject
objects satisfying these protocols.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from calendarkit.calendar.models import Event


class TimeProvider(Protocol):
    """Protocol for time provider callables."""

    def __call__(self) -> datetime.datetime:
        """Return current UTC time."""
        ...


class EventStore(Protocol):
    """Protocol for event persistence providers."""

    def load(self) -> list[Event]:
        """Load all stored events."""
        ...

    def save(self, events: list[Event]) -> None:
        """Replace stored events."""
        ...


class NotificationProvider(Protocol):
    """Protocol for platform notification APIs."""

    async def request_permission(self) -> bool:
        """Ask the platform for permission to show notifications.

        Returns:
            True if notifications may be shown
        """
        ...

    def show(self, title: str, body: str, tag: str) -> None:
        """Display a notification.

        Args:
            title: Notification title
            body: Notification body text
            tag: Deduplication tag (the event ID)
        """
        ...


class EventLookup(Protocol):
    """Protocol for fetching the current version of an event by ID."""

    def __call__(self, event_id: str) -> Optional[Event]:
        """Return the event, or None if it has been deleted."""
        ...
