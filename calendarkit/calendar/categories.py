"""Category defaults and resolution for calendarkit events."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import Event, EventCategory

logger = logging.getLogger(__name__)

EVENT_COLORS: list[dict[str, str]] = [
    {"name": "Blue", "value": "#3B82F6"},
    {"name": "Green", "value": "#10B981"},
    {"name": "Purple", "value": "#8B5CF6"},
    {"name": "Red", "value": "#EF4444"},
    {"name": "Yellow", "value": "#F59E0B"},
    {"name": "Pink", "value": "#EC4899"},
    {"name": "Indigo", "value": "#6366F1"},
    {"name": "Gray", "value": "#6B7280"},
]

UNCATEGORIZED = EventCategory(id="uncategorized", name="Uncategorized", color="#6B7280")

IMPORTED_CATEGORY_ID = "imported"


class CategoryResolver:
    """Resolves event category references against the known category set.

    Events keep a category id even after the category is deleted; those
    references resolve to a fallback category instead of failing.
    """

    def __init__(
        self,
        categories: Iterable[EventCategory] = (),
        fallback: EventCategory = UNCATEGORIZED,
    ) -> None:
        self._by_id: dict[str, EventCategory] = {c.id: c for c in categories}
        self.fallback = fallback

    def get(self, category_id: str) -> EventCategory:
        """Return the category for an id, or the fallback."""
        category = self._by_id.get(category_id)
        if category is None:
            logger.debug("Unresolved category %r, using %r", category_id, self.fallback.id)
            return self.fallback
        return category

    def resolve(self, event: Event) -> EventCategory:
        """Return the display category for an event.

        An embedded EventCategory wins when the registry has no entry for
        its id, so exported records keep their own name and color.
        """
        category = event.category
        if isinstance(category, EventCategory):
            return self._by_id.get(category.id, category)
        return self.get(category)

    def resolve_events(self, events: Iterable[Event]) -> list[Event]:
        """Return copies of events with the category field resolved to objects."""
        return [event.model_copy(update={"category": self.resolve(event)}) for event in events]

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)
