"""Unit tests for calendarkit.calendar.categories."""

import pytest

from calendarkit.calendar.categories import UNCATEGORIZED, CategoryResolver
from calendarkit.calendar.models import EventCategory

pytestmark = pytest.mark.unit


def test_resolves_known_id(work_category, make_event):
    resolver = CategoryResolver([work_category])
    assert resolver.resolve(make_event(category="work")) == work_category


def test_deleted_category_falls_back(make_event):
    resolver = CategoryResolver()
    category = resolver.resolve(make_event(category="gone"))
    assert category == UNCATEGORIZED
    assert category.name == "Uncategorized"
    assert category.color == "#6B7280"


def test_embedded_category_kept_when_unregistered(make_event):
    embedded = EventCategory(id="trip", name="Trip", color="#F59E0B")
    assert CategoryResolver().resolve(make_event(category=embedded)) == embedded


def test_registry_wins_over_embedded_copy(work_category, make_event):
    stale = EventCategory(id="work", name="Old work", color="#000000")
    assert CategoryResolver([work_category]).resolve(make_event(category=stale)) == work_category


def test_custom_fallback(make_event):
    other = EventCategory(id="other", name="Other")
    assert CategoryResolver(fallback=other).resolve(make_event(category="x")) == other


def test_resolve_events_returns_copies(work_category, make_event):
    event = make_event(category="work")
    resolved = CategoryResolver([work_category]).resolve_events([event])
    assert resolved[0].category == work_category
    assert event.category == "work"


def test_container_protocol(work_category, personal_category):
    resolver = CategoryResolver([work_category, personal_category])
    assert "work" in resolver
    assert "missing" not in resolver
    assert len(resolver) == 2
