"""Unit tests for calendarkit.domain.event_store."""
import json

import pytest

from calendarkit.config_loader import Config
from calendarkit.domain.event_store import JsonEventStore

pytestmark = pytest.mark.unit


def test_missing_file_loads_empty(tmp_path) -> None:
    assert JsonEventStore(tmp_path / "events.json").load() == []


def test_save_then_load(tmp_path, sample_events) -> None:
    store = JsonEventStore(tmp_path / "nested" / "events.json")
    store.save(sample_events)
    loaded = store.load()
    assert [e.model_dump() for e in loaded] == [e.model_dump() for e in sample_events]


def test_file_holds_camel_case_array(tmp_path, sample_events) -> None:
    store = JsonEventStore(tmp_path / "events.json")
    store.save(sample_events)
    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert isinstance(data, list)
    assert data[0]["isRecurring"] is True
    assert data[0]["recurrenceEnd"] == "2024-01-29"


def test_save_leaves_no_temp_files(tmp_path, sample_events) -> None:
    store = JsonEventStore(tmp_path / "events.json")
    store.save(sample_events)
    store.save(sample_events[:1])
    assert [p.name for p in tmp_path.iterdir()] == ["events.json"]
    assert len(store.load()) == 1


@pytest.mark.parametrize("content", ["{not json", '{"events": []}'])
def test_unreadable_file_loads_empty(tmp_path, content) -> None:
    path = tmp_path / "events.json"
    path.write_text(content, encoding="utf-8")
    assert JsonEventStore(path).load() == []


def test_invalid_records_are_dropped(tmp_path) -> None:
    path = tmp_path / "events.json"
    path.write_text(
        json.dumps([{"id": "ok", "title": "Kept", "date": "2024-01-01"}, {"id": "bad", "title": ""}]),
        encoding="utf-8",
    )
    assert [e.id for e in JsonEventStore(path).load()] == ["ok"]


def test_default_path_is_in_working_directory(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert JsonEventStore().path == tmp_path / "calendar-events.json"


def test_from_settings_uses_events_path(tmp_path, sample_events) -> None:
    path = tmp_path / "store" / "mine.json"
    store = JsonEventStore.from_settings(Config(events_path=str(path)))
    assert store.path == path
    store.save(sample_events)
    assert path.exists()
