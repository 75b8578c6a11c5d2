"""Unit tests for calendarkit.core.timezone_utils.

The autouse fixture pins the "local" zone to UTC so conversions are
deterministic regardless of the host zone.
"""

import datetime
import zoneinfo

import pytest

from calendarkit.core.timezone_utils import (
    ConvertedTime,
    TimeProvider,
    TimezoneResolver,
    convert_event_time,
    convert_time,
    format_event_time,
    now_utc,
    parse_time,
    to_zone,
)
from calendarkit.exceptions import InvalidTimeError

pytestmark = pytest.mark.unit

D = datetime.date


class TestToZone:
    """Tests for to_zone()."""

    def test_identity_when_zones_match(self):
        assert to_zone("23:30", "local", "local") == "23:30"
        assert to_zone("07:05", "JST", "JST") == "07:05"

    def test_local_to_jst_and_back(self):
        """With local pinned to UTC, JST is a fixed +9h."""
        assert to_zone("23:30", "local", "JST", on=D(2024, 1, 15)) == "08:30"
        assert to_zone("08:30", "JST", "local", on=D(2024, 1, 16)) == "23:30"

    def test_uses_today_when_no_day_given(self, frozen_time):
        frozen_time("2024-01-15T12:00:00Z")
        assert to_zone("10:00", "local", "JST") == "19:00"

    def test_new_york_dst_is_respected(self, monkeypatch):
        monkeypatch.setenv("CALENDARKIT_LOCAL_TIMEZONE", "America/New_York")
        # EST (-5) in January, EDT (-4) in July
        assert to_zone("20:00", "local", "JST", on=D(2024, 1, 15)) == "10:00"
        assert to_zone("20:00", "local", "JST", on=D(2024, 7, 1)) == "09:00"

    @pytest.mark.parametrize("bad", ["24:00", "7:30", "12:60", "ab:cd", "", "12:00:00", " 12:00"])
    def test_invalid_time_raises(self, bad):
        with pytest.raises(InvalidTimeError):
            to_zone(bad, "local", "JST")

    def test_invalid_time_raises_even_for_identity(self):
        with pytest.raises(InvalidTimeError):
            to_zone("25:00", "local", "local")

    def test_unknown_zone_mode_raises(self):
        with pytest.raises(InvalidTimeError):
            to_zone("10:00", "local", "PST")


class TestConvertTime:
    """Tests for day rollover reporting."""

    def test_forward_rollover(self):
        assert convert_time("23:30", "local", "JST", on=D(2024, 1, 15)) == ConvertedTime("08:30", 1)

    def test_backward_rollover(self):
        assert convert_time("02:00", "JST", "local", on=D(2024, 1, 15)) == ConvertedTime("17:00", -1)

    def test_no_rollover(self):
        assert convert_time("12:00", "JST", "local", on=D(2024, 1, 15)) == ConvertedTime("03:00", 0)

    def test_convert_event_time_moves_date(self):
        assert convert_event_time(D(2024, 1, 31), "23:30", "local", "JST") == (D(2024, 2, 1), "08:30")
        assert convert_event_time(D(2024, 3, 1), "05:00", "JST", "local") == (D(2024, 2, 29), "20:00")


class TestTimezoneResolver:
    def test_jst_is_tokyo(self):
        assert TimezoneResolver().resolve("JST") == zoneinfo.ZoneInfo("Asia/Tokyo")

    def test_explicit_local_zone_wins_over_env(self):
        resolver = TimezoneResolver(local_timezone="Asia/Tokyo")
        assert to_zone("10:00", "local", "JST", on=D(2024, 1, 15), resolver=resolver) == "10:00"

    def test_invalid_local_zone_falls_back_to_system(self, monkeypatch):
        monkeypatch.setenv("CALENDARKIT_LOCAL_TIMEZONE", "Not/AZone")
        tz = TimezoneResolver().local_tz()
        assert isinstance(tz, datetime.tzinfo)

    def test_from_settings(self):
        class Settings:
            local_timezone = "Europe/Berlin"

        resolver = TimezoneResolver.from_settings(Settings())
        assert resolver.local_tz() == zoneinfo.ZoneInfo("Europe/Berlin")


class TestTimeProvider:
    def test_now_utc_is_aware(self):
        assert now_utc().tzinfo is not None

    def test_test_time_override(self, frozen_time):
        frozen_time("2024-01-15T08:20:00+09:00")
        assert TimeProvider().now_utc() == datetime.datetime(2024, 1, 14, 23, 20, tzinfo=datetime.UTC)

    def test_naive_test_time_is_utc(self, frozen_time):
        frozen_time("2024-01-15T08:20:00")
        assert now_utc() == datetime.datetime(2024, 1, 15, 8, 20, tzinfo=datetime.UTC)

    def test_bad_test_time_falls_back_to_real_clock(self, frozen_time):
        frozen_time("not-a-time")
        before = datetime.datetime.now(datetime.UTC)
        assert now_utc() >= before


def test_parse_time():
    assert parse_time("00:00") == datetime.time(0, 0)
    assert parse_time("23:59") == datetime.time(23, 59)


def test_format_event_time():
    assert format_event_time(None, "JST") == ""
    assert format_event_time("", "local") == ""
    assert format_event_time("09:00", "local") == "09:00"
