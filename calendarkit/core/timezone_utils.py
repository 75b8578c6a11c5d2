"""Timezone resolution and time-of-day conversion utilities for calendarkit."""

from __future__ import annotations

import datetime
import logging
import os
import re
import zoneinfo
from dataclasses import dataclass
from typing import ClassVar

from dateutil import tz as dateutil_tz

from calendarkit.exceptions import InvalidTimeError

logger = logging.getLogger(__name__)

JST_TIMEZONE = "Asia/Tokyo"

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class TimezoneResolver:
    """Maps the event timezone modes ("local", "JST") to tzinfo objects."""

    ZONE_MODES: ClassVar[dict[str, str | None]] = {
        "JST": JST_TIMEZONE,
        # None means "whatever the executing environment uses"
        "local": None,
    }

    def __init__(self, local_timezone: str | None = None):
        """Initialize resolver.

        Args:
            local_timezone: Optional IANA name pinning the "local" zone. When
                unset, CALENDARKIT_LOCAL_TIMEZONE is consulted and then the
                system zone via dateutil.
        """
        self.local_timezone = local_timezone

    @classmethod
    def from_settings(cls, settings: object) -> TimezoneResolver:
        """Build a resolver from a settings object with a local_timezone attribute."""
        return cls(local_timezone=getattr(settings, "local_timezone", None))

    def local_tz(self) -> datetime.tzinfo:
        """Return tzinfo for the "local" mode."""
        name = self.local_timezone or os.environ.get("CALENDARKIT_LOCAL_TIMEZONE")
        if name:
            try:
                return zoneinfo.ZoneInfo(name)
            except (zoneinfo.ZoneInfoNotFoundError, ValueError):
                logger.warning("Invalid local timezone %r, using system zone", name)
        return dateutil_tz.tzlocal()

    def resolve(self, mode: str) -> datetime.tzinfo:
        """Return tzinfo for a timezone mode.

        Raises:
            InvalidTimeError: If mode is not a known timezone mode
        """
        if mode not in self.ZONE_MODES:
            raise InvalidTimeError(f"Unknown timezone mode: {mode!r}")
        iana = self.ZONE_MODES[mode]
        if iana is None:
            return self.local_tz()
        return zoneinfo.ZoneInfo(iana)


class TimeProvider:
    """Provides current time with test time override support."""

    def now_utc(self) -> datetime.datetime:
        """Return current UTC time with tzinfo.

        Can be overridden for testing via CALENDARKIT_TEST_TIME environment variable.
        Format: ISO 8601 datetime string (e.g., "2024-01-15T08:20:00+09:00")
        """
        test_time = os.environ.get("CALENDARKIT_TEST_TIME")
        if test_time:
            try:
                from dateutil import parser as date_parser

                dt = date_parser.isoparse(test_time)
                if dt.tzinfo is not None:
                    return dt.astimezone(datetime.UTC)
                # Assume naive datetime is already UTC
                return dt.replace(tzinfo=datetime.UTC)
            except ValueError as e:
                logger.warning("Failed to parse CALENDARKIT_TEST_TIME=%r: %s", test_time, e)

        return datetime.datetime.now(datetime.UTC)


@dataclass(frozen=True)
class ConvertedTime:
    """Result of converting a time-of-day between zones.

    day_offset is -1, 0 or +1 when the conversion crossed midnight.
    """

    time: str
    day_offset: int = 0


_resolver = TimezoneResolver()
_time_provider = TimeProvider()


def now_utc() -> datetime.datetime:
    """Get current UTC time (convenience function)."""
    return _time_provider.now_utc()


def parse_time(time_str: str) -> datetime.time:
    """Parse a strict 24h HH:mm string.

    Raises:
        InvalidTimeError: If the string is not well formed
    """
    if not isinstance(time_str, str):
        raise InvalidTimeError(f"Invalid time: {time_str!r}")
    match = _TIME_RE.fullmatch(time_str)
    if not match:
        raise InvalidTimeError(f"Invalid time: {time_str!r}")
    return datetime.time(int(match.group(1)), int(match.group(2)))


def is_valid_time(time_str: str) -> bool:
    """Return True when time_str is a well-formed HH:mm string."""
    return isinstance(time_str, str) and bool(_TIME_RE.fullmatch(time_str))


def convert_time(
    time_str: str,
    from_zone: str,
    to_zone: str,
    on: datetime.date | None = None,
    resolver: TimezoneResolver | None = None,
) -> ConvertedTime:
    """Convert a bare time-of-day between timezone modes.

    The time is placed on ``on`` (today in the source zone when omitted) and
    re-rendered in the target zone.

    Args:
        time_str: Time in HH:mm format
        from_zone: Source mode ("local" or "JST")
        to_zone: Target mode ("local" or "JST")
        on: Calendar day in the source zone the time belongs to
        resolver: Optional resolver, defaults to the module resolver

    Returns:
        ConvertedTime carrying HH:mm and the calendar day shift

    Raises:
        InvalidTimeError: If the time or a zone mode is malformed
    """
    parsed = parse_time(time_str)
    resolver = resolver or _resolver
    src_tz = resolver.resolve(from_zone)
    dst_tz = resolver.resolve(to_zone)

    if from_zone == to_zone:
        return ConvertedTime(time=time_str, day_offset=0)

    if on is None:
        on = now_utc().astimezone(src_tz).date()

    source_dt = datetime.datetime.combine(on, parsed, tzinfo=src_tz)
    target_dt = source_dt.astimezone(dst_tz)
    day_offset = (target_dt.date() - on).days

    logger.debug(
        "Converted %s %s -> %s %s (day offset %d)",
        time_str,
        from_zone,
        target_dt.strftime("%H:%M"),
        to_zone,
        day_offset,
    )
    return ConvertedTime(time=target_dt.strftime("%H:%M"), day_offset=day_offset)


def to_zone(
    time_str: str,
    from_zone: str,
    to_zone: str,
    on: datetime.date | None = None,
    resolver: TimezoneResolver | None = None,
) -> str:
    """Convert HH:mm between timezone modes, dropping any day rollover.

    Callers that need to know whether the converted time falls on another
    calendar day should use convert_time() or convert_event_time().
    """
    return convert_time(time_str, from_zone, to_zone, on=on, resolver=resolver).time


def convert_event_time(
    event_date: datetime.date,
    time_str: str,
    from_zone: str,
    to_zone: str,
    resolver: TimezoneResolver | None = None,
) -> tuple[datetime.date, str]:
    """Convert an event's date and time together, carrying midnight rollover.

    Returns:
        (date, HH:mm) in the target zone
    """
    converted = convert_time(time_str, from_zone, to_zone, on=event_date, resolver=resolver)
    return event_date + datetime.timedelta(days=converted.day_offset), converted.time


def format_event_time(
    time_str: str | None,
    timezone: str,
    display_zone: str = "local",
    resolver: TimezoneResolver | None = None,
) -> str:
    """Render an event's stored time for display, empty when the event has none."""
    if not time_str:
        return ""
    return to_zone(time_str, timezone, display_zone, resolver=resolver)


def zone_for(mode: str, resolver: TimezoneResolver | None = None) -> datetime.tzinfo:
    """Return tzinfo for a timezone mode using the module resolver by default."""
    return (resolver or _resolver).resolve(mode)
