"""Visible-day helpers for month and week grids."""

import calendar
import datetime

# Python weekday(): Mon=0 ... Sun=6
SUNDAY = 6
MONDAY = 0


def start_of_week(day: datetime.date, week_start: int = SUNDAY) -> datetime.date:
    """Return the first day of the week containing day."""
    return day - datetime.timedelta(days=(day.weekday() - week_start) % 7)


def week_days(day: datetime.date, week_start: int = SUNDAY) -> list[datetime.date]:
    """Return the 7 days of the week containing day."""
    first = start_of_week(day, week_start)
    return [first + datetime.timedelta(days=i) for i in range(7)]


def month_grid_days(year: int, month: int, week_start: int = SUNDAY) -> list[datetime.date]:
    """Return the days of full weeks covering a month, as shown in a month grid.

    The grid starts on the week containing the 1st and ends on the week
    containing the last day, so it holds 28, 35 or 42 days.
    """
    first = datetime.date(year, month, 1)
    last = datetime.date(year, month, calendar.monthrange(year, month)[1])
    grid_start = start_of_week(first, week_start)
    grid_end = start_of_week(last, week_start) + datetime.timedelta(days=6)
    return [grid_start + datetime.timedelta(days=i) for i in range((grid_end - grid_start).days + 1)]


class CalendarGrid:
    """Visible days for month and week views with a configured week start."""

    def __init__(self, week_start: int = SUNDAY):
        self.week_start = week_start

    @classmethod
    def from_settings(cls, settings: object) -> "CalendarGrid":
        """Build a grid from a settings object with a week_start attribute."""
        return cls(week_start=getattr(settings, "week_start", SUNDAY))

    def week(self, day: datetime.date) -> list[datetime.date]:
        return week_days(day, self.week_start)

    def month(self, year: int, month: int) -> list[datetime.date]:
        return month_grid_days(year, month, self.week_start)
