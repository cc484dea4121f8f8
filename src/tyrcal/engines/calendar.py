"""
tyrcal.engines.calendar
-----------------------
The Orchestrator. Binds a calendar description to its year layout and maps
(year, month, day) labels to a linear absolute day count and back.

Absolute day 0 is year 1, month index 0, day 1.
"""

from __future__ import annotations

from tyrcal.core.errors import DegenerateConfigurationError, MalformedInputError
from tyrcal.core.types import CalendarDescription, CalendarMeta, PlainDate
from tyrcal.engines.meta import meta_for


def day_of_year(meta: CalendarMeta, month: int, day: int) -> int:
    """1-based day of year. ``month`` must be a valid zero-based index."""
    return meta.month_starts[month] + (day - 1) + 1


def to_absolute_day(meta: CalendarMeta, d: PlainDate) -> int:
    doy = day_of_year(meta, d.month, d.day)
    return (d.year - 1) * meta.days_per_year + (doy - 1)


def from_absolute_day(meta: CalendarMeta, abs_day: int) -> PlainDate:
    # floor division/modulo keep doy0 in [0, days_per_year) for negative days too
    year = abs_day // meta.days_per_year + 1
    doy0 = abs_day % meta.days_per_year

    month = 0
    for i in range(len(meta.month_starts) - 1, -1, -1):
        if doy0 >= meta.month_starts[i]:
            month = i
            break
    day = doy0 - meta.month_starts[month] + 1
    return PlainDate(year=year, month=month, day=day)


class CalendarEngine:
    """
    Date arithmetic over one calendar description.
    Construction fails for calendars without a usable year length.
    """
    def __init__(self, calendar: CalendarDescription):
        self.calendar = calendar
        self.meta = meta_for(calendar)
        if not calendar.months or self.meta.days_per_year <= 0:
            raise DegenerateConfigurationError(
                f"Calendar '{calendar.id}' has no days in its year; date arithmetic is undefined."
            )

    @property
    def days_per_year(self) -> int:
        return self.meta.days_per_year

    @property
    def month_count(self) -> int:
        return len(self.calendar.months)

    # ---------------------------------------------------------
    # Forward: calendar label to absolute day
    # ---------------------------------------------------------

    def to_absolute(self, d: PlainDate) -> int:
        return to_absolute_day(self.meta, d)

    def day_of_year(self, d: PlainDate) -> int:
        return day_of_year(self.meta, d.month, d.day)

    def month_span(self, month: int) -> int:
        """Days from the start of ``month`` to the next month, intercalary days included."""
        if month + 1 < self.month_count:
            return self.meta.month_starts[month + 1] - self.meta.month_starts[month]
        return self.days_per_year - self.meta.month_starts[month]

    def check(self, d: PlainDate) -> PlainDate:
        """Reject labels outside the calendar before they reach the arithmetic."""
        if not (0 <= d.month < self.month_count):
            raise MalformedInputError(f"Month {d.month + 1} outside 1..{self.month_count}")
        if not (1 <= d.day <= self.month_span(d.month)):
            raise MalformedInputError(f"Day {d.day} outside 1..{self.month_span(d.month)} for month {d.month + 1}")
        return d

    # ---------------------------------------------------------
    # Inverse: absolute day to calendar label
    # ---------------------------------------------------------

    def from_absolute(self, abs_day: int) -> PlainDate:
        return from_absolute_day(self.meta, abs_day)

    def shift(self, d: PlainDate, days: int) -> PlainDate:
        return self.from_absolute(self.to_absolute(d) + days)

