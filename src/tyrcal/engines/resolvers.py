from __future__ import annotations

from typing import Optional, Tuple

from tyrcal.core.time import safe_mod
from tyrcal.core.types import CalendarDescription, PlainDate

DEFAULT_WEEK_LENGTH = 7

# Used when a calendar defines no canonical hours: (start hour, end hour, name)
FALLBACK_PERIODS: Tuple[Tuple[int, int, str], ...] = (
    (0, 4, "Deep Night"),
    (4, 6, "Before Dawn"),
    (6, 9, "Morning"),
    (9, 12, "Late Morning"),
    (12, 14, "Highsun"),
    (14, 18, "Afternoon"),
    (18, 21, "Evening"),
    (21, 24, "Night"),
)


def weekday_index(calendar: CalendarDescription, d: PlainDate, explicit: Optional[int] = None) -> int:
    """
    Weekday counted from the start of the year. Only regular month days
    advance the week; intercalary days do not.
    """
    count = len(calendar.weekdays) or DEFAULT_WEEK_LENGTH
    if explicit is not None and 0 <= explicit < count:
        return explicit
    progress = sum(max(0, m.days) for m in calendar.months[: max(0, d.month)])
    progress += d.day - 1
    return safe_mod(calendar.start_day + progress, count)


def weekday_name(calendar: CalendarDescription, d: PlainDate, explicit: Optional[int] = None) -> str:
    i = weekday_index(calendar, d, explicit)
    if i < len(calendar.weekdays) and calendar.weekdays[i].name:
        return calendar.weekdays[i].name
    return f"Day {i + 1}"


def season(calendar: CalendarDescription, month1: int) -> Optional[str]:
    """First season whose month range contains ``month1`` (1-based)."""
    for s in calendar.seasons:
        if s.contains(month1):
            return s.name
    return None


def time_period(calendar: CalendarDescription, hour: int, minute: int = 0) -> Optional[str]:
    t = hour + minute / 60.0
    if calendar.canonical_hours:
        for block in calendar.canonical_hours:
            end = block.end_hour
            if block.start_hour <= t and (t < end or end >= 24):
                return block.name
        return None
    for start, end, name in FALLBACK_PERIODS:
        if start <= t < end:
            return name
    return None


def month_name(calendar: CalendarDescription, month: int) -> str:
    if 0 <= month < len(calendar.months) and calendar.months[month].name:
        return calendar.months[month].name
    return f"Month {month + 1}"


def format_date(calendar: CalendarDescription, d: PlainDate) -> str:
    return f"{month_name(calendar, d.month)} {d.day}, {d.year}"
