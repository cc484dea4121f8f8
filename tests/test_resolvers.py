# tests/test_resolvers.py

from dataclasses import replace

import pytest

from tyrcal.core.types import CalendarDescription, CanonicalHour, Month, PlainDate, Season, Weekday
from tyrcal.engines import resolvers
from tyrcal.engines.specs import TYR

TWELVE = CalendarDescription(
    id="twelve",
    name="Twelve",
    months=tuple(Month(f"M{i}", 30) for i in range(1, 13)),
    seasons=(
        Season("Winter", 11, 2),
        Season("Spring", 3, 5),
        Season("Summer", 6, 8),
    ),
)


def test_season_wraparound():
    winter = [m for m in range(1, 13) if resolvers.season(TWELVE, m) == "Winter"]
    assert winter == [1, 2, 11, 12]


def test_season_first_match_and_gaps():
    assert resolvers.season(TWELVE, 4) == "Spring"
    assert resolvers.season(TWELVE, 9) is None
    assert resolvers.season(TYR, 4) == "High Sun"
    assert resolvers.season(TYR, 12) == "Sun Ascending"


def test_weekday_from_progress():
    # Tyr: six weekdays, 30-day months
    assert resolvers.weekday_index(TYR, PlainDate(14579, 0, 1)) == 0
    assert resolvers.weekday_index(TYR, PlainDate(14579, 0, 7)) == 0
    assert resolvers.weekday_index(TYR, PlainDate(14579, 1, 2)) == 1
    assert resolvers.weekday_name(TYR, PlainDate(14579, 0, 3)) == "Thirday"


def test_weekday_start_offset():
    cal = replace(TYR, start_day=4)
    assert resolvers.weekday_index(cal, PlainDate(1, 0, 1)) == 4
    assert resolvers.weekday_index(cal, PlainDate(1, 0, 3)) == 0


def test_explicit_weekday_wins():
    assert resolvers.weekday_index(TYR, PlainDate(1, 0, 1), explicit=5) == 5
    assert resolvers.weekday_name(TYR, PlainDate(1, 0, 1), explicit=5) == "Sixthday"


def test_weekday_without_names():
    assert resolvers.weekday_index(TWELVE, PlainDate(1, 0, 9)) == 1
    assert resolvers.weekday_name(TWELVE, PlainDate(1, 0, 9)) == "Day 2"


def test_fallback_periods():
    assert resolvers.time_period(TYR, 0) == "Deep Night"
    assert resolvers.time_period(TYR, 12, 30) == "Highsun"
    assert resolvers.time_period(TYR, 23, 59) == "Night"


def test_canonical_hours():
    cal = replace(
        TWELVE,
        canonical_hours=(
            CanonicalHour("Dawn", 5, 8),
            CanonicalHour("Day", 8, 18),
            CanonicalHour("Vigil", 18, 24),
        ),
    )
    assert resolvers.time_period(cal, 7, 59) == "Dawn"
    assert resolvers.time_period(cal, 8) == "Day"
    assert resolvers.time_period(cal, 23, 59) == "Vigil"
    assert resolvers.time_period(cal, 3) is None


def test_canonical_hour_past_midnight_end():
    cal = replace(TWELVE, canonical_hours=(CanonicalHour("Late", 20, 26),))
    assert resolvers.time_period(cal, 23, 30) == "Late"
    assert resolvers.time_period(cal, 19) is None


@pytest.mark.parametrize("month,expected", [(0, "Dominary"), (11, "Haze"), (12, "Month 13")])
def test_month_name(month, expected):
    assert resolvers.month_name(TYR, month) == expected


def test_format_date():
    assert resolvers.format_date(TYR, PlainDate(14579, 3, 33)) == "Scorch 33, 14579"
