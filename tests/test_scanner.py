# tests/test_scanner.py

import pytest

from tyrcal.core.types import Moon, MoonPhaseRecord, PlainDate, WireDate
from tyrcal.engines import scanner
from tyrcal.engines.calendar import CalendarEngine
from tyrcal.engines.specs import TYR

from conftest import one_month_calendar


def record(name, age, cycle):
    frac = age / cycle
    return MoonPhaseRecord(
        name=name,
        cycle_length=cycle,
        age=age,
        phase_name=None,
        model="fraction",
        fraction=frac,
        illumination=0,
        days_until_new=None,
        days_until_full=None,
    )


# ---------------------------------------------------------
# Eclipses
# ---------------------------------------------------------

def test_eclipses_over_one_cycle(twin_moons):
    eng = twin_moons
    events = scanner.scan_range(eng, eng.from_absolute(0), eng.from_absolute(31), scanner.eclipse)
    assert [(e.category, eng.to_absolute(e.date), e.duration_days) for e in events] == [
        (scanner.DARKEST, 0, 4),
        (scanner.BRIGHTEST, 16, 4),
    ]
    assert all(e.kind == "eclipse" for e in events)


def test_uncollapsed_eclipse_days(twin_moons):
    eng = twin_moons
    days = scanner.scan_range(eng, eng.from_absolute(0), eng.from_absolute(31), scanner.eclipse, collapse=False)
    assert [eng.to_absolute(e.date) for e in days] == [0, 1, 2, 3, 16, 17, 18, 19]


def test_reversed_range_is_swapped(twin_moons):
    eng = twin_moons
    fwd = scanner.scan_range(eng, eng.from_absolute(0), eng.from_absolute(40), scanner.eclipse)
    rev = scanner.scan_range(eng, eng.from_absolute(40), eng.from_absolute(0), scanner.eclipse)
    assert fwd == rev
    assert len(fwd) == 3


def test_single_moon_has_no_eclipses():
    eng = CalendarEngine(one_month_calendar(Moon("Solo", 10, WireDate(1, 1, 1))))
    assert scanner.scan_range(eng, eng.from_absolute(0), eng.from_absolute(100), scanner.eclipse) == []
    assert scanner.find_first(eng, eng.from_absolute(0), scanner.eclipse) is None


def test_find_first(twin_moons):
    eng = twin_moons
    darkest = scanner.eclipse_of(scanner.DARKEST)
    brightest = scanner.eclipse_of(scanner.BRIGHTEST)

    m = scanner.find_first(eng, eng.from_absolute(0), brightest)
    assert (eng.to_absolute(m.date), m.category) == (16, scanner.BRIGHTEST)

    m = scanner.find_first(eng, eng.from_absolute(5), darkest)
    assert eng.to_absolute(m.date) == 32

    # walking backwards lands on the last day of the previous window
    m = scanner.find_first(eng, eng.from_absolute(10), darkest, step=-1)
    assert eng.to_absolute(m.date) == 3

    # the start day itself counts
    m = scanner.find_first(eng, eng.from_absolute(2), darkest)
    assert eng.to_absolute(m.date) == 2


def test_find_first_respects_horizon(twin_moons):
    eng = twin_moons
    darkest = scanner.eclipse_of(scanner.DARKEST)
    assert scanner.find_first(eng, eng.from_absolute(5), darkest, max_days=20) is None
    assert scanner.find_first(eng, eng.from_absolute(5), darkest, max_days=28) is not None


def test_scan_rejects_bad_step(twin_moons):
    with pytest.raises(ValueError):
        list(scanner.scan(twin_moons, PlainDate(1, 0, 1), 2, 10, scanner.eclipse))


def test_scan_matches_direct_queries():
    from tyrcal.engines.factory import FRACTION, phases_for_date

    eng = CalendarEngine(TYR)
    start = PlainDate(14579, 0, 1)
    for _, d, hit in scanner.scan(eng, start, 1, 375 * 3, scanner.eclipse):
        names = {r.phase_name for r in phases_for_date(eng, d, FRACTION)}
        assert names == ({"New Moon"} if hit.category == scanner.DARKEST else {"Full Moon"})


# ---------------------------------------------------------
# Conjunctions
# ---------------------------------------------------------

def test_angular_separation_wraps():
    assert scanner.angular_separation(359.0, 2.0) == pytest.approx(3.0)
    assert scanner.angular_separation(10.0, 190.0) == pytest.approx(180.0)
    assert scanner.angular_separation(90.0, 90.0) == 0.0


def test_conjunction_tolerance_boundary():
    a = record("A", 0, 36)          # 0 deg
    at_limit = record("B", 1, 72)   # 5.0 deg
    past = record("C", 1.02, 72)    # 5.1 deg
    hit = scanner.conjunction_between(a, at_limit, 5.0)
    assert hit is not None
    assert hit.separation_deg == pytest.approx(5.0)
    assert scanner.conjunction_between(a, past, 5.0) is None


def test_conjunction_visibility():
    near_new = scanner.conjunction_between(record("A", 0, 40), record("B", 1, 80))
    assert near_new.visible is False
    near_full = scanner.conjunction_between(record("A", 20, 40), record("B", 40, 80))
    assert near_full.visible is True


def test_pick_pair():
    recs = [record("Ral", 0, 33), record("Guthay", 0, 125), record("Third", 0, 50)]
    a, b = scanner.pick_pair(recs, ("third", "RAL"))
    assert (a.name, b.name) == ("Third", "Ral")
    a, b = scanner.pick_pair(recs, ("Nope", "Ral"))
    assert (a.name, b.name) == ("Ral", "Guthay")
    assert scanner.pick_pair(recs[:1]) is None


def test_conjunction_scan(twin_moons):
    eng = twin_moons
    # identical moons are always conjunct: one run covering the whole range
    events = scanner.scan_range(eng, eng.from_absolute(0), eng.from_absolute(9), scanner.conjunction())
    assert len(events) == 1
    assert events[0].duration_days == 10
    assert events[0].separation_deg == 0.0


def test_conjunction_keeps_tightest_day():
    cal = one_month_calendar(Moon("Fast", 30, WireDate(1, 1, 1)), Moon("Slow", 36, WireDate(1, 1, 1)))
    eng = CalendarEngine(cal)
    events = scanner.scan_range(eng, eng.from_absolute(1), eng.from_absolute(3), scanner.conjunction(tolerance_deg=5.0))
    # separations: 2, 4, 6 degrees -> days 1 and 2 match, day 1 is tightest
    assert len(events) == 1
    assert eng.to_absolute(events[0].date) == 1
    assert events[0].duration_days == 2
    assert events[0].separation_deg == pytest.approx(2.0)
