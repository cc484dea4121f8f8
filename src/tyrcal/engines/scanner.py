"""
tyrcal.engines.scanner
----------------------
Bounded day-by-day searches for multi-moon events (eclipses, conjunctions).

Every scan walks absolute days through the same CalendarEngine used for
direct queries, evaluating a predicate over the fraction-model phase records
of each day. Scans are synchronous and bounded by an explicit day count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from tyrcal.core.types import EventMatch, MoonPhaseRecord, PlainDate
from tyrcal.engines.calendar import CalendarEngine
from tyrcal.engines.factory import FRACTION, phases_for_date
from tyrcal.engines.interfaces import cycle_position_deg

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_YEARS = 10
DEFAULT_TOLERANCE_DEG = 5.0

DARKEST = "Darkest"
BRIGHTEST = "Brightest"


@dataclass(frozen=True)
class Hit:
    kind: str
    category: str
    separation_deg: Optional[float] = None
    visible: Optional[bool] = None


DayPredicate = Callable[[Sequence[MoonPhaseRecord]], Optional[Hit]]


# ============================================================
# Predicates
# ============================================================

def eclipse(records: Sequence[MoonPhaseRecord]) -> Optional[Hit]:
    """All moons new together -> Darkest, all full together -> Brightest."""
    if len(records) < 2:
        return None
    names = {(r.phase_name or "").lower() for r in records}
    if names == {"new moon"}:
        return Hit("eclipse", DARKEST)
    if names == {"full moon"}:
        return Hit("eclipse", BRIGHTEST)
    return None


def eclipse_of(category: str) -> DayPredicate:
    def check(records: Sequence[MoonPhaseRecord]) -> Optional[Hit]:
        hit = eclipse(records)
        return hit if hit is not None and hit.category == category else None
    return check


def angular_separation(a_deg: float, b_deg: float) -> float:
    diff = abs(a_deg - b_deg) % 360.0
    return min(diff, 360.0 - diff)


def conjunction_between(
    a: MoonPhaseRecord,
    b: MoonPhaseRecord,
    tolerance_deg: float = DEFAULT_TOLERANCE_DEG,
) -> Optional[Hit]:
    sep = angular_separation(cycle_position_deg(a), cycle_position_deg(b))
    if sep > tolerance_deg:
        return None
    # away from New on either moon means the pair is up in the night sky
    visible = 0.25 < a.fraction < 0.75 or 0.25 < b.fraction < 0.75
    return Hit("conjunction", f"{a.name}/{b.name}", separation_deg=sep, visible=visible)


def pick_pair(
    records: Sequence[MoonPhaseRecord],
    names: Optional[Tuple[str, str]] = None,
) -> Optional[Tuple[MoonPhaseRecord, MoonPhaseRecord]]:
    """The two named moons if both are present, else the first two."""
    if len(records) < 2:
        return None
    if names is not None:
        by_name = {r.name.lower(): r for r in records}
        a = by_name.get(names[0].lower())
        b = by_name.get(names[1].lower())
        if a is not None and b is not None and a is not b:
            return a, b
    return records[0], records[1]


def conjunction(
    names: Optional[Tuple[str, str]] = None,
    tolerance_deg: float = DEFAULT_TOLERANCE_DEG,
) -> DayPredicate:
    def check(records: Sequence[MoonPhaseRecord]) -> Optional[Hit]:
        pair = pick_pair(records, names)
        if pair is None:
            return None
        return conjunction_between(pair[0], pair[1], tolerance_deg)
    return check


# ============================================================
# Scans
# ============================================================

def scan(
    engine: CalendarEngine,
    start: PlainDate,
    step: int,
    max_days: int,
    predicate: DayPredicate,
) -> Iterator[Tuple[int, PlainDate, Hit]]:
    """Yield (absolute day, date, hit) for matching days, at most ``max_days`` days examined."""
    if step not in (1, -1):
        raise ValueError("step must be +1 or -1")
    start_abs = engine.to_absolute(start)
    for i in range(max(0, max_days)):
        abs_day = start_abs + i * step
        d = engine.from_absolute(abs_day)
        hit = predicate(phases_for_date(engine, d, FRACTION))
        if hit is not None:
            yield abs_day, d, hit


def _match(d: PlainDate, hit: Hit, duration: int = 1) -> EventMatch:
    return EventMatch(
        date=d,
        kind=hit.kind,
        category=hit.category,
        separation_deg=hit.separation_deg,
        visible=hit.visible,
        duration_days=duration,
    )


def find_first(
    engine: CalendarEngine,
    start: PlainDate,
    predicate: DayPredicate,
    *,
    step: int = 1,
    years: int = DEFAULT_HORIZON_YEARS,
    max_days: Optional[int] = None,
) -> Optional[EventMatch]:
    """First matching day from ``start`` (inclusive) in direction ``step``."""
    limit = engine.days_per_year * years if max_days is None else max_days
    for _, d, hit in scan(engine, start, step, limit, predicate):
        return _match(d, hit)
    logger.debug("no match within %d days of %s (step %+d)", limit, start, step)
    return None


def scan_range(
    engine: CalendarEngine,
    start: PlainDate,
    end: PlainDate,
    predicate: DayPredicate,
    *,
    collapse: bool = True,
) -> List[EventMatch]:
    """
    Every match in the inclusive range (endpoints swapped if reversed).

    With ``collapse`` a run of consecutive matching days with the same
    category becomes a single event: the run's first day, or the day of
    tightest separation when the predicate reports one.
    """
    a, b = engine.to_absolute(start), engine.to_absolute(end)
    if a > b:
        a, b = b, a
        start = end
    hits = list(scan(engine, start, 1, b - a + 1, predicate))
    if not collapse:
        return [_match(d, hit) for _, d, hit in hits]

    out: List[EventMatch] = []
    run: Optional[List] = None  # [last_abs, best_date, best_hit, length]
    for abs_day, d, hit in hits:
        if run is not None and abs_day == run[0] + 1 and hit.category == run[2].category:
            run[0] = abs_day
            run[3] += 1
            if hit.separation_deg is not None and hit.separation_deg < run[2].separation_deg:
                run[1], run[2] = d, hit
            continue
        if run is not None:
            out.append(_match(run[1], run[2], run[3]))
        run = [abs_day, d, hit, 1]
    if run is not None:
        out.append(_match(run[1], run[2], run[3]))
    return out
