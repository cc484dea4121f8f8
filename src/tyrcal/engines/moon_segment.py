"""
tyrcal.engines.moon_segment
---------------------------
Phase lookup from explicit, named phase segments.

The moon's cycle is partitioned into consecutive segments (e.g. "New Moon"
for 3 days, "Waxing Crescent" for 6 days, ...). The current phase is the
segment containing the cycle age. If the segment lengths fall short of the
cycle length, the tail of the cycle is attributed to the last segment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from tyrcal.core.types import Moon, MoonPhaseRecord, PhaseSegment, PlainDate
from tyrcal.engines.interfaces import has_cycle, illumination_pct, moon_age

if TYPE_CHECKING:
    from tyrcal.engines.calendar import CalendarEngine


@dataclass(frozen=True)
class SegmentPosition:
    index: int
    offset: float     # days already spent in the segment
    remaining: float  # days left in the segment


def _length(seg: PhaseSegment) -> float:
    return seg.length if seg.length > 0 else 0


def locate(phases: Sequence[PhaseSegment], age: float, cycle_length: float) -> SegmentPosition:
    accum = 0.0
    for i, seg in enumerate(phases):
        seg_len = _length(seg)
        if age < accum + seg_len:
            return SegmentPosition(index=i, offset=age - accum, remaining=accum + seg_len - age)
        accum += seg_len
    last = len(phases) - 1
    return SegmentPosition(index=last, offset=age - accum, remaining=max(0.0, cycle_length - age))


def days_until_phase(
    phases: Sequence[PhaseSegment],
    pos: SegmentPosition,
    target: str,
    cycle_length: float,
) -> Optional[float]:
    """
    Days until the start of the next segment named ``target`` (case-insensitive).
    Zero only when the day sits exactly at the start of such a segment.

    This is a distance to a segment start, not to the end of a matching
    segment: a day already inside a "Full Moon" segment counts forward to
    the next cycle's "Full Moon", never to the close of the current one.
    Both phase models then agree on when a phase "arrives".
    """
    if not phases:
        return None
    target = target.lower()
    n = len(phases)
    if pos.offset == 0 and phases[pos.index].name.lower() == target:
        return 0

    d = pos.remaining
    idx = (pos.index + 1) % n
    for _ in range(int(math.ceil(cycle_length)) + n):
        if phases[idx].name.lower() == target:
            return d
        d += _length(phases[idx])
        idx = (idx + 1) % n
    return None


class SegmentPhaseModel:
    name = "segments"

    def __init__(self, new_name: str = "new moon", full_name: str = "full moon"):
        self.new_name = new_name
        self.full_name = full_name

    def position(self, engine: "CalendarEngine", d: PlainDate, moon: Moon) -> Optional[Tuple[float, SegmentPosition]]:
        if not has_cycle(moon) or not moon.phases:
            return None
        age = moon_age(engine, d, moon)
        return age, locate(moon.phases, age, moon.cycle_length)

    def compute(self, engine: "CalendarEngine", d: PlainDate, moon: Moon) -> Optional[MoonPhaseRecord]:
        hit = self.position(engine, d, moon)
        if hit is None:
            return None
        age, pos = hit
        fraction = age / moon.cycle_length
        return MoonPhaseRecord(
            name=moon.name,
            cycle_length=moon.cycle_length,
            age=age,
            phase_name=moon.phases[pos.index].name or None,
            model="segments",
            fraction=fraction,
            illumination=illumination_pct(fraction),
            days_until_new=days_until_phase(moon.phases, pos, self.new_name, moon.cycle_length),
            days_until_full=days_until_phase(moon.phases, pos, self.full_name, moon.cycle_length),
            phase_index=pos.index,
        )
