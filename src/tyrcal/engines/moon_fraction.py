"""
tyrcal.engines.moon_fraction
----------------------------
Phase lookup from the cycle fraction alone. Needs nothing but a cycle length
and a reference new moon; phases are fixed eighths of the cycle.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Tuple

from tyrcal.core.time import safe_mod
from tyrcal.core.types import Moon, MoonPhaseRecord, PlainDate
from tyrcal.engines.interfaces import has_cycle, illumination_pct, moon_age

if TYPE_CHECKING:
    from tyrcal.engines.calendar import CalendarEngine

# (upper bound of cycle fraction, phase name)
PHASE_BREAKS: Tuple[Tuple[float, str], ...] = (
    (1 / 8, "New Moon"),
    (2 / 8, "Waxing Crescent"),
    (3 / 8, "First Quarter"),
    (4 / 8, "Waxing Gibbous"),
    (5 / 8, "Full Moon"),
    (6 / 8, "Waning Gibbous"),
    (7 / 8, "Last Quarter"),
    (1.0, "Waning Crescent"),
)

# a day within this share of a cycle from the target counts as "at" it
TARGET_EPSILON = 0.001


def phase_name(fraction: float) -> str:
    for upper, name in PHASE_BREAKS:
        if fraction < upper:
            return name
    return PHASE_BREAKS[-1][1]


def days_to_fraction(fraction: float, target: float, cycle_length: float) -> int:
    """Whole days until the cycle next reaches ``target`` (0 for New, 0.5 for Full)."""
    delta = safe_mod(target - fraction, 1.0)
    if delta < TARGET_EPSILON or delta > 1.0 - TARGET_EPSILON:
        return 0
    # strip float noise before taking the ceiling
    return int(math.ceil(round(delta * cycle_length, 9)))


class FractionPhaseModel:
    name = "fraction"

    def compute(self, engine: "CalendarEngine", d: PlainDate, moon: Moon) -> Optional[MoonPhaseRecord]:
        if not has_cycle(moon):
            return None
        age = moon_age(engine, d, moon)
        frac = age / moon.cycle_length
        return MoonPhaseRecord(
            name=moon.name,
            cycle_length=moon.cycle_length,
            age=age,
            phase_name=phase_name(frac),
            model="fraction",
            fraction=frac,
            illumination=illumination_pct(frac),
            days_until_new=days_to_fraction(frac, 0.0, moon.cycle_length),
            days_until_full=days_to_fraction(frac, 0.5, moon.cycle_length),
        )
