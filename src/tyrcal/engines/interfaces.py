"""
tyrcal.engines.interfaces
-------------------------
Boundary between the date arithmetic (CalendarEngine) and the phase models.

A phase model turns a moon's cycle age on a given day into a phase record.
Ages are measured in days since the moon's reference new moon, reduced
modulo the cycle length, so they always lie in [0, cycle_length).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Protocol

from tyrcal.core.time import safe_mod, to_plain
from tyrcal.core.types import Moon, MoonPhaseRecord, PlainDate

if TYPE_CHECKING:
    from tyrcal.engines.calendar import CalendarEngine


class MoonPhaseModel(Protocol):
    name: str

    def compute(self, engine: "CalendarEngine", d: PlainDate, moon: Moon) -> Optional[MoonPhaseRecord]:
        """Phase record for ``moon`` on ``d``, or None if the moon cannot be modelled."""
        ...


def has_cycle(moon: Moon) -> bool:
    """A moon can be modelled only with a finite, positive cycle length."""
    return math.isfinite(moon.cycle_length) and moon.cycle_length > 0


def moon_age(engine: "CalendarEngine", d: PlainDate, moon: Moon) -> float:
    """Days since the most recent reference new moon, in [0, cycle_length)."""
    ref_abs = engine.to_absolute(to_plain(moon.first_new_moon))
    return safe_mod(engine.to_absolute(d) - ref_abs, moon.cycle_length)


def illumination_pct(fraction: float) -> int:
    """Lit percentage of the disc: 0 at New, 100 at Full (fraction 0.5)."""
    # half-up rounding, not banker's
    return int(math.floor(50.0 * (1.0 + math.cos(2.0 * math.pi * (fraction - 0.5))) + 0.5))


def cycle_position_deg(record: MoonPhaseRecord) -> float:
    """Angular position in the cycle; 0 at New, 180 at Full."""
    return 360.0 * record.age / record.cycle_length
