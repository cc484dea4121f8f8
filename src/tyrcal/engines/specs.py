from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Union

from ..core.types import (
    CalendarDescription,
    IntercalaryBlock,
    Month,
    Moon,
    PhaseSegment,
    Season,
    Weekday,
    WireDate,
)

logger = logging.getLogger(__name__)


# ============================================================
# CALENDAR OF TYR
# ============================================================

# 12 months of 30 days; three 5-day festivals close each season: 375 days.
TYR_MONTHS = (
    Month("Dominary", 30),
    Month("Sorrow", 30),
    Month("Smolder", 30),
    Month("Scorch", 30),
    Month("Morrow", 30),
    Month("Rest", 30),
    Month("Gather", 30),
    Month("Hoard", 30),
    Month("Breeze", 30),
    Month("Mist", 30),
    Month("Bloom", 30),
    Month("Haze", 30),
)

TYR_INTERCALARY = (
    IntercalaryBlock("Cooling Sun", after="Scorch", days=5),
    IntercalaryBlock("Soaring Sun", after="Hoard", days=5),
    IntercalaryBlock("Highest Sun", after="Haze", days=5),
)

TYR_SEASONS = (
    Season("High Sun", 1, 4),
    Season("Sun Descending", 5, 8),
    Season("Sun Ascending", 9, 12),
)

TYR_WEEKDAYS = tuple(Weekday(n) for n in ("Firstday", "Seconday", "Thirday", "Fourthday", "Fifthday", "Sixthday"))

# Ral: 33-day cycle
RAL_PHASES = (
    PhaseSegment("New Moon", 3),
    PhaseSegment("Waxing Crescent", 6),
    PhaseSegment("First Quarter", 3),
    PhaseSegment("Waxing Gibbous", 4),
    PhaseSegment("Full Moon", 3),
    PhaseSegment("Waning Gibbous", 5),
    PhaseSegment("Last Quarter", 3),
    PhaseSegment("Waning Crescent", 6),
)

# Guthay: 125-day cycle
GUTHAY_PHASES = (
    PhaseSegment("New Moon", 8),
    PhaseSegment("Waxing Crescent", 23),
    PhaseSegment("First Quarter", 8),
    PhaseSegment("Waxing Gibbous", 23),
    PhaseSegment("Full Moon", 8),
    PhaseSegment("Waning Gibbous", 23),
    PhaseSegment("Last Quarter", 8),
    PhaseSegment("Waning Crescent", 24),
)

TYR = CalendarDescription(
    id="tyr",
    name="Calendar of Tyr",
    months=TYR_MONTHS,
    intercalary=TYR_INTERCALARY,
    weekdays=TYR_WEEKDAYS,
    seasons=TYR_SEASONS,
    moons=(
        Moon("Ral", 33, WireDate(1, 1, 1), RAL_PHASES),
        Moon("Guthay", 125, WireDate(1, 3, 12), GUTHAY_PHASES),
    ),
)

ALL_SPECS: Dict[str, CalendarDescription] = {
    "tyr": TYR,
}


def load_calendar(source: Union[str, Path]) -> CalendarDescription:
    """A built-in calendar by id, or a host calendar JSON file by path."""
    key = str(source)
    if key in ALL_SPECS:
        return ALL_SPECS[key]
    path = Path(source)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    cal = CalendarDescription.from_dict(data)
    logger.debug("loaded calendar %r from %s (%d months, %d moons)", cal.id, path, len(cal.months), len(cal.moons))
    return cal
