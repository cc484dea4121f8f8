"""
tyrcal.engines.era
------------------
King's Ages: a fixed 77-year cycle counted from year 1. Each year of an age
is named by pairing two independently cycling lists (11 x 7 = 77), so a name
never repeats within an age.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Tuple

from tyrcal.core.errors import MalformedInputError
from tyrcal.core.types import EraInfo

ERA_LENGTH = 77

# Endlean cycle (11 names)
ERA_NAMES: Tuple[str, ...] = (
    "Ral",
    "Friend",
    "Desert",
    "Priest",
    "Wind",
    "Dragon",
    "Mountain",
    "King",
    "Silt",
    "Enemy",
    "Guthay",
)

# Seofean cycle (7 names)
ERA_EPITHETS: Tuple[str, ...] = (
    "Fury",
    "Contemplation",
    "Vengeance",
    "Slumber",
    "Defiance",
    "Reverence",
    "Agitation",
)


def year_name(year_in_era: int) -> str:
    i = year_in_era - 1
    return f"{ERA_NAMES[i % len(ERA_NAMES)]}'s {ERA_EPITHETS[i % len(ERA_EPITHETS)]}"


def year_info(year: int) -> EraInfo:
    """King's Age, year within the age and year name. 14579 -> age 190, year 26."""
    if isinstance(year, bool) or not isinstance(year, Real) or not math.isfinite(year):
        raise MalformedInputError(f"Year must be a finite integer, got {year!r}")
    if int(year) != year:
        raise MalformedInputError(f"Year must be integral, got {year!r}")
    y = int(year)

    era = (y - 1) // ERA_LENGTH + 1
    year_in_era = (y - 1) % ERA_LENGTH + 1
    return EraInfo(year=y, era=era, year_in_era=year_in_era, name=year_name(year_in_era))
