"""
tyrcal.engines.factory
----------------------
Chooses a phase model per moon and runs it over every moon of a calendar.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from tyrcal.core.types import Moon, MoonPhaseRecord, PlainDate
from tyrcal.engines.calendar import CalendarEngine
from tyrcal.engines.interfaces import MoonPhaseModel
from tyrcal.engines.moon_fraction import FractionPhaseModel
from tyrcal.engines.moon_segment import SegmentPhaseModel

logger = logging.getLogger(__name__)

SEGMENTS = SegmentPhaseModel()
FRACTION = FractionPhaseModel()

MODELS = {
    "segments": SEGMENTS,
    "fraction": FRACTION,
}


def model_for(moon: Moon) -> Optional[MoonPhaseModel]:
    """Explicit model wins; otherwise segments when the moon defines any. None for an unknown model."""
    if moon.model in MODELS:
        return MODELS[moon.model]
    if moon.model != "auto":
        logger.debug("skipping moon %r: unknown phase model %r", moon.name, moon.model)
        return None
    return SEGMENTS if moon.phases else FRACTION


def phases_for_date(
    engine: CalendarEngine,
    d: PlainDate,
    model: Optional[MoonPhaseModel] = None,
) -> List[MoonPhaseRecord]:
    """
    One record per usable moon, in the calendar's declared order.
    ``model`` forces a single model for every moon.
    """
    out: List[MoonPhaseRecord] = []
    for moon in engine.calendar.moons:
        chosen = model or model_for(moon)
        if chosen is None:
            continue
        rec = chosen.compute(engine, d, moon)
        if rec is not None:
            out.append(rec)
    return out
