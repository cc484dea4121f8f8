"""
tyrcal.engines.meta
-------------------
Per-calendar year layout: the day offset at which each month starts and the
total number of days in a year, intercalary blocks included.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Tuple

from tyrcal.core.types import CalendarDescription, CalendarMeta

logger = logging.getLogger(__name__)

_CACHE_MAX = 64
_cache: Dict[int, Tuple[CalendarDescription, CalendarMeta]] = {}
_cache_lock = threading.Lock()


def build_meta(calendar: CalendarDescription) -> CalendarMeta:
    """
    Prefix sums over the month list. Intercalary days are counted after the
    month they follow, so they push back the start of every later month.
    """
    starts: List[int] = []
    running = 0
    for month in calendar.months:
        starts.append(running)
        running += max(0, month.days or 0)
        for ic in calendar.intercalary:
            if ic.after == month.name:
                running += max(0, ic.days or 0)
    return CalendarMeta(month_starts=tuple(starts), days_per_year=running)


def meta_for(calendar: CalendarDescription) -> CalendarMeta:
    """Read-through cache of :func:`build_meta` keyed by object identity."""
    key = id(calendar)
    hit = _cache.get(key)
    if hit is not None and hit[0] is calendar:
        return hit[1]

    meta = build_meta(calendar)
    with _cache_lock:
        if len(_cache) >= _CACHE_MAX:
            logger.debug("meta cache full (%d entries), evicting", len(_cache))
            _cache.clear()
        # keeping the calendar alive prevents id() reuse while the entry lives
        _cache[key] = (calendar, meta)
    return meta


def clear_meta_cache() -> None:
    with _cache_lock:
        _cache.clear()
