from __future__ import annotations
from typing import Any, Dict

from ..engines import resolvers
from ..engines.era import year_info
from ..engines.factory import phases_for_date
from .registry import DayContext, register_attribute

def date_label(ctx: DayContext) -> Dict[str, Any]:
    cal = ctx.engine.calendar
    return {
        "month_name": resolvers.month_name(cal, ctx.date.month),
        "formatted": resolvers.format_date(cal, ctx.date),
    }

def weekday(ctx: DayContext) -> Dict[str, Any]:
    cal = ctx.engine.calendar
    return {
        "weekday": resolvers.weekday_index(cal, ctx.date, ctx.weekday),
        "weekday_name": resolvers.weekday_name(cal, ctx.date, ctx.weekday),
    }

def season(ctx: DayContext) -> Dict[str, Any]:
    return {"season": resolvers.season(ctx.engine.calendar, ctx.date.month + 1)}

def era(ctx: DayContext) -> Dict[str, Any]:
    info = year_info(ctx.date.year)
    return {"era": info.era, "year_in_era": info.year_in_era, "year_name": info.name}

def time_of_day(ctx: DayContext) -> Dict[str, Any]:
    if ctx.time is None:
        return {"time": None, "period": None}
    t = ctx.time
    return {
        "time": f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}",
        "period": resolvers.time_period(ctx.engine.calendar, t.hour, t.minute),
    }

def moons(ctx: DayContext) -> Dict[str, Any]:
    return {"moons": phases_for_date(ctx.engine, ctx.date)}

register_attribute("date", date_label)
register_attribute("weekday", weekday)
register_attribute("season", season)
register_attribute("era", era)
register_attribute("time", time_of_day)
register_attribute("moons", moons)
