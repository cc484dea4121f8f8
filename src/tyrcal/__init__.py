"""tyrcal public API.

Keep this surface small: hosts should mostly interact with CalendarService and
the names re-exported here.
"""

from .api import CalendarService, best_effort
from .core.engine import CalendarProvider, StaticProvider
from .core.errors import (
    DegenerateConfigurationError,
    MalformedInputError,
    MissingContextError,
    TyrcalError,
)
from .core.time import parse_ymd, to_plain, to_wire, try_parse_ymd
from .core.types import (
    CalendarDescription,
    DayInfo,
    EraInfo,
    EventMatch,
    MoonPhaseRecord,
    PlainDate,
    WireDate,
)
from .engines.calendar import CalendarEngine
from .engines.era import ERA_LENGTH, year_info
from .engines.specs import ALL_SPECS, load_calendar

__all__ = [
    "CalendarService",
    "best_effort",
    "CalendarProvider",
    "StaticProvider",
    "TyrcalError",
    "MissingContextError",
    "MalformedInputError",
    "DegenerateConfigurationError",
    "parse_ymd",
    "try_parse_ymd",
    "to_plain",
    "to_wire",
    "CalendarDescription",
    "DayInfo",
    "EraInfo",
    "EventMatch",
    "MoonPhaseRecord",
    "PlainDate",
    "WireDate",
    "CalendarEngine",
    "ERA_LENGTH",
    "year_info",
    "ALL_SPECS",
    "load_calendar",
]
