from __future__ import annotations

import functools
import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from .attributes import standard as _standard  # noqa: F401  (registers attributes)
from .attributes.registry import DayContext, compute_attributes
from .core.engine import CalendarProvider
from .core.errors import MalformedInputError, MissingContextError, TyrcalError
from .core.time import parse_ymd, to_plain
from .core.types import DayInfo, EraInfo, EventMatch, MoonPhaseRecord, PlainDate, WireDate
from .engines import resolvers, scanner
from .engines.calendar import CalendarEngine
from .engines.era import year_info
from .engines.factory import phases_for_date

logger = logging.getLogger(__name__)

T = TypeVar("T")
DateArg = Union[WireDate, str, None]

DEFAULT_DAY_ATTRIBUTES: Tuple[str, ...] = ("date", "weekday", "season", "era", "time")


def best_effort(default: Callable[[], Any]):
    """
    Turn the engine's expected failures (missing context, malformed input,
    degenerate configuration) into an empty result. Anything else is a bug
    and propagates.
    """
    def deco(fn: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except TyrcalError as e:
                logger.debug("%s -> empty result: %s: %s", fn.__name__, type(e).__name__, e)
                return default()
        return wrapper
    return deco


class CalendarService:
    """
    Entry point for hosts. All calendar and "today" context comes from the
    provider passed in; nothing is read from global state.

    Methods without the ``get_`` prefix raise :class:`TyrcalError` subclasses
    when there is no answer; the ``get_`` variants return None or [] instead.
    """
    def __init__(self, provider: CalendarProvider):
        self.provider = provider

    # ---------------------------------------------------------
    # Context resolution
    # ---------------------------------------------------------

    def engine(self) -> CalendarEngine:
        cal = self.provider.active_calendar()
        if cal is None:
            raise MissingContextError("No active calendar")
        return CalendarEngine(cal)

    def resolve_date(self, d: DateArg = None) -> WireDate:
        if d is None:
            d = self.provider.current_date()
            if d is None:
                raise MissingContextError("No current date available")
        if isinstance(d, str):
            d = parse_ymd(d)
        return d

    def resolve(self, eng: CalendarEngine, d: DateArg = None) -> PlainDate:
        return self.checked(eng, self.resolve_date(d))

    @staticmethod
    def checked(eng: CalendarEngine, wire: WireDate) -> PlainDate:
        # wire months are 1-based; to_plain would clamp 0 onto the first month
        if wire.month < 1:
            raise MalformedInputError(f"Month {wire.month} outside 1..{eng.month_count}")
        return eng.check(to_plain(wire))

    # ---------------------------------------------------------
    # Strict API
    # ---------------------------------------------------------

    def year_info(self, year: Optional[int] = None) -> EraInfo:
        if year is None:
            year = self.resolve_date(None).year
        return year_info(year)

    def moon_phases(self, d: DateArg = None) -> List[MoonPhaseRecord]:
        eng = self.engine()
        return phases_for_date(eng, self.resolve(eng, d))

    def conjunctions(
        self,
        start: DateArg,
        end: DateArg,
        *,
        moons: Optional[Tuple[str, str]] = None,
        tolerance: float = scanner.DEFAULT_TOLERANCE_DEG,
    ) -> List[EventMatch]:
        eng = self.engine()
        return scanner.scan_range(
            eng, self.resolve(eng, start), self.resolve(eng, end), scanner.conjunction(moons, tolerance)
        )

    def eclipses(self, start: DateArg, end: DateArg) -> List[EventMatch]:
        eng = self.engine()
        return scanner.scan_range(eng, self.resolve(eng, start), self.resolve(eng, end), scanner.eclipse)

    def next_eclipse(
        self,
        category: Optional[str] = None,
        start: DateArg = None,
        *,
        direction: str = "next",
        years: int = scanner.DEFAULT_HORIZON_YEARS,
    ) -> Optional[EventMatch]:
        eng = self.engine()
        step = -1 if direction.lower().startswith("prev") else 1
        predicate = scanner.eclipse if category is None else scanner.eclipse_of(category)
        return scanner.find_first(eng, self.resolve(eng, start), predicate, step=step, years=years)

    def day(self, d: DateArg = None, attributes: Sequence[str] = DEFAULT_DAY_ATTRIBUTES) -> DayInfo:
        eng = self.engine()
        wire = self.resolve_date(d)
        ctx = DayContext(engine=eng, date=self.checked(eng, wire), weekday=wire.weekday, time=wire.time)
        return DayInfo(date=ctx.date, calendar_id=eng.calendar.id, attributes=compute_attributes(ctx, attributes))

    def season_of(self, d: DateArg = None) -> Optional[str]:
        eng = self.engine()
        return resolvers.season(eng.calendar, self.resolve(eng, d).month + 1)

    # ---------------------------------------------------------
    # Best-effort API (host display contexts)
    # ---------------------------------------------------------

    @best_effort(lambda: None)
    def get_year_info(self, year: Optional[int] = None) -> Optional[EraInfo]:
        return self.year_info(year)

    @best_effort(list)
    def get_moon_phases(self, d: DateArg = None) -> List[MoonPhaseRecord]:
        return self.moon_phases(d)

    @best_effort(list)
    def get_conjunctions(self, start: DateArg, end: DateArg, **kwargs) -> List[EventMatch]:
        return self.conjunctions(start, end, **kwargs)

    @best_effort(list)
    def get_eclipses(self, start: DateArg, end: DateArg) -> List[EventMatch]:
        return self.eclipses(start, end)

    @best_effort(lambda: None)
    def get_next_eclipse(self, start: DateArg = None, *, direction: str = "next") -> Optional[EventMatch]:
        return self.next_eclipse(None, start, direction=direction)

    @best_effort(lambda: None)
    def get_next_brightest(self, start: DateArg = None, *, direction: str = "next") -> Optional[EventMatch]:
        return self.next_eclipse(scanner.BRIGHTEST, start, direction=direction)

    @best_effort(lambda: None)
    def get_next_darkest(self, start: DateArg = None, *, direction: str = "next") -> Optional[EventMatch]:
        return self.next_eclipse(scanner.DARKEST, start, direction=direction)

    @best_effort(lambda: None)
    def get_day_info(self, d: DateArg = None, attributes: Sequence[str] = DEFAULT_DAY_ATTRIBUTES) -> Optional[DayInfo]:
        return self.day(d, attributes)

    @best_effort(lambda: None)
    def get_season(self, d: DateArg = None) -> Optional[str]:
        return self.season_of(d)
