from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

PhaseModelName = Literal["auto", "segments", "fraction"]


def _number(value: Any, default: float = 0) -> float:
    """Coerce host JSON numbers; anything unusable becomes ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            out = float(value)
        except ValueError:
            return default
        if not math.isfinite(out):
            return default
        return int(out) if out.is_integer() else out
    return default


def _int(value: Any, default: int = 0) -> int:
    return int(_number(value, default))


def _items(data: Mapping[str, Any], key: str) -> Tuple[Mapping[str, Any], ...]:
    raw = data.get(key)
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(x for x in raw if isinstance(x, Mapping))


# ============================================================
# Dates
# ============================================================

@dataclass(frozen=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0


@dataclass(frozen=True)
class PlainDate:
    """Internal date: ``month`` is a zero-based index into the month list."""
    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year}-{self.month + 1}-{self.day}"


@dataclass(frozen=True)
class WireDate:
    """Boundary date as exchanged with the host: ``month`` is 1-based."""
    year: int
    month: int
    day: int
    weekday: Optional[int] = None
    time: Optional[TimeOfDay] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WireDate":
        t = data.get("time")
        time = None
        if isinstance(t, Mapping):
            time = TimeOfDay(_int(t.get("hour")), _int(t.get("minute")), _int(t.get("second")))
        weekday = data.get("weekday")
        return cls(
            year=_int(data.get("year"), 1),
            month=_int(data.get("month"), 1),
            day=_int(data.get("day"), 1),
            weekday=weekday if isinstance(weekday, int) and not isinstance(weekday, bool) else None,
            time=time,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"year": self.year, "month": self.month, "day": self.day}
        if self.weekday is not None:
            out["weekday"] = self.weekday
        if self.time is not None:
            out["time"] = {"hour": self.time.hour, "minute": self.time.minute, "second": self.time.second}
        return out


# ============================================================
# Calendar description (read-only input)
# ============================================================

@dataclass(frozen=True)
class Month:
    name: str
    days: int


@dataclass(frozen=True)
class IntercalaryBlock:
    name: str
    after: str
    days: int


@dataclass(frozen=True)
class Weekday:
    name: str


@dataclass(frozen=True)
class Season:
    name: str
    start_month: int  # 1-based
    end_month: int    # 1-based, wraps past year end when < start_month

    def contains(self, month1: int) -> bool:
        if self.start_month <= self.end_month:
            return self.start_month <= month1 <= self.end_month
        return month1 >= self.start_month or month1 <= self.end_month


@dataclass(frozen=True)
class PhaseSegment:
    name: str
    length: float


@dataclass(frozen=True)
class Moon:
    name: str
    cycle_length: float
    first_new_moon: WireDate
    phases: Tuple[PhaseSegment, ...] = ()
    model: PhaseModelName = "auto"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Moon":
        ref = data.get("firstNewMoon")
        model = data.get("phaseModel", "auto")
        if model not in ("auto", "segments", "fraction"):
            logger.debug("moon %r: unknown phase model %r, using auto", data.get("name"), model)
            model = "auto"
        return cls(
            name=str(data.get("name") or ""),
            cycle_length=_number(data.get("cycleLength")),
            first_new_moon=WireDate.from_dict(ref) if isinstance(ref, Mapping) else WireDate(1, 1, 1),
            phases=tuple(
                PhaseSegment(str(p.get("name") or ""), _number(p.get("length")))
                for p in _items(data, "phases")
            ),
            model=model,
        )


@dataclass(frozen=True)
class CanonicalHour:
    name: str
    start_hour: float
    end_hour: float


@dataclass(frozen=True)
class CalendarDescription:
    """Pure data payload describing one calendar, as supplied by the host."""
    id: str
    name: str
    months: Tuple[Month, ...]
    intercalary: Tuple[IntercalaryBlock, ...] = ()
    weekdays: Tuple[Weekday, ...] = ()
    seasons: Tuple[Season, ...] = ()
    moons: Tuple[Moon, ...] = ()
    canonical_hours: Tuple[CanonicalHour, ...] = ()
    start_day: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CalendarDescription":
        """
        Build a description from the host's JSON shape.

        Malformed entries degrade to zeros or empty names instead of raising;
        the engine skips whatever it cannot use.
        """
        year = data.get("year")
        translations = data.get("translations")
        label = data.get("name")
        if not label and isinstance(translations, Mapping):
            en = translations.get("en")
            if isinstance(en, Mapping):
                label = en.get("label")
        return cls(
            id=str(data.get("id") or ""),
            name=str(label or data.get("id") or ""),
            months=tuple(
                Month(str(m.get("name") or ""), _int(m.get("days")))
                for m in _items(data, "months")
            ),
            intercalary=tuple(
                IntercalaryBlock(str(ic.get("name") or ""), str(ic.get("after") or ""), _int(ic.get("days")))
                for ic in _items(data, "intercalary")
            ),
            weekdays=tuple(Weekday(str(w.get("name") or "")) for w in _items(data, "weekdays")),
            seasons=tuple(
                Season(str(s.get("name") or ""), _int(s.get("startMonth")), _int(s.get("endMonth")))
                for s in _items(data, "seasons")
            ),
            moons=tuple(Moon.from_dict(m) for m in _items(data, "moons")),
            canonical_hours=tuple(
                CanonicalHour(str(h.get("name") or ""), _number(h.get("startHour")), _number(h.get("endHour")))
                for h in _items(data, "canonicalHours")
            ),
            start_day=_int(year.get("startDay")) if isinstance(year, Mapping) else 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "months": [{"name": m.name, "days": m.days} for m in self.months],
            "intercalary": [{"name": ic.name, "after": ic.after, "days": ic.days} for ic in self.intercalary],
            "weekdays": [{"name": w.name} for w in self.weekdays],
            "seasons": [
                {"name": s.name, "startMonth": s.start_month, "endMonth": s.end_month} for s in self.seasons
            ],
            "moons": [
                {
                    "name": m.name,
                    "cycleLength": m.cycle_length,
                    "firstNewMoon": m.first_new_moon.to_dict(),
                    "phases": [{"name": p.name, "length": p.length} for p in m.phases],
                    "phaseModel": m.model,
                }
                for m in self.moons
            ],
            "canonicalHours": [
                {"name": h.name, "startHour": h.start_hour, "endHour": h.end_hour} for h in self.canonical_hours
            ],
            "year": {"startDay": self.start_day},
        }


# ============================================================
# Derived records
# ============================================================

@dataclass(frozen=True)
class CalendarMeta:
    month_starts: Tuple[int, ...]  # 0-based day offset of each month within the year
    days_per_year: int             # including intercalary days


@dataclass(frozen=True)
class EraInfo:
    year: int
    era: int          # King's Age, 1..inf
    year_in_era: int  # 1..77
    name: str


@dataclass(frozen=True)
class MoonPhaseRecord:
    name: str
    cycle_length: float
    age: float
    phase_name: Optional[str]
    model: Literal["segments", "fraction"]
    fraction: float
    illumination: int
    days_until_new: Optional[float]
    days_until_full: Optional[float]
    phase_index: Optional[int] = None  # segment model only


@dataclass(frozen=True)
class EventMatch:
    date: PlainDate
    kind: Literal["eclipse", "conjunction"]
    category: str
    separation_deg: Optional[float] = None
    visible: Optional[bool] = None
    duration_days: int = 1


@dataclass(frozen=True)
class DayInfo:
    date: PlainDate
    calendar_id: str
    attributes: Dict[str, Any]
