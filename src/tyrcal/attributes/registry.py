from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from ..core.types import PlainDate, TimeOfDay
from ..engines.calendar import CalendarEngine

@dataclass(frozen=True)
class DayContext:
    engine: CalendarEngine
    date: PlainDate
    weekday: Optional[int] = None  # explicit weekday supplied by the host, if any
    time: Optional[TimeOfDay] = None

AttrFunc = Callable[[DayContext], Dict[str, Any]]
_REGISTRY: Dict[str, AttrFunc] = {}

def register_attribute(name: str, fn: AttrFunc) -> None:
    _REGISTRY[name] = fn

def list_attributes() -> Sequence[str]:
    return sorted(_REGISTRY)

def compute_attributes(ctx: DayContext, names: Sequence[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in names:
        if name not in _REGISTRY:
            raise KeyError(f"Unknown attribute '{name}'. Available: {sorted(_REGISTRY)}")
        out.update(_REGISTRY[name](ctx))
    return out
