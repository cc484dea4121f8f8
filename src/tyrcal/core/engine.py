from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol

from .types import CalendarDescription, WireDate

class CalendarProvider(Protocol):
    """What the host supplies: the active calendar and, optionally, today's date."""
    def active_calendar(self) -> Optional[CalendarDescription]: ...
    def current_date(self) -> Optional[WireDate]: ...

@dataclass
class StaticProvider:
    calendar: Optional[CalendarDescription] = None
    current: Optional[WireDate] = None

    def active_calendar(self) -> Optional[CalendarDescription]:
        return self.calendar

    def current_date(self) -> Optional[WireDate]:
        return self.current

