import pytest

from tyrcal.core.types import CalendarDescription, Month, Moon, PhaseSegment, WireDate
from tyrcal.engines.calendar import CalendarEngine
from tyrcal.engines.meta import clear_meta_cache


@pytest.fixture(autouse=True)
def _fresh_meta_cache():
    clear_meta_cache()
    yield
    clear_meta_cache()


def one_month_calendar(*moons, days=400):
    """A single long month per year, so absolute day == day - 1 in year 1."""
    return CalendarDescription(id="test", name="Test", months=(Month("Long", days),), moons=tuple(moons))


@pytest.fixture
def twin_moons():
    """Two moons with the same reference new moon and a 32-day cycle."""
    cal = one_month_calendar(
        Moon("Alpha", 32, WireDate(1, 1, 1)),
        Moon("Beta", 32, WireDate(1, 1, 1)),
    )
    return CalendarEngine(cal)


@pytest.fixture
def segmented_moon():
    return Moon(
        "Seg",
        34,
        WireDate(1, 1, 11),
        (
            PhaseSegment("New Moon", 4),
            PhaseSegment("Waxing", 9),
            PhaseSegment("Full Moon", 4),
            PhaseSegment("Waning", 17),
        ),
    )
