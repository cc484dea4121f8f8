# tests/test_era.py

import pytest

from tyrcal.core.errors import MalformedInputError
from tyrcal.engines.era import ERA_EPITHETS, ERA_LENGTH, ERA_NAMES, year_info, year_name


def test_era_constants():
    assert ERA_LENGTH == 77
    assert len(ERA_NAMES) == 11
    assert len(ERA_EPITHETS) == 7


def test_first_age():
    info = year_info(1)
    assert (info.era, info.year_in_era, info.name) == (1, 1, "Ral's Fury")
    info = year_info(77)
    assert (info.era, info.year_in_era, info.name) == (1, 77, "Guthay's Agitation")
    info = year_info(78)
    assert (info.era, info.year_in_era, info.name) == (2, 1, "Ral's Fury")


def test_known_years():
    info = year_info(14579)
    assert (info.year, info.era, info.year_in_era) == (14579, 190, 26)
    assert info.name == "Priest's Defiance"

    # 77-year ages counted from year 1
    info = year_info(14656)
    assert (info.era, info.year_in_era) == (191, 26)
    assert info.name == "Priest's Defiance"


def test_periodicity():
    for y in range(1, 2000, 13):
        a, b = year_info(y), year_info(y + ERA_LENGTH)
        assert a.year_in_era == b.year_in_era
        assert a.name == b.name
        assert b.era == a.era + 1


def test_names_unique_within_an_age():
    names = {year_name(i) for i in range(1, ERA_LENGTH + 1)}
    assert len(names) == ERA_LENGTH


def test_years_before_one_use_floor_arithmetic():
    info = year_info(0)
    assert (info.era, info.year_in_era) == (0, 77)
    info = year_info(-76)
    assert (info.era, info.year_in_era) == (0, 1)


def test_integral_float_year_accepted():
    assert year_info(14579.0) == year_info(14579)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), 1.5, "14579", None, True])
def test_malformed_years(bad):
    with pytest.raises(MalformedInputError):
        year_info(bad)
