# tests/test_types.py

import json

from tyrcal.core.types import CalendarDescription, TimeOfDay, WireDate
from tyrcal.engines.specs import TYR, load_calendar

HOST_JSON = {
    "id": "athas-test",
    "translations": {"en": {"label": "Athas (test)"}},
    "year": {"startDay": 2},
    "months": [{"name": "Dominary", "days": 30}, {"name": "Sorrow", "days": "30"}, "junk"],
    "intercalary": [{"name": "Cooling Sun", "after": "Dominary", "days": 5}],
    "weekdays": [{"name": "One"}, {"name": "Two"}],
    "seasons": [{"name": "Hot", "startMonth": 2, "endMonth": 1}],
    "moons": [
        {
            "name": "Ral",
            "cycleLength": 33,
            "firstNewMoon": {"year": 1, "month": 1, "day": 3},
            "phases": [{"name": "New Moon", "length": 3}, {"name": "Rest", "length": "x"}],
        },
        {"name": "Ghost", "cycleLength": "never"},
    ],
    "canonicalHours": [{"name": "Vigil", "startHour": 18, "endHour": 24}],
}


def test_from_host_json():
    cal = CalendarDescription.from_dict(HOST_JSON)
    assert cal.id == "athas-test"
    assert cal.name == "Athas (test)"
    assert cal.start_day == 2
    assert [(m.name, m.days) for m in cal.months] == [("Dominary", 30), ("Sorrow", 30)]
    assert cal.intercalary[0].after == "Dominary"
    assert cal.seasons[0].contains(1) and cal.seasons[0].contains(2)

    ral, ghost = cal.moons
    assert ral.cycle_length == 33
    assert ral.first_new_moon == WireDate(1, 1, 3)
    assert [p.length for p in ral.phases] == [3, 0]
    assert ral.model == "auto"
    assert ghost.cycle_length == 0
    assert ghost.first_new_moon == WireDate(1, 1, 1)

    assert cal.canonical_hours[0].end_hour == 24


def test_wire_date_from_host_dict():
    d = WireDate.from_dict({"year": 14579, "month": 3, "day": 9, "weekday": 4,
                            "time": {"hour": 7, "minute": 30, "second": 5}})
    assert d == WireDate(14579, 3, 9, weekday=4, time=TimeOfDay(7, 30, 5))
    assert WireDate.from_dict(d.to_dict()) == d
    assert WireDate.from_dict({"year": 3, "month": 2, "day": 1, "weekday": True}).weekday is None


def test_description_survives_json(tmp_path):
    path = tmp_path / "tyr.json"
    path.write_text(json.dumps(TYR.to_dict()), encoding="utf-8")
    assert load_calendar(path) == TYR
    assert load_calendar("tyr") is TYR
