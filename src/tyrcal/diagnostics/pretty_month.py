from __future__ import annotations

import argparse

import tyrcal
from tyrcal.engines import resolvers
from tyrcal.engines.factory import phases_for_date


def dow_header(cal: tyrcal.CalendarDescription, w: int) -> str:
    names = [wd.name for wd in cal.weekdays] or [f"D{i + 1}" for i in range(resolvers.DEFAULT_WEEK_LENGTH)]
    return " ".join(n[:w].ljust(w) for n in names)


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def phase_initials(name: str | None) -> str:
    if not name:
        return "-"
    return "".join(part[0] for part in name.split()).upper()


def month_calendar(eng: tyrcal.CalendarEngine, year: int, month: int) -> None:
    cal = eng.calendar
    week_len = len(cal.weekdays) or resolvers.DEFAULT_WEEK_LENGTH
    first = tyrcal.PlainDate(year, month, 1)
    span = eng.month_span(month)

    days = []
    for i in range(span):
        d = eng.shift(first, i)
        moons = phases_for_date(eng, d)
        top = f"{d.day:2d}"
        bot = "/".join(phase_initials(r.phase_name) for r in moons)
        days.append((d, top, bot))

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = resolvers.weekday_index(cal, first)
    for _ in range(pad):
        wk.append(cell("", ""))
    for _, top, bot in days:
        wk.append(cell(top, bot))
        if len(wk) == week_len:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < week_len:
            wk.append(cell("", ""))
        weeks.append(wk)

    moons = "/".join(m.name for m in cal.moons) or "no moons"
    title = f"{cal.name}  {resolvers.month_name(cal, month)} {year}   (phases: {moons})"
    print_grid(title, dow_header(cal, 6), weeks)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a month grid with per-day moon phase initials."
    )
    p.add_argument("--calendar", default="tyr", help="built-in calendar id or calendar JSON path")
    p.add_argument("--month", nargs=2, type=int, metavar=("Y", "M"), default=(14579, 1),
                   help="Year and 1-based month to print (default: 14579 1)")
    args = p.parse_args(argv)

    eng = tyrcal.CalendarEngine(tyrcal.load_calendar(args.calendar))
    year, month1 = args.month
    if not (1 <= month1 <= eng.month_count):
        raise SystemExit(f"--month must be in 1..{eng.month_count}")
    month_calendar(eng, year, month1 - 1)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
