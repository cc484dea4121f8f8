from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

_DATE_RE = re.compile(r"^[0-9]{1,6}-[0-9]{1,2}-[0-9]{1,2}$")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--calendar", default="tyr", help="built-in calendar id or path to a calendar JSON file")
    p.add_argument("--today", default=None, help="current date YYYY-M-D (1-based month)")
    p.add_argument("--verbose", action="store_true")


def make_service(args: argparse.Namespace):
    import tyrcal

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        cal = tyrcal.load_calendar(args.calendar)
    except (OSError, ValueError) as e:
        raise SystemExit(f"Cannot load calendar {args.calendar!r}: {e}")
    today = tyrcal.try_parse_ymd(args.today) if args.today else None
    if args.today and today is None:
        raise SystemExit(f"--today must be YYYY-M-D, got {args.today!r}")
    return tyrcal.CalendarService(tyrcal.StaticProvider(cal, today))


def _has_date(svc, d) -> bool:
    from tyrcal.core.errors import TyrcalError

    try:
        svc.resolve(svc.engine(), d)
    except TyrcalError:
        return False
    return True


def _fmt_days(x) -> str:
    return f"{x:g}d" if x is not None else "-"


def cmd_day(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tyrcal day", description="Date, weekday, season and King's Age")
    p.add_argument("date", nargs="?", help="YYYY-M-D (default: --today)")
    add_common_args(p)
    args = p.parse_args(argv)

    svc = make_service(args)
    info = svc.get_day_info(args.date)
    if info is None:
        print("No date context.")
        return 1
    a = info.attributes
    weekday = f"{a['weekday_name']}, " if a.get("weekday_name") else ""
    print(f"{weekday}{a['month_name']} {info.date.day}, Year {info.date.year}")
    if a.get("time"):
        print(f"  Time       : {a['time']} ({a.get('period') or '-'})")
    print(f"  Season     : {a.get('season') or '-'}")
    print(f"  King's Age : {a['era']}, Year {a['year_in_era']}")
    print(f"  Year of    : {a['year_name']}")
    return 0


def cmd_season(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tyrcal season", description="Season for a date")
    p.add_argument("date", nargs="?", help="YYYY-M-D (default: --today)")
    add_common_args(p)
    args = p.parse_args(argv)

    svc = make_service(args)
    if not _has_date(svc, args.date):
        print("No date context.")
        return 1
    print(f"Season: {svc.get_season(args.date) or '-'}")
    return 0


def cmd_era(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tyrcal era", description="King's Age and year name")
    p.add_argument("year", nargs="?", type=int, help="absolute year (default: year of --today)")
    add_common_args(p)
    args = p.parse_args(argv)

    info = make_service(args).get_year_info(args.year)
    if info is None:
        print("No date context.")
        return 1
    print(f"Year {info.year}: King's Age {info.era}, Year {info.year_in_era}, Year of {info.name}")
    return 0


def cmd_moons(argv: list[str]) -> int:
    from tyrcal.engines.resolvers import format_date
    from tyrcal.core.time import to_plain

    p = argparse.ArgumentParser(prog="tyrcal moons", description="Moon phases for a date")
    p.add_argument("date", nargs="?", help="YYYY-M-D (default: --today)")
    add_common_args(p)
    args = p.parse_args(argv)

    svc = make_service(args)
    phases = svc.get_moon_phases(args.date)
    if not phases:
        print("No moon data available.")
        return 1
    wire = svc.resolve_date(args.date)
    print(f"Moons - {format_date(svc.provider.active_calendar(), to_plain(wire))}")
    for r in phases:
        print(
            f"  {r.name}: {r.phase_name or '-'} (age {r.age:g}/{r.cycle_length:g}, {r.illumination}% lit), "
            f"next Full in {_fmt_days(r.days_until_full)}, next New in {_fmt_days(r.days_until_new)}"
        )
    return 0


def cmd_eclipse(argv: list[str]) -> int:
    from tyrcal.engines.resolvers import format_date

    p = argparse.ArgumentParser(prog="tyrcal eclipse", description="Find the next/previous eclipse window")
    p.add_argument("direction", nargs="?", default="next", choices=("next", "prev", "previous"))
    p.add_argument("--kind", choices=("any", "darkest", "brightest"), default="any")
    p.add_argument("--from", dest="start", default=None, help="YYYY-M-D (default: --today)")
    add_common_args(p)
    args = p.parse_args(argv)

    svc = make_service(args)
    if not _has_date(svc, args.start):
        print("No date context.")
        return 1
    finder = {
        "any": svc.get_next_eclipse,
        "darkest": svc.get_next_darkest,
        "brightest": svc.get_next_brightest,
    }[args.kind]
    m = finder(args.start, direction=args.direction)
    if m is None:
        print("No eclipse window found in scan range.")
        return 1
    print(f"Eclipse window ({m.category}): {format_date(svc.provider.active_calendar(), m.date)}")
    return 0


def _print_events(svc, events) -> None:
    from tyrcal.engines.resolvers import format_date

    cal = svc.provider.active_calendar()
    if not events:
        print("(none)")
    for m in events:
        extra = ""
        if m.separation_deg is not None:
            extra = f"  sep {m.separation_deg:.2f} deg{'  visible' if m.visible else ''}"
        print(f"{format_date(cal, m.date):<24} {m.category:<16} {m.duration_days}d{extra}")


def cmd_eclipses(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tyrcal eclipses", description="All eclipse windows in a date range")
    p.add_argument("start", help="YYYY-M-D")
    p.add_argument("end", help="YYYY-M-D")
    add_common_args(p)
    args = p.parse_args(argv)

    svc = make_service(args)
    _print_events(svc, svc.get_eclipses(args.start, args.end))
    return 0


def cmd_conjunctions(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="tyrcal conjunctions", description="Moon conjunctions in a date range")
    p.add_argument("start", help="YYYY-M-D")
    p.add_argument("end", help="YYYY-M-D")
    p.add_argument("--tolerance", type=float, default=5.0, help="max separation in degrees (default 5)")
    p.add_argument("--moons", nargs=2, metavar=("A", "B"), default=None, help="pair of moon names")
    add_common_args(p)
    args = p.parse_args(argv)

    svc = make_service(args)
    pair = tuple(args.moons) if args.moons else None
    _print_events(svc, svc.get_conjunctions(args.start, args.end, moons=pair, tolerance=args.tolerance))
    return 0


COMMANDS = {
    "day": cmd_day,
    "season": cmd_season,
    "era": cmd_era,
    "moons": cmd_moons,
    "eclipse": cmd_eclipse,
    "eclipses": cmd_eclipses,
    "conjunctions": cmd_conjunctions,
}

DIAGNOSTICS = {
    "pretty-month": "tyrcal.diagnostics.pretty_month",
    "era-table": "tyrcal.diagnostics.era_table",
    "moon-chart": "tyrcal.diagnostics.moon_chart",
}


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `tyrcal YYYY-M-D ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="tyrcal", description="Fantasy calendar, King's Age and moon toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Date with weekday, season and King's Age", add_help=False)
    sub.add_parser("season", help="Season for a date", add_help=False)
    sub.add_parser("era", help="King's Age and year name", add_help=False)
    sub.add_parser("moons", help="Moon phases for a date", add_help=False)
    sub.add_parser("eclipse", help="Next/previous eclipse window", add_help=False)
    sub.add_parser("eclipses", help="Eclipse windows in a range", add_help=False)
    sub.add_parser("conjunctions", help="Moon conjunctions in a range", add_help=False)

    # diagnostics
    sub.add_parser("pretty-month", help="Print a month grid with moon phases", add_help=False)
    sub.add_parser("era-table", help="Print a King's Age table", add_help=False)
    sub.add_parser("moon-chart", help="Plot moon illumination (needs diagnostics extra)", add_help=False)

    args, rest = p.parse_known_args(argv)

    if args.cmd in COMMANDS:
        return COMMANDS[args.cmd](rest)

    if args.cmd in DIAGNOSTICS:
        return _run_module_main(DIAGNOSTICS[args.cmd], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
