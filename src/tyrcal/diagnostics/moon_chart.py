#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional

import tyrcal
from tyrcal.engines import scanner
from tyrcal.engines.factory import FRACTION, phases_for_date


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "tyrcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "tyrcal[diagnostics]"') from e


@dataclass(frozen=True)
class Style:
    color: str
    lw: float = 1.4
    alpha: float = 0.95


DEFAULT_STYLES: List[Style] = [
    Style("#c0392b"),
    Style("#2c6fbb"),
    Style("#6a8a2f"),
    Style("0.35"),
]

EVENT_COLORS: Dict[str, str] = {
    scanner.DARKEST: "0.15",
    scanner.BRIGHTEST: "#e3b341",
}


def build_series(np, eng: tyrcal.CalendarEngine, start: tyrcal.PlainDate, days: int):
    """Illumination per moon per day: x (day offsets) and {moon: y}."""
    names = [m.name for m in eng.calendar.moons]
    ys: Dict[str, List[float]] = {n: [] for n in names}
    for i in range(days):
        recs = {r.name: r for r in phases_for_date(eng, eng.shift(start, i), FRACTION)}
        for n in names:
            r = recs.get(n)
            ys[n].append(r.illumination if r is not None else np.nan)
    return np.arange(days), {n: np.array(v, dtype=float) for n, v in ys.items()}


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Plot per-moon illumination over a span of days, shading eclipse windows."
    )
    p.add_argument("--calendar", default="tyr", help="built-in calendar id or calendar JSON path")
    p.add_argument("--start", default="14579-1-1", help="first day YYYY-M-D (default: 14579-1-1)")
    p.add_argument("--days", type=int, default=375, help="number of days to plot (default: 375)")
    p.add_argument("--out", default="moon_chart.png")
    p.add_argument("--title", default=None)
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    if args.days <= 0:
        raise SystemExit("--days must be positive")
    wire = tyrcal.try_parse_ymd(args.start)
    if wire is None or wire.month < 1:
        raise SystemExit(f"--start must be YYYY-M-D, got {args.start!r}")

    cal = tyrcal.load_calendar(args.calendar)
    eng = tyrcal.CalendarEngine(cal)
    start = eng.check(tyrcal.to_plain(wire))
    end = eng.shift(start, args.days - 1)

    x, ys = build_series(np, eng, start, args.days)

    fig, ax = plt.subplots(figsize=(14, 3.8))
    for i, (name, y) in enumerate(ys.items()):
        st = DEFAULT_STYLES[i % len(DEFAULT_STYLES)]
        ax.plot(x, y, color=st.color, lw=st.lw, alpha=st.alpha, label=name)

    start_abs = eng.to_absolute(start)
    for m in scanner.scan_range(eng, start, end, scanner.eclipse):
        x0 = eng.to_absolute(m.date) - start_abs
        ax.axvspan(x0 - 0.5, x0 + m.duration_days - 0.5,
                   color=EVENT_COLORS.get(m.category, "0.5"), alpha=0.25, lw=0, zorder=0)

    ax.set_xlim(-0.5, args.days - 0.5)
    ax.set_ylim(-2, 102)
    ax.set_xlabel(f"days since {args.start}")
    ax.set_ylabel("illumination (%)")
    ax.set_title(args.title or f"{cal.name}: moon illumination")
    ax.legend(loc="center left", bbox_to_anchor=(1.01, 0.5), frameon=False)
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
