from __future__ import annotations

import argparse
from typing import List

from tyrcal.engines.era import ERA_LENGTH, year_info


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print King's Age / year-name table for a span of years."
    )
    p.add_argument("--from-year", type=int, default=14579)
    p.add_argument("--to-year", type=int, default=None, help="default: one full age after --from-year")
    p.add_argument(
        "--find",
        type=str,
        default="",
        help='Only list years whose name contains this text, e.g. "Guthay" (case-insensitive).',
    )
    args = p.parse_args(argv)

    Y0 = args.from_year
    Y1 = args.to_year if args.to_year is not None else Y0 + ERA_LENGTH - 1
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "Age", "Yr", "Name"]
    colw: List[int] = [max(6, len(str(Y1))), 5, 3, 24]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    needle = args.find.lower()
    shown = 0
    for Y in range(Y0, Y1 + 1):
        info = year_info(Y)
        if needle and needle not in info.name.lower():
            continue
        row = [str(info.year), str(info.era), str(info.year_in_era), info.name]
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))
        shown += 1

    if shown == 0:
        print("(none)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
