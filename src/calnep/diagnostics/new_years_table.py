from __future__ import annotations

from datetime import date
import argparse
from typing import List, Optional

import calnep


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Print the Gregorian date of 1 Baishakh (Nepali New Year) per BS year.")
    p.add_argument("--from-year", type=int, default=2070)
    p.add_argument("--to-year", type=int, default=2090)
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="iso",
        help="Display format of the Gregorian column (default: iso).",
    )
    args = p.parse_args(argv)

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "1 Baishakh", "Weekday", "Days", "Source"]
    colw = [5, 10, 9, 4, 9]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for Y in range(Y0, Y1 + 1):
        d = calnep.new_year_day(Y)
        row = [
            str(Y),
            fmt(d),
            d.strftime("%A"),
            str(calnep.year_length(Y)),
            "projected" if calnep.is_projected_year(Y) else "published",
        ]
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
