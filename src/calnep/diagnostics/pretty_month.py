from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import calnep
from calnep.core.range import NepaliDateRange
from calnep.core.text import to_devanagari_digits


def dow_header() -> str:
    return "Su     Mo     Tu     We     Th     Fr     Sa"


def cell(top: str, bot: str, w: int = 6) -> Tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def month_grid(year: int, month: int) -> List[List[Tuple[str, str]]]:
    """Weeks (Sunday first) of BS day numbers over Gregorian MM-DD labels."""
    r = NepaliDateRange.for_month(year, month)

    weeks: List[List[Tuple[str, str]]] = []
    wk: List[Tuple[str, str]] = []
    pad = (r.start.english_date.weekday() + 1) % 7  # Sunday=0
    for _ in range(pad):
        wk.append(cell("", ""))
    for d in r:
        g = d.english_date
        wk.append(cell(f"{d.day:2d}", f"{g.month:02d}-{g.day:02d}"))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def render(year: int, month: int, *, devanagari: bool = False) -> str:
    r = NepaliDateRange.for_month(year, month)
    name = r.start.month_name.devanagari if devanagari else r.start.month_name.english
    title = f"{name} {year}   ({r.start.english_date} .. {r.end.english_date})"
    lines = [title, dow_header(), "-" * len(dow_header())]
    for wk in month_grid(year, month):
        lines.append(" ".join(c[0] for c in wk))
        lines.append(" ".join(c[1] for c in wk))
    out = "\n".join(lines)
    return to_devanagari_digits(out) if devanagari else out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Print a BS month calendar with Gregorian labels.")
    p.add_argument("year", type=int, nargs="?", help="BS year (default: current)")
    p.add_argument("month", type=int, nargs="?", help="BS month 1-12 (default: current)")
    p.add_argument("--devanagari", action="store_true", help="Use Devanagari digits and month name.")
    args = p.parse_args(argv)

    if args.year is None or args.month is None:
        t = calnep.today()
        year, month = t.year, t.month
    else:
        year, month = args.year, args.month

    print(render(year, month, devanagari=args.devanagari))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
