from __future__ import annotations

import argparse
from datetime import date
import importlib
import inspect
import logging
import sys
from typing import List, Optional


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: List[str]) -> int:
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


def cmd_to_greg(args: argparse.Namespace) -> int:
    import calnep

    d = calnep.parse(args.date) if args.smart else calnep.NepaliDate.parse(args.date)
    g = d.english_date
    print(f"{d} BS = {g.isoformat()} AD ({g.strftime('%A')})")
    return 0


def cmd_to_bs(args: argparse.Namespace) -> int:
    import calnep

    try:
        g = _parse_ymd(args.date)
    except ValueError as e:
        raise calnep.InvalidFormatError(f"Expected YYYY-MM-DD, got {args.date!r}") from e
    d = calnep.from_gregorian(g)
    print(f"{g.isoformat()} AD = {d} BS ({d.to_long_date_string(day_name=True)})")
    if args.devanagari:
        print(d.to_long_date_string(day_name=True, devanagari=True))
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    import calnep

    d = calnep.parse(" ".join(args.text))
    print(f"{d}  ({d.to_long_date_string()})  = {d.english_date.isoformat()} AD")
    return 0


def cmd_fiscal_year(args: argparse.Namespace) -> int:
    from calnep.core.range import NepaliDateRange

    fy = NepaliDateRange.for_fiscal_year(args.fiscal_year)
    print(f"Fiscal year {args.fiscal_year}/{(args.fiscal_year + 1) % 100:02d}: {fy}  ({fy.length} days)")
    for i, q in enumerate(fy.split_by_fiscal_quarter(), start=1):
        print(f"  Q{i}: {q}  ({q.start.english_date} .. {q.end.english_date})")
    return 0


def cmd_range(args: argparse.Namespace) -> int:
    import calnep
    from calnep.core.range import NepaliDateRange

    r = NepaliDateRange(calnep.parse(args.start), calnep.parse(args.end))
    print(f"{r}  ({r.length} days)")
    if args.split == "month":
        parts = r.split_by_month()
    elif args.split == "quarter":
        parts = r.split_by_fiscal_quarter()
    else:
        return 0
    for part in parts:
        print(f"  {part}  ({part.length} days)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="calnep", description="Bikram Sambat (Nepali) calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_greg = sub.add_parser("to-greg", help="BS date -> Gregorian")
    p_greg.add_argument("date", help="YYYY-MM-DD or YYYY/MM/DD (BS)")
    p_greg.add_argument("--smart", action="store_true", help="Use the free-form parser")

    p_bs = sub.add_parser("to-bs", help="Gregorian -> BS date")
    p_bs.add_argument("date", help="YYYY-MM-DD (AD)")
    p_bs.add_argument("--devanagari", action="store_true")

    p_parse = sub.add_parser("parse", help="Parse a free-form Nepali date")
    p_parse.add_argument("text", nargs="+")

    sub.add_parser("month", help="Print a BS month calendar (diagnostics)")
    sub.add_parser("new-years", help="Print 1 Baishakh table (diagnostics)")

    p_fy = sub.add_parser("fiscal-year", help="Fiscal year bounds and quarters")
    p_fy.add_argument("fiscal_year", type=int, help="BS year in which the fiscal year starts")

    p_range = sub.add_parser("range", help="Length and split of a BS date range")
    p_range.add_argument("start")
    p_range.add_argument("end")
    p_range.add_argument("--split", choices=["month", "quarter"])

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "new-years", "new-year-scatter"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from calnep.core.errors import CalnepError

    handlers = {
        "to-greg": cmd_to_greg,
        "to-bs": cmd_to_bs,
        "parse": cmd_parse,
        "fiscal-year": cmd_fiscal_year,
        "range": cmd_range,
    }

    try:
        if args.cmd in handlers:
            if rest:
                p.error(f"unrecognized arguments: {' '.join(rest)}")
            return handlers[args.cmd](args)

        if args.cmd == "month":
            return _run_module_main("calnep.diagnostics.pretty_month", rest)

        if args.cmd == "new-years":
            return _run_module_main("calnep.diagnostics.new_years_table", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "calnep.diagnostics.round_trip",
                "new-years": "calnep.diagnostics.new_years_table",
                "new-year-scatter": "calnep.diagnostics.new_year_scatter",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except CalnepError as e:
        print(f"calnep: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
