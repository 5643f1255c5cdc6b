from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from typing import List, Optional

import calnep
from calnep.core.date import NepaliDate


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=random.randint(0, span))


def random_nepali(min_year: int, max_year: int) -> NepaliDate:
    y = random.randint(min_year, max_year)
    m = random.randint(1, 12)
    d = random.randint(1, calnep.month_length(y, m))
    return NepaliDate(y, m, d)


def roundtrip_test(
    N: int,
    start: date,
    end: date,
    seed: int,
    *,
    max_failures: int,
) -> int:
    random.seed(seed)
    failures = 0
    lo, hi = calnep.supported_years()

    for _ in range(N):
        d0 = random_date(start, end)
        nd = calnep.from_gregorian(d0)
        back = nd.english_date
        if back != d0:
            failures += 1
            print("\nFAIL (gregorian -> nepali -> gregorian)")
            print("d0:", d0)
            print("nep:", nd)
            print("back:", back)
            if failures >= max_failures:
                return failures

        n0 = random_nepali(lo, hi)
        n1 = NepaliDate.from_gregorian(n0.english_date)
        if n1 != n0:
            failures += 1
            print("\nFAIL (nepali -> gregorian -> nepali)")
            print("n0:", n0)
            print("greg:", n0.english_date)
            print("back:", n1)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    first, last = calnep.NepaliDate.min_value().english_date, calnep.NepaliDate.max_value().english_date
    p = argparse.ArgumentParser(description="Random round-trip tests: gregorian <-> nepali.")
    p.add_argument("--N", type=int, default=2000, help="Trials.")
    p.add_argument("--start", type=str, default=first.isoformat(), help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default=last.isoformat(), help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    start, end = parse_date(args.start), parse_date(args.end)
    if end < start:
        raise SystemExit("--end must be >= --start")

    failures = roundtrip_test(args.N, start, end, args.seed, max_failures=args.max_failures)
    print(f"round-trip: N={args.N} failures={failures}")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
