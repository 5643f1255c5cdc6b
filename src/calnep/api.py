from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from .core.date import NepaliDate
from .core.errors import OutOfRangeError
from .core.range import NepaliDateRange
from .engines.converter import ConversionEngine, default_engine, set_default_table
from .engines.table import ConversionTable
from . import parser as _parser


def set_table(table: ConversionTable) -> None:
    set_default_table(table)

def _eng() -> ConversionEngine:
    return default_engine()

def supported_years() -> Tuple[int, int]:
    eng = _eng()
    return eng.min_year, eng.max_year

def to_gregorian(year: int, month: int, day: int) -> date:
    """BS (year, month, day) -> Gregorian date."""
    return NepaliDate(year, month, day).english_date

def from_gregorian(d: Union[date, datetime]) -> NepaliDate:
    return NepaliDate.from_gregorian(d)

def month_length(year: int, month: int) -> int:
    return _eng().month_length(year, month)

def year_length(year: int) -> int:
    n = _eng().table.year_length(year)
    if n is None:
        raise OutOfRangeError(f"No table entry for {year} BS")
    return n

def is_projected_year(year: int) -> bool:
    """
    True when the year's month lengths repeat the published cycle rather than an almanac.

    Conversions for such years are self-consistent but not real-world accurate.
    """
    return _eng().table.is_projected(year)

def parse(text: str) -> NepaliDate:
    return _parser.parse(text)

def try_parse(text: str) -> Tuple[bool, Optional[NepaliDate]]:
    return _parser.try_parse(text)

def today() -> NepaliDate:
    return NepaliDate.today()

# ============================================================
# Helpers for diagnostics
# ============================================================

def new_year_day(year: int) -> date:
    """Gregorian date of 1 Baishakh of `year`."""
    return NepaliDate(year, 1, 1).english_date

def month_bounds(year: int, month: int) -> Dict[str, Any]:
    r = NepaliDateRange.for_month(year, month)
    return {
        "year": year,
        "month": month,
        "length": r.length,
        "first": r.start,
        "last": r.end,
        "first_date": r.start.english_date,
        "last_date": r.end.english_date,
    }

def months_in_year(year: int) -> List[int]:
    """Month lengths of a BS year."""
    return [month_length(year, m) for m in range(1, 13)]
