"""
calnep.engines.converter
------------------------
Bidirectional BS <-> AD conversion: one anchor lookup plus offset arithmetic.

Forward (BS -> AD) is a pure day offset from the Gregorian date of the BS
month's last day. Backward (AD -> BS) starts from the BS date of the Gregorian
month's last day and walks back through BS month lengths, since the target BS
month may be shorter or longer than the anchor month.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Tuple

from ..core.errors import OutOfRangeError
from .table import ConversionTable

YMD = Tuple[int, int, int]


class ConversionEngine:
    def __init__(self, table: ConversionTable):
        self.table = table

    @property
    def min_year(self) -> int:
        return self.table.min_year

    @property
    def max_year(self) -> int:
        return self.table.max_year

    def month_length(self, year: int, month: int) -> int:
        n = self.table.month_length(year, month)
        if n is None:
            raise OutOfRangeError(f"No table entry for {year}/{month:02d} BS")
        return n

    def nepali_to_gregorian(self, year: int, month: int, day: int) -> date:
        e = self.table.nepali_entry(year, month)
        if e is None:
            raise OutOfRangeError(f"No table entry for {year}/{month:02d} BS")
        # delta <= 0 for any valid day
        return date(e.greg_year, e.greg_month, e.greg_day) + timedelta(days=day - e.month_length)

    def gregorian_to_nepali(self, year: int, month: int, day: int) -> YMD:
        e = self.table.gregorian_entry(year, month)
        if e is None:
            raise OutOfRangeError(f"{year:04d}-{month:02d} AD is outside the supported range")
        delta = e.month_length - day
        y, m, d = self.subtract_nepali_days(e.nep_year, e.nep_month, e.nep_day, delta)
        if y > self.max_year:
            raise OutOfRangeError(f"{year:04d}-{month:02d}-{day:02d} AD is outside the supported range")
        return y, m, d

    def subtract_nepali_days(self, year: int, month: int, day: int, n: int) -> YMD:
        """Step back n days from a BS date, re-querying month lengths at each month boundary."""
        day -= n
        while day <= 0:
            month -= 1
            if month == 0:
                year -= 1
                month = 12
            day += self.month_length(year, month)
        return year, month, day

    def convert(self, d: date) -> YMD:
        return self.gregorian_to_nepali(d.year, d.month, d.day)


_default: Optional[ConversionEngine] = None

def set_default_table(table: ConversionTable) -> None:
    global _default
    _default = ConversionEngine(table)

def default_engine() -> ConversionEngine:
    if _default is None:
        raise RuntimeError("Conversion table not initialized")
    return _default
