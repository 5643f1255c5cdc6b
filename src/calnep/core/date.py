"""
calnep.core.date
----------------
NepaliDate: an immutable Bikram Sambat calendar date.

Equality and ordering follow the (year, month, day) triple. The Gregorian
equivalent is derived on first use and cached on the instance; all day
arithmetic goes through it, so month and year boundaries are crossed by the
Gregorian calendar's own day counting.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from functools import cached_property
from typing import ClassVar, Optional, Tuple, Union

from ..engines.converter import ConversionEngine, default_engine
from .errors import CalnepError, InvalidDateError, InvalidFormatError, OutOfRangeError
from .text import is_ascii_number, to_devanagari_digits
from .time import local_today, shift_days
from .types import DateFormat, FiscalQuarter, NepaliMonth, Separator, Weekday

AVERAGE_MONTH_DAYS = 30.41666666666667

# separators accepted by the strict string constructor
SPLIT_RE = re.compile(r"[-/._\\ ]")

_QUARTER_OF_MONTH = {
    4: FiscalQuarter.FIRST, 5: FiscalQuarter.FIRST, 6: FiscalQuarter.FIRST,
    7: FiscalQuarter.SECOND, 8: FiscalQuarter.SECOND, 9: FiscalQuarter.SECOND,
    10: FiscalQuarter.THIRD, 11: FiscalQuarter.THIRD, 12: FiscalQuarter.THIRD,
    1: FiscalQuarter.FOURTH, 2: FiscalQuarter.FOURTH, 3: FiscalQuarter.FOURTH,
}


def _eng() -> ConversionEngine:
    return default_engine()

def round_half_away(x: float) -> int:
    """Round to nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))

def split_date(text: str) -> Tuple[int, int, int]:
    """Split 'Y?M?D' on any of - / . _ \\ or space into three integers."""
    if not text:
        raise InvalidFormatError("Provided Nepali date is empty")
    tokens = [t for t in SPLIT_RE.split(text) if t]
    if len(tokens) != 3:
        raise InvalidFormatError(f"Invalid Nepali date format: {text!r}")
    if not all(is_ascii_number(t) for t in tokens):
        raise InvalidFormatError(f"Invalid Nepali date format: {text!r}")
    y, m, d = (int(t) for t in tokens)
    return y, m, d

def adjust_parts(year: int, month: int, day: int, *, month_in_middle: bool = True) -> Tuple[int, int, int]:
    """
    Guess the intended (year, month, day) from a loosely ordered triple.

    The short-year rule prefixes the current millennium digit ('80' -> 2080).
    It is a convenience heuristic, not a calendar rule.
    """
    if len(str(day)) >= 3 or day > 32:
        year, day = day, year
    if not month_in_middle:
        month, day = day, month
    if month > 12 and day < 12:
        month, day = day, month
    if len(str(year)) <= 3:
        year = int(f"2{year:03d}")
    return year, month, day


@dataclass(frozen=True, order=True)
class NepaliDate:
    year: int
    month: int
    day: int

    MIN_YEAR: ClassVar[int] = 1901
    MAX_YEAR: ClassVar[int] = 2199

    def __post_init__(self) -> None:
        eng = _eng()
        if not (eng.min_year <= self.year <= eng.max_year):
            raise OutOfRangeError(
                f"Year {self.year} is outside the supported range {eng.min_year}..{eng.max_year} BS"
            )
        if not (1 <= self.month <= 12):
            raise InvalidDateError(f"Invalid month in {self.year}/{self.month}/{self.day}")
        end = eng.month_length(self.year, self.month)
        if not (1 <= self.day <= end):
            raise InvalidDateError(f"Invalid day in {self.year}/{self.month}/{self.day} (month has {end} days)")

    # ---------------------------------------------------------
    # Alternate constructors
    # ---------------------------------------------------------

    @classmethod
    def from_gregorian(cls, d: Union[date, datetime]) -> "NepaliDate":
        if isinstance(d, datetime):
            d = d.date()
        return cls(*_eng().gregorian_to_nepali(d.year, d.month, d.day))

    @classmethod
    def from_tuple(cls, ymd: Tuple[int, int, int]) -> "NepaliDate":
        return cls(*ymd)

    @classmethod
    def parse(cls, text: str, auto_adjust: bool = False, month_in_middle: bool = True) -> "NepaliDate":
        """
        Strict parse of three numeric parts in year/month/day order.

        With auto_adjust=True the parts may be out of order or the year may be
        abbreviated; see calnep.core.date.adjust_parts.
        """
        y, m, d = split_date(text)
        if auto_adjust:
            y, m, d = adjust_parts(y, m, d, month_in_middle=month_in_middle)
        return cls(y, m, d)

    @classmethod
    def try_parse(
        cls, text: str, auto_adjust: bool = False, month_in_middle: bool = True
    ) -> Tuple[bool, Optional["NepaliDate"]]:
        try:
            return True, cls.parse(text, auto_adjust, month_in_middle)
        except CalnepError:
            return False, None

    @classmethod
    def today(cls) -> "NepaliDate":
        return cls.from_gregorian(local_today())

    @classmethod
    def min_value(cls) -> "NepaliDate":
        return cls(_eng().min_year, 1, 1)

    @classmethod
    def max_value(cls) -> "NepaliDate":
        eng = _eng()
        return cls(eng.max_year, 12, eng.month_length(eng.max_year, 12))

    # ---------------------------------------------------------
    # Derived values
    # ---------------------------------------------------------

    @cached_property
    def english_date(self) -> date:
        return _eng().nepali_to_gregorian(self.year, self.month, self.day)

    def to_gregorian(self) -> date:
        return self.english_date

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    @property
    def day_of_week(self) -> Weekday:
        return Weekday(self.english_date.weekday())

    @property
    def day_of_year(self) -> int:
        return self.english_date.timetuple().tm_yday

    def is_leap_year(self) -> bool:
        """
        Gregorian leap rule applied to the BS year number.

        This says nothing about the length of the BS year itself (see
        `calnep.year_length`); it is kept for callers that key off the number.
        """
        y = self.year
        return y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)

    @property
    def month_end_day(self) -> int:
        return _eng().month_length(self.year, self.month)

    @property
    def month_end_date(self) -> "NepaliDate":
        return NepaliDate(self.year, self.month, self.month_end_day)

    @property
    def month_name(self) -> NepaliMonth:
        return NepaliMonth(self.month)

    @property
    def fiscal_year(self) -> int:
        """Fiscal year label: the BS year in which the fiscal year starts (month 4)."""
        return self.year if self.month >= 4 else self.year - 1

    def is_today(self) -> bool:
        return self.english_date == local_today()

    def is_yesterday(self) -> bool:
        return self.english_date == local_today() - timedelta(days=1)

    def is_tomorrow(self) -> bool:
        return self.english_date == local_today() + timedelta(days=1)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def add_days(self, days: float) -> "NepaliDate":
        try:
            target = shift_days(self.english_date, days)
        except OverflowError as e:
            raise OutOfRangeError(f"{self} + {days} days is outside the supported range") from e
        return NepaliDate.from_gregorian(target)

    def subtract_days(self, days: float) -> "NepaliDate":
        return self.add_days(-days)

    def add_months(self, months: float, away_from_month_end: bool = False) -> "NepaliDate":
        """
        Move by whole months, keeping the day where possible.

        If the target month is shorter than the current day, the day is clamped
        to the target month's last day, or (away_from_month_end=True) the excess
        rolls into the following month. Fractional months are approximated with
        an average month of 30.4167 days.
        """
        if months < 0:
            return self.subtract_months(-months, away_from_month_end)
        whole = round_half_away(months)
        if months != whole:
            return self.add_days(round_half_away(months * AVERAGE_MONTH_DAYS))
        return self._shift_months(whole, away_from_month_end)

    def subtract_months(self, months: float, away_from_month_end: bool = False) -> "NepaliDate":
        if months < 0:
            return self.add_months(-months, away_from_month_end)
        whole = round_half_away(months)
        if months != whole:
            return self.add_days(-round_half_away(months * AVERAGE_MONTH_DAYS))
        return self._shift_months(-whole, away_from_month_end)

    def _shift_months(self, n: int, away_from_month_end: bool) -> "NepaliDate":
        y, m0 = divmod(self.year * 12 + (self.month - 1) + n, 12)
        m = m0 + 1
        end = _eng().month_length(y, m)
        if self.day <= end:
            return NepaliDate(y, m, self.day)
        if not away_from_month_end:
            return NepaliDate(y, m, end)
        excess = self.day - end
        y, m = (y + 1, 1) if m == 12 else (y, m + 1)
        return NepaliDate(y, m, excess)

    def __add__(self, other):
        if isinstance(other, timedelta):
            return self.add_days(other / timedelta(days=1))
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, NepaliDate):
            return self.english_date - other.english_date
        if isinstance(other, timedelta):
            return self.add_days(-(other / timedelta(days=1)))
        return NotImplemented

    # ---------------------------------------------------------
    # Fiscal year (1 Shrawan .. last day of Asar)
    # ---------------------------------------------------------

    def fiscal_year_quarter(self) -> FiscalQuarter:
        q = _QUARTER_OF_MONTH.get(self.month)
        if q is None:
            raise InvalidDateError(f"Invalid month {self.month}")
        return q

    def fiscal_year_start_date(self, year_offset: int = 0) -> "NepaliDate":
        return NepaliDate(self.fiscal_year + year_offset, 4, 1)

    def fiscal_year_end_date(self, year_offset: int = 0) -> "NepaliDate":
        return NepaliDate(self.fiscal_year + year_offset + 1, 3, 1).month_end_date

    def fiscal_year_start_and_end_date(self, year_offset: int = 0) -> Tuple["NepaliDate", "NepaliDate"]:
        return self.fiscal_year_start_date(year_offset), self.fiscal_year_end_date(year_offset)

    def fiscal_year_quarter_start_date(
        self, quarter: FiscalQuarter = FiscalQuarter.CURRENT, year_offset: int = 0
    ) -> "NepaliDate":
        q = self._resolve_quarter(quarter)
        return NepaliDate(_quarter_year(self.fiscal_year + year_offset, q), int(q), 1)

    def fiscal_year_quarter_end_date(
        self, quarter: FiscalQuarter = FiscalQuarter.CURRENT, year_offset: int = 0
    ) -> "NepaliDate":
        q = self._resolve_quarter(quarter)
        return NepaliDate(_quarter_year(self.fiscal_year + year_offset, q), int(q) + 2, 1).month_end_date

    def fiscal_year_quarter_start_and_end_date(
        self, quarter: FiscalQuarter = FiscalQuarter.CURRENT, year_offset: int = 0
    ) -> Tuple["NepaliDate", "NepaliDate"]:
        return (
            self.fiscal_year_quarter_start_date(quarter, year_offset),
            self.fiscal_year_quarter_end_date(quarter, year_offset),
        )

    def _resolve_quarter(self, quarter: FiscalQuarter) -> FiscalQuarter:
        quarter = FiscalQuarter(quarter)
        return self.fiscal_year_quarter() if quarter is FiscalQuarter.CURRENT else quarter

    @classmethod
    def for_fiscal_year_start(cls, fiscal_year: int) -> "NepaliDate":
        return cls(fiscal_year, 4, 1)

    @classmethod
    def for_fiscal_year_end(cls, fiscal_year: int) -> "NepaliDate":
        return cls(fiscal_year + 1, 3, 1).month_end_date

    @classmethod
    def fiscal_year_bounds(cls, fiscal_year: int) -> Tuple["NepaliDate", "NepaliDate"]:
        return cls.for_fiscal_year_start(fiscal_year), cls.for_fiscal_year_end(fiscal_year)

    @classmethod
    def fiscal_quarter_bounds(cls, fiscal_year: int, month: int) -> Tuple["NepaliDate", "NepaliDate"]:
        """Bounds of the quarter containing `month` within `fiscal_year`."""
        q = _QUARTER_OF_MONTH.get(month)
        if q is None:
            raise InvalidDateError(f"Invalid month {month}")
        y = _quarter_year(fiscal_year, q)
        return cls(y, int(q), 1), cls(y, int(q) + 2, 1).month_end_date

    # ---------------------------------------------------------
    # Formatting
    # ---------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}/{self.day:02d}"

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def format(
        self,
        date_format: Union[DateFormat, str] = DateFormat.YEAR_MONTH_DAY,
        separator: Union[Separator, str] = Separator.FORWARD_SLASH,
        leading_zeros: bool = True,
        month_name: bool = False,
        devanagari: bool = False,
    ) -> str:
        fmt = _coerce(DateFormat, date_format, "date format")
        sep = _coerce(Separator, separator, "separator").value

        ys = f"{self.year:04d}" if leading_zeros else str(self.year)
        if month_name:
            ms = self.month_name.devanagari if devanagari else self.month_name.english
        else:
            ms = f"{self.month:02d}" if leading_zeros else str(self.month)
        ds = f"{self.day:02d}" if leading_zeros else str(self.day)

        parts = {"y": ys, "m": ms, "d": ds}
        out = sep.join(parts[c] for c in fmt.value)
        return to_devanagari_digits(out) if devanagari else out

    def to_unicode_string(
        self,
        date_format: Union[DateFormat, str] = DateFormat.YEAR_MONTH_DAY,
        separator: Union[Separator, str] = Separator.FORWARD_SLASH,
        leading_zeros: bool = True,
    ) -> str:
        return self.format(date_format, separator, leading_zeros, devanagari=True)

    def to_long_date_string(
        self,
        leading_zeros: bool = True,
        day_name: bool = False,
        year: bool = True,
        devanagari: bool = False,
    ) -> str:
        """'Bhadra 15, 2080' / 'Friday, Bhadra 15, 2080' (optionally in Devanagari)."""
        month = self.month_name.devanagari if devanagari else self.month_name.english
        day = f"{self.day:02d}" if leading_zeros else str(self.day)
        out = f"{month} {day}"
        if year:
            out += f", {self.year:04d}" if leading_zeros else f", {self.year}"
        if day_name:
            wd = self.day_of_week
            out = f"{wd.devanagari if devanagari else wd.english}, {out}"
        return to_devanagari_digits(out) if devanagari else out


def _quarter_year(fiscal_year: int, quarter: FiscalQuarter) -> int:
    # the fourth quarter (months 1-3) falls in the next calendar year
    return fiscal_year + 1 if quarter is FiscalQuarter.FOURTH else fiscal_year

def _coerce(enum_type, value, what: str):
    try:
        return enum_type(value)
    except ValueError as e:
        raise InvalidFormatError(f"Invalid {what}: {value!r}") from e
