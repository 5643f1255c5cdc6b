"""
calnep.core.range
-----------------
NepaliDateRange: an inclusive [start, end] interval of NepaliDate values.

A range with start > end is the empty range (never an error). Iteration is lazy
and steps one day at a time, so multi-year ranges cost one NepaliDate per day.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Union

from .date import NepaliDate
from .time import local_today
from .types import DateFormat, Separator, Weekday

# month that closes the fiscal quarter containing a given month
_QUARTER_END_MONTH = {1: 3, 2: 3, 3: 3, 4: 6, 5: 6, 6: 6, 7: 9, 8: 9, 9: 9, 10: 12, 11: 12, 12: 12}


def _next_month_start(year: int, month: int) -> NepaliDate:
    return NepaliDate(year + 1, 1, 1) if month == 12 else NepaliDate(year, month + 1, 1)


@dataclass(frozen=True, eq=False)
class NepaliDateRange:
    start: NepaliDate
    end: NepaliDate

    # ---------------------------------------------------------
    # Factories
    # ---------------------------------------------------------

    @classmethod
    def single_day(cls, d: NepaliDate) -> "NepaliDateRange":
        return cls(d, d)

    @classmethod
    def from_day_count(cls, start: NepaliDate, days: int) -> "NepaliDateRange":
        if days < 1:
            raise ValueError("days must be at least 1")
        return cls(start, start.add_days(days - 1))

    @classmethod
    def for_month(cls, year: int, month: int) -> "NepaliDateRange":
        first = NepaliDate(year, month, 1)
        return cls(first, first.month_end_date)

    @classmethod
    def for_fiscal_year(cls, fiscal_year: int) -> "NepaliDateRange":
        return cls(*NepaliDate.fiscal_year_bounds(fiscal_year))

    @classmethod
    def for_calendar_year(cls, year: int) -> "NepaliDateRange":
        return cls(NepaliDate(year, 1, 1), NepaliDate(year, 12, 1).month_end_date)

    @classmethod
    def current_month(cls) -> "NepaliDateRange":
        today = NepaliDate.from_gregorian(local_today())
        return cls.for_month(today.year, today.month)

    @classmethod
    def current_fiscal_year(cls) -> "NepaliDateRange":
        return cls.for_fiscal_year(NepaliDate.from_gregorian(local_today()).fiscal_year)

    @classmethod
    def current_calendar_year(cls) -> "NepaliDateRange":
        return cls.for_calendar_year(NepaliDate.from_gregorian(local_today()).year)

    # ---------------------------------------------------------
    # Size
    # ---------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    @property
    def length(self) -> int:
        if self.is_empty:
            return 0
        return (self.end - self.start).days + 1

    def __len__(self) -> int:
        return self.length

    def __bool__(self) -> bool:
        return not self.is_empty

    # ---------------------------------------------------------
    # Predicates
    # ---------------------------------------------------------

    def contains(self, item: Union[NepaliDate, "NepaliDateRange"]) -> bool:
        if self.is_empty:
            return False
        if isinstance(item, NepaliDateRange):
            if item.is_empty:
                return True
            return item.start >= self.start and item.end <= self.end
        return self.start <= item <= self.end

    def __contains__(self, item) -> bool:
        if not isinstance(item, (NepaliDate, NepaliDateRange)):
            return False
        return self.contains(item)

    def overlaps(self, other: "NepaliDateRange") -> bool:
        if self.is_empty or other.is_empty:
            return False
        return self.start <= other.end and self.end >= other.start

    def is_adjacent_to(self, other: "NepaliDateRange") -> bool:
        if self.is_empty or other.is_empty:
            return False
        return (
            self.end.english_date.toordinal() + 1 == other.start.english_date.toordinal()
            or other.end.english_date.toordinal() + 1 == self.start.english_date.toordinal()
        )

    # ---------------------------------------------------------
    # Set algebra
    # ---------------------------------------------------------

    def _empty(self) -> "NepaliDateRange":
        # canonical empty value: end one day before start, built without stepping
        # below the table's first day
        if self.start != NepaliDate.min_value():
            return NepaliDateRange(self.start, self.start.add_days(-1))
        return NepaliDateRange(self.start.add_days(1), self.start)

    def intersect(self, other: "NepaliDateRange") -> "NepaliDateRange":
        if not self.overlaps(other):
            return self._empty()
        return NepaliDateRange(max(self.start, other.start), min(self.end, other.end))

    def union(self, other: "NepaliDateRange") -> "NepaliDateRange":
        """
        Smallest range covering both operands.

        Disjoint operands yield a range that also covers the gap between them.
        """
        if self.is_empty:
            return other
        if other.is_empty:
            return self
        return NepaliDateRange(min(self.start, other.start), max(self.end, other.end))

    def except_(self, other: "NepaliDateRange") -> List["NepaliDateRange"]:
        """Parts of this range not covered by `other` (zero, one or two ranges)."""
        if self.is_empty or not self.overlaps(other):
            return [self]
        if other.contains(self):
            return []
        out: List[NepaliDateRange] = []
        if self.start < other.start:
            out.append(NepaliDateRange(self.start, other.start.add_days(-1)))
        if self.end > other.end:
            out.append(NepaliDateRange(other.end.add_days(1), self.end))
        return out

    __and__ = intersect
    __or__ = union
    __sub__ = except_

    # ---------------------------------------------------------
    # Splitting
    # ---------------------------------------------------------

    def split_by_month(self) -> List["NepaliDateRange"]:
        out: List[NepaliDateRange] = []
        if self.is_empty:
            return out
        cur = self.start
        while cur <= self.end:
            stop = min(cur.month_end_date, self.end)
            out.append(NepaliDateRange(cur, stop))
            if stop == self.end:
                break
            cur = _next_month_start(cur.year, cur.month)
        return out

    def split_by_fiscal_quarter(self) -> List["NepaliDateRange"]:
        out: List[NepaliDateRange] = []
        if self.is_empty:
            return out
        cur = self.start
        while cur <= self.end:
            last_month = _QUARTER_END_MONTH[cur.month]
            stop = min(NepaliDate(cur.year, last_month, 1).month_end_date, self.end)
            out.append(NepaliDateRange(cur, stop))
            if stop == self.end:
                break
            cur = _next_month_start(cur.year, last_month)
        return out

    # ---------------------------------------------------------
    # Iteration
    # ---------------------------------------------------------

    def __iter__(self) -> Iterator[NepaliDate]:
        return self.dates_with_interval(1)

    def dates_with_interval(self, interval: int) -> Iterator[NepaliDate]:
        if interval < 1:
            raise ValueError("interval must be at least 1")
        return self._walk(interval)

    def _walk(self, step: int) -> Iterator[NepaliDate]:
        if self.is_empty:
            return
        cur = self.start
        while True:
            yield cur
            # never step past end; the next date may lie outside the table
            if (self.end - cur).days < step:
                return
            cur = cur.add_days(step)

    def working_days(self, exclude_sunday: bool = False) -> Iterator[NepaliDate]:
        """Every day except Saturday (and Sunday, if asked)."""
        for d in self:
            wd = d.day_of_week
            if wd is Weekday.SATURDAY or (exclude_sunday and wd is Weekday.SUNDAY):
                continue
            yield d

    def weekend_days(self, include_sunday: bool = True) -> Iterator[NepaliDate]:
        for d in self:
            wd = d.day_of_week
            if wd is Weekday.SATURDAY or (include_sunday and wd is Weekday.SUNDAY):
                yield d

    # ---------------------------------------------------------
    # Equality / display
    # ---------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, NepaliDateRange):
            return NotImplemented
        if self.is_empty and other.is_empty:
            return True
        return self.start == other.start and self.end == other.end

    def __hash__(self) -> int:
        if self.is_empty:
            return hash(())
        return hash((self.start, self.end))

    def __str__(self) -> str:
        if self.is_empty:
            return "Empty Range"
        return f"{self.start} - {self.end}"

    def format(
        self,
        date_format: Union[DateFormat, str] = DateFormat.YEAR_MONTH_DAY,
        separator: Union[Separator, str] = Separator.FORWARD_SLASH,
    ) -> str:
        if self.is_empty:
            return "Empty Range"
        return f"{self.start.format(date_format, separator)} - {self.end.format(date_format, separator)}"
