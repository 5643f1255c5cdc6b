from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Tuple


@dataclass(frozen=True)
class NepaliAnchor:
    """Nepali-keyed table row: the Gregorian date of the month's last day."""
    month_length: int
    greg_year: int
    greg_month: int
    greg_day: int

@dataclass(frozen=True)
class GregorianAnchor:
    """Gregorian-keyed table row: the Nepali date of the month's last day."""
    month_length: int
    nep_year: int
    nep_month: int
    nep_day: int


_MONTH_NAMES: Tuple[Tuple[str, str], ...] = (
    ("Baishakh", "बैशाख"),
    ("Jestha", "जेठ"),
    ("Asar", "असार"),
    ("Shrawan", "साउन"),
    ("Bhadra", "भदौ"),
    ("Ashwin", "असोज"),
    ("Kartik", "कात्तिक"),
    ("Mangsir", "मंसिर"),
    ("Poush", "पुस"),
    ("Magh", "माघ"),
    ("Falgun", "फागुन"),
    ("Chaitra", "चैत"),
)

_WEEKDAY_NAMES: Tuple[Tuple[str, str], ...] = (
    ("Monday", "सोमबार"),
    ("Tuesday", "मंगलबार"),
    ("Wednesday", "बुधबार"),
    ("Thursday", "बिहीबार"),
    ("Friday", "शुक्रबार"),
    ("Saturday", "शनिबार"),
    ("Sunday", "आइतबार"),
)


class NepaliMonth(IntEnum):
    BAISHAKH = 1
    JESTHA = 2
    ASAR = 3
    SHRAWAN = 4
    BHADRA = 5
    ASHWIN = 6
    KARTIK = 7
    MANGSIR = 8
    POUSH = 9
    MAGH = 10
    FALGUN = 11
    CHAITRA = 12

    @property
    def english(self) -> str:
        return _MONTH_NAMES[self - 1][0]

    @property
    def devanagari(self) -> str:
        return _MONTH_NAMES[self - 1][1]


class Weekday(IntEnum):
    """Same numbering as datetime.date.weekday() (Monday=0)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def english(self) -> str:
        return _WEEKDAY_NAMES[self][0]

    @property
    def devanagari(self) -> str:
        return _WEEKDAY_NAMES[self][1]


class FiscalQuarter(IntEnum):
    """Fiscal quarters, valued by their first calendar month. CURRENT means 'the quarter of this date'."""
    CURRENT = 0
    FIRST = 4
    SECOND = 7
    THIRD = 10
    FOURTH = 1


class DateFormat(Enum):
    YEAR_MONTH_DAY = "ymd"
    YEAR_DAY_MONTH = "ydm"
    MONTH_YEAR_DAY = "myd"
    MONTH_DAY_YEAR = "mdy"
    DAY_YEAR_MONTH = "dym"
    DAY_MONTH_YEAR = "dmy"


class Separator(Enum):
    FORWARD_SLASH = "/"
    BACKWARD_SLASH = "\\"
    DOT = "."
    UNDERSCORE = "_"
    DASH = "-"
    SPACE = " "
