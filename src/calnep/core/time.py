from __future__ import annotations
from datetime import date, datetime, time, timedelta


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)

def gregorian_month_length(year: int, month: int) -> int:
    """Days in a Gregorian month, via the JDN of the following month's first day."""
    ny, nm = (year + 1, 1) if month == 12 else (year, month + 1)
    return to_jdn(date(ny, nm, 1)) - to_jdn(date(year, month, 1))

def shift_days(d: date, days: float) -> date:
    """
    Add a (possibly fractional) number of days to a civil date.

    The date is taken at local midnight; any sub-day remainder is dropped
    when the result is truncated back to a date.
    """
    return (datetime.combine(d, time()) + timedelta(days=days)).date()

def local_today() -> date:
    """Best-effort current civil date from the local clock."""
    return datetime.now().date()
