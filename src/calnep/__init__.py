"""calnep public API.

Bikram Sambat (Nepali) dates: conversion to and from Gregorian, date arithmetic,
fiscal-year helpers, date ranges, free-form parsing and bulk conversion.
Most users only need what is re-exported here.

Accuracy
--------
Only BS 2000-2100 come from published almanac tables. Years 1901-1999 and
2101-2199 are projected by repeating that 101-year cycle: they convert
consistently in both directions, but their Gregorian dates are NOT the real
historical or future ones. Check with ``is_projected_year(y)``, and point the
``CALNEP_TABLE`` environment variable at a CSV with better rows if you need them.
"""

# Load the conversion table on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    to_gregorian,
    from_gregorian,
    month_length,
    year_length,
    months_in_year,
    is_projected_year,
    supported_years,
    new_year_day,
    month_bounds,
    parse,
    try_parse,
    today,
    set_table,
)
from .bulk import batch_process, to_gregorian_dates, to_nepali_dates
from .core.date import NepaliDate
from .core.errors import CalnepError, InvalidDateError, InvalidFormatError, OutOfRangeError, TableError
from .core.range import NepaliDateRange
from .core.types import DateFormat, FiscalQuarter, NepaliMonth, Separator, Weekday

__all__ = [
    "to_gregorian",
    "from_gregorian",
    "month_length",
    "year_length",
    "months_in_year",
    "is_projected_year",
    "supported_years",
    "new_year_day",
    "month_bounds",
    "parse",
    "try_parse",
    "today",
    "set_table",
    "batch_process",
    "to_gregorian_dates",
    "to_nepali_dates",
    "NepaliDate",
    "NepaliDateRange",
    "CalnepError",
    "InvalidDateError",
    "InvalidFormatError",
    "OutOfRangeError",
    "TableError",
    "DateFormat",
    "FiscalQuarter",
    "NepaliMonth",
    "Separator",
    "Weekday",
]
