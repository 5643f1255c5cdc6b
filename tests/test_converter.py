# tests/test_converter.py

import random
from datetime import date, timedelta

import pytest

import calnep
from calnep import NepaliDate, OutOfRangeError
from calnep.engines.converter import default_engine


@pytest.mark.parametrize("ymd, greg", [
    ((2000, 1, 1), date(1943, 4, 14)),
    ((2080, 1, 1), date(2023, 4, 14)),
    ((2081, 1, 1), date(2024, 4, 13)),
    ((2080, 5, 15), date(2023, 9, 1)),
    ((2080, 4, 1), date(2023, 7, 17)),
    ((2081, 3, 32), date(2024, 7, 15)),
])
def test_known_dates(ymd, greg):
    assert calnep.to_gregorian(*ymd) == greg
    assert calnep.from_gregorian(greg).as_tuple() == ymd


def test_random_round_trip_nepali():
    random.seed(42)
    lo, hi = calnep.supported_years()
    for _ in range(3000):
        y = random.randint(lo, hi)
        m = random.randint(1, 12)
        d = random.randint(1, calnep.month_length(y, m))
        g = calnep.to_gregorian(y, m, d)
        assert calnep.from_gregorian(g).as_tuple() == (y, m, d)


def test_random_round_trip_gregorian():
    random.seed(7)
    first = NepaliDate.min_value().english_date
    last = NepaliDate.max_value().english_date
    span = (last - first).days
    for _ in range(3000):
        g = first + timedelta(days=random.randint(0, span))
        assert calnep.from_gregorian(g).english_date == g


def test_every_day_of_a_year_is_consecutive():
    prev = None
    for m in range(1, 13):
        for d in range(1, calnep.month_length(2080, m) + 1):
            g = calnep.to_gregorian(2080, m, d)
            if prev is not None:
                assert g - prev == timedelta(days=1)
            prev = g
    assert prev == date(2024, 4, 12)


def test_month_and_year_lengths():
    assert calnep.months_in_year(2080) == [31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30]
    assert calnep.year_length(2080) == 365
    assert calnep.year_length(2081) == 366
    with pytest.raises(OutOfRangeError):
        calnep.month_length(2200, 1)
    with pytest.raises(OutOfRangeError):
        calnep.year_length(1900)


def test_out_of_range_both_directions():
    eng = default_engine()
    with pytest.raises(OutOfRangeError):
        eng.nepali_to_gregorian(1900, 12, 1)
    with pytest.raises(OutOfRangeError):
        eng.gregorian_to_nepali(1800, 1, 1)
    with pytest.raises(OutOfRangeError):
        calnep.from_gregorian(NepaliDate.max_value().english_date + timedelta(days=1))
    with pytest.raises(OutOfRangeError):
        calnep.from_gregorian(NepaliDate.min_value().english_date - timedelta(days=1))


def test_subtract_nepali_days_crosses_year():
    eng = default_engine()
    assert eng.subtract_nepali_days(2081, 1, 1, 1) == (2080, 12, 30)
    assert eng.subtract_nepali_days(2080, 5, 15, 14) == (2080, 5, 1)
    assert eng.subtract_nepali_days(2080, 5, 15, 15) == (2080, 4, 32)


def test_new_year_day():
    assert calnep.new_year_day(2080) == date(2023, 4, 14)


def test_month_bounds():
    b = calnep.month_bounds(2080, 5)
    assert b["length"] == 31
    assert b["first"] == NepaliDate(2080, 5, 1)
    assert (b["first_date"], b["last_date"]) == (date(2023, 8, 18), date(2023, 9, 17))
    assert calnep.supported_years() == (1901, 2199)
