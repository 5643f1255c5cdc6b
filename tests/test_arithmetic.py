# tests/test_arithmetic.py

import random
from datetime import timedelta

import pytest

from calnep import NepaliDate, OutOfRangeError


@pytest.mark.parametrize("start, days, expected", [
    ((2080, 1, 31), 1, (2080, 2, 1)),
    ((2080, 12, 30), 1, (2081, 1, 1)),
    ((2081, 1, 1), -1, (2080, 12, 30)),
    ((2080, 5, 15), 0, (2080, 5, 15)),
    ((2080, 1, 1), 365, (2081, 1, 1)),
    ((2080, 5, 15), 1.7, (2080, 5, 16)),
])
def test_add_days(start, days, expected):
    assert NepaliDate(*start).add_days(days) == NepaliDate(*expected)


def test_subtract_days_and_operators():
    d = NepaliDate(2080, 5, 15)
    assert d.subtract_days(15) == NepaliDate(2080, 4, 32)
    assert d + timedelta(days=1) == NepaliDate(2080, 5, 16)
    assert timedelta(days=1) + d == NepaliDate(2080, 5, 16)
    assert d - timedelta(days=15) == NepaliDate(2080, 4, 32)
    assert NepaliDate(2081, 1, 1) - NepaliDate(2080, 1, 1) == timedelta(days=365)


def test_add_days_is_strictly_increasing():
    random.seed(3)
    for _ in range(20):
        d = NepaliDate(random.randint(1905, 2195), random.randint(1, 12), 1)
        for _ in range(40):
            nxt = d.add_days(1)
            assert nxt > d
            assert (nxt - d).days == 1
            d = nxt


def test_add_days_past_bounds():
    with pytest.raises(OutOfRangeError):
        NepaliDate.max_value().add_days(1)
    with pytest.raises(OutOfRangeError):
        NepaliDate.min_value().add_days(-1)


@pytest.mark.parametrize("shift", [
    lambda: NepaliDate.max_value().add_months(1),
    lambda: NepaliDate.min_value().subtract_months(1),
    lambda: NepaliDate.min_value().add_months(-1),
    lambda: NepaliDate(2199, 12, 15).add_months(1, away_from_month_end=True),
    # Chaitra 2199 has 31 days, so day 32 rolls into 2200/01/01
    lambda: NepaliDate(2199, 3, 32).add_months(9, away_from_month_end=True),
])
def test_add_months_past_bounds(shift):
    with pytest.raises(OutOfRangeError):
        shift()


@pytest.mark.parametrize("start, months, away, expected", [
    ((2080, 5, 31), 1, False, (2080, 6, 30)),
    ((2080, 5, 31), 1, True, (2080, 7, 1)),
    ((2080, 2, 32), 1, False, (2080, 3, 31)),
    ((2080, 2, 32), 1, True, (2080, 4, 1)),
    ((2080, 5, 15), 12, False, (2081, 5, 15)),
    ((2080, 12, 15), 1, False, (2081, 1, 15)),
    ((2080, 3, 10), -5, False, (2079, 10, 10)),
    ((2080, 5, 15), 0, False, (2080, 5, 15)),
])
def test_add_months(start, months, away, expected):
    assert NepaliDate(*start).add_months(months, away_from_month_end=away) == NepaliDate(*expected)


def test_subtract_months():
    assert NepaliDate(2080, 3, 10).subtract_months(5) == NepaliDate(2079, 10, 10)
    assert NepaliDate(2080, 1, 15).subtract_months(-1) == NepaliDate(2080, 2, 15)


def test_fractional_months_use_average_length():
    d = NepaliDate(2080, 5, 15)
    # 0.5 * 30.4167 = 15.2 -> 15 days
    assert d.add_months(0.5) == d.add_days(15)
    assert d.subtract_months(0.5) == d.add_days(-15)
    # 1.5 * 30.4167 = 45.6 -> 46 days
    assert d.add_months(1.5) == d.add_days(46)


def test_clamp_only_matches_when_day_fits():
    month_end = NepaliDate(2080, 5, 31)
    mid = NepaliDate(2080, 5, 30)
    # Ashwin 2080 has 30 days: both land on 30
    assert month_end.add_months(1) == mid.add_months(1) == NepaliDate(2080, 6, 30)
    # a day that fits is kept as is
    assert NepaliDate(2080, 5, 15).add_months(1).day == 15
