# tests/test_bulk.py

from datetime import date, timedelta

import pytest

import calnep
from calnep import InvalidFormatError, NepaliDate
from calnep import bulk


def _days(start: date, n: int):
    return [start + timedelta(days=i) for i in range(n)]


def test_to_nepali_dates_sequential():
    out = calnep.to_nepali_dates([date(2023, 9, 1), date(2023, 4, 14)])
    assert out == [NepaliDate(2080, 5, 15), NepaliDate(2080, 1, 1)]


def test_parallel_preserves_order():
    greg = _days(date(2023, 1, 1), bulk.PARALLEL_THRESHOLD + 100)
    seq = bulk.to_nepali_dates(greg)
    par = bulk.to_nepali_dates(greg, parallel=True, max_workers=4)
    assert par == seq
    assert [d.english_date for d in par] == greg


def test_to_gregorian_dates_accepts_strings():
    out = calnep.to_gregorian_dates(["2080/05/15", NepaliDate(2081, 1, 1), "15 Shrawan 2080"])
    assert out == [date(2023, 9, 1), date(2024, 4, 13), date(2023, 7, 31)]


def test_invalid_element_aborts():
    with pytest.raises(InvalidFormatError):
        calnep.to_gregorian_dates(["2080/05/15", "garbage"])


def test_batch_process_streams_in_order():
    greg = _days(date(2023, 4, 14), 25)
    out = list(bulk.batch_process(iter(greg), batch_size=7))
    assert out == bulk.to_nepali_dates(greg)
    assert out[0] == NepaliDate(2080, 1, 1)


def test_batch_process_custom_converter():
    nep = [NepaliDate(2080, 5, 15), NepaliDate(2080, 5, 16)]
    out = list(bulk.batch_process(nep, batch_size=1, converter=lambda d: d.english_date))
    assert out == [date(2023, 9, 1), date(2023, 9, 2)]


def test_batch_process_is_lazy():
    def gen():
        yield date(2023, 9, 1)
        raise AssertionError("consumed too far")

    it = bulk.batch_process(gen(), batch_size=1)
    assert next(it) == NepaliDate(2080, 5, 15)


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError):
        list(bulk.batch_process([date(2023, 9, 1)], batch_size=0))
