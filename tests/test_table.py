# tests/test_table.py

import csv
import logging
from datetime import date

import pytest

import calnep
from calnep.core.errors import TableError
from calnep.core.types import GregorianAnchor, NepaliAnchor
from calnep.engines import table as tbl
from calnep.engines.table import ConversionTable, YearRow, load_table, read_rows

Y2000 = (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31)
Y2001 = (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30)


def _row(year, months, source="published"):
    r = {"year": str(year), "source": source}
    r.update({c: str(n) for c, n in zip(tbl.MONTH_COLUMNS, months)})
    return r


@pytest.fixture
def small_table():
    return ConversionTable([YearRow(2000, Y2000), YearRow(2001, Y2001)])


@pytest.fixture
def fresh_load():
    load_table.cache_clear()
    yield load_table
    load_table.cache_clear()


def test_read_rows_parses_and_flags_projection():
    rows = read_rows([_row(2000, Y2000), _row(2001, Y2001, "projected")])
    assert [r.year for r in rows] == [2000, 2001]
    assert rows[0].months == Y2000
    assert not rows[0].projected and rows[1].projected
    assert rows[0].length == 365


@pytest.mark.parametrize("rows", [
    [],
    [_row(2000, Y2000), _row(2002, Y2001)],
    [_row(2000, (28,) + Y2000[1:])],
    [_row(2000, (33,) + Y2000[1:])],
    [{"year": "2000", "baishakh": "x"}],
])
def test_read_rows_rejects_bad_data(rows):
    with pytest.raises(TableError):
        read_rows(rows)


def test_nepali_anchor_is_last_day_of_month(small_table):
    # 1 Baishakh 2000 = 1943-04-14, Baishakh 2000 has 30 days
    assert small_table.nepali_entry(2000, 1) == NepaliAnchor(30, 1943, 5, 13)
    assert small_table.nepali_entry(2002, 1) is None


def test_gregorian_anchor_for_partial_first_month(small_table):
    # April 1943 is only partly covered; its last day is 17 Baishakh 2000
    assert small_table.gregorian_entry(1943, 4) == GregorianAnchor(30, 2000, 1, 17)
    assert small_table.gregorian_entry(1943, 3) is None


def test_gregorian_range_and_lengths(small_table):
    first, last = small_table.gregorian_range()
    assert first == date(1943, 4, 14)
    assert (last - first).days + 1 == sum(Y2000) + sum(Y2001)
    assert small_table.year_length(2001) == sum(Y2001)
    assert small_table.year_length(1999) is None
    assert small_table.month_length(2000, 2) == 32


def test_epoch_must_be_covered():
    with pytest.raises(TableError):
        ConversionTable([YearRow(2001, Y2001)])


def test_packaged_table_bounds():
    t = load_table()
    assert (t.min_year, t.max_year) == (1901, 2199)
    assert not t.is_projected(2080)
    assert t.is_projected(1950)
    assert t.is_projected(2150)


@pytest.mark.parametrize("year, projected", [
    (1901, True), (1999, True), (2000, False), (2100, False), (2101, True), (2199, True),
])
def test_projected_years_match_documented_span(year, projected):
    assert calnep.is_projected_year(year) is projected
    assert "1901-1999" in calnep.__doc__ and "2101-2199" in calnep.__doc__


def test_env_override(tmp_path, monkeypatch, fresh_load):
    path = tmp_path / "table.csv"
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=["year", *tbl.MONTH_COLUMNS, "source"])
        w.writeheader()
        w.writerow(_row(2000, Y2000))
        w.writerow(_row(2001, Y2001))
    monkeypatch.setenv(tbl.ENV_TABLE, str(path))

    t = fresh_load()
    assert (t.min_year, t.max_year) == (2000, 2001)


def test_bad_env_override_falls_back(tmp_path, monkeypatch, fresh_load, caplog):
    monkeypatch.setenv(tbl.ENV_TABLE, str(tmp_path / "missing.csv"))
    with caplog.at_level(logging.WARNING, logger="calnep.engines.table"):
        t = fresh_load()
    assert t.min_year == 1901
    assert "Ignoring" in caplog.text
