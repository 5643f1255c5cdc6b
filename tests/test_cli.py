# tests/test_cli.py

import pytest

from calnep import cli


def run(capsys, *argv):
    rc = cli.main(list(argv))
    out, err = capsys.readouterr()
    return rc, out, err


def test_to_greg(capsys):
    rc, out, _ = run(capsys, "to-greg", "2080-05-15")
    assert rc == 0
    assert "2023-09-01" in out and "Friday" in out


def test_to_greg_smart(capsys):
    rc, out, _ = run(capsys, "to-greg", "--smart", "15 Shrawan 2080")
    assert rc == 0
    assert "2023-07-31" in out


def test_to_bs(capsys):
    rc, out, _ = run(capsys, "to-bs", "2023-09-01", "--devanagari")
    assert rc == 0
    assert "2080/05/15" in out
    assert "Friday, Bhadra 15, 2080" in out
    assert "भदौ" in out


@pytest.mark.parametrize("argv", [
    ("to-greg", "2080-13-01"),
    ("to-bs", "1800-01-01"),
    ("to-bs", "not-a-date"),
    ("parse", "not", "a", "date"),
])
def test_errors_exit_with_2(capsys, argv):
    rc, _, err = run(capsys, *argv)
    assert rc == 2
    assert err.startswith("calnep:")


def test_parse(capsys):
    rc, out, _ = run(capsys, "parse", "15", "Shrawan", "2080")
    assert rc == 0
    assert out.startswith("2080/04/15")


def test_fiscal_year(capsys):
    rc, out, _ = run(capsys, "fiscal-year", "2080")
    assert rc == 0
    assert "2080/04/01 - 2081/03/32" in out
    assert "(365 days)" in out
    assert "Q4: 2081/01/01 - 2081/03/32" in out


def test_range_split(capsys):
    rc, out, _ = run(capsys, "range", "2080/01/01", "2080/03/31", "--split", "month")
    assert rc == 0
    lines = out.strip().splitlines()
    assert lines[0] == "2080/01/01 - 2080/03/31  (94 days)"
    assert len(lines) == 4


def test_month_grid(capsys):
    rc, out, _ = run(capsys, "month", "2080", "5")
    assert rc == 0
    assert out.startswith("Bhadra 2080")
    assert "09-01" in out


def test_new_years(capsys):
    rc, out, _ = run(capsys, "new-years", "--from-year", "2080", "--to-year", "2081")
    assert rc == 0
    assert "2023-04-14" in out and "2024-04-13" in out


def test_diag_round_trip(capsys):
    rc, out, _ = run(capsys, "diag", "round-trip", "--N", "50")
    assert rc == 0
    assert "failures=0" in out
