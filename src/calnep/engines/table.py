"""
calnep.engines.table
--------------------
Static Bikram Sambat month-length data and the two anchor tables derived from it.

Data source
-----------
The package ships ``calnep/data/bs_month_lengths.csv`` with one row per BS year:

    year, baishakh, jestha, ..., chaitra, source

``source`` is ``published`` for rows copied from almanac (panchang) tables and
``projected`` for rows that repeat the published cycle to cover the remaining
supported years. Conversions inside projected years are self-consistent but are
not an authority on historical or future almanacs: real-world dates for BS
1901-1999 and 2101-2199 will be off. Set ``CALNEP_TABLE`` to a CSV of the same
shape to replace the shipped rows.

Anchor tables
-------------
Both directions are keyed by (year, month) and anchored on the month's *last*
day:

- Nepali-keyed:    (bs_year, bs_month)  -> (bs_month_length, greg y/m/d of last day)
- Gregorian-keyed: (ad_year, ad_month)  -> (ad_month_length, bs y/m/d of last day)

They are built once, in a single sweep over Julian Day Numbers, and never
mutated afterwards.
"""

from __future__ import annotations

import csv
import importlib.resources
import logging
import os
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.errors import TableError
from ..core.time import from_jdn, gregorian_month_length, to_jdn
from ..core.types import GregorianAnchor, NepaliAnchor

log = logging.getLogger(__name__)

ENV_TABLE = "CALNEP_TABLE"
DATA_FILE = "bs_month_lengths.csv"

MONTH_COLUMNS: Tuple[str, ...] = (
    "baishakh", "jestha", "asar", "shrawan", "bhadra", "ashwin",
    "kartik", "mangsir", "poush", "magh", "falgun", "chaitra",
)

# 1 Baishakh 2000 BS
EPOCH_BS_YEAR = 2000
EPOCH_AD = date(1943, 4, 14)

MIN_MONTH_LENGTH = 29
MAX_MONTH_LENGTH = 32


@dataclass(frozen=True)
class YearRow:
    year: int
    months: Tuple[int, ...]
    projected: bool = False

    @property
    def length(self) -> int:
        return sum(self.months)


def read_rows(rows: Iterable[dict]) -> Tuple[YearRow, ...]:
    """Parse csv.DictReader rows into YearRow records, validating as we go."""
    out: List[YearRow] = []
    for r in rows:
        try:
            year = int(r["year"])
            months = tuple(int(r[c]) for c in MONTH_COLUMNS)
        except (KeyError, TypeError, ValueError) as e:
            raise TableError(f"Malformed table row: {r!r}") from e
        for m, n in enumerate(months, start=1):
            if not (MIN_MONTH_LENGTH <= n <= MAX_MONTH_LENGTH):
                raise TableError(f"Month length {n} out of range for {year}/{m:02d}")
        source = (r.get("source") or "published").strip()
        out.append(YearRow(year, months, projected=(source == "projected")))

    if not out:
        raise TableError("Conversion table is empty")
    # ensure contiguous years
    for i in range(1, len(out)):
        if out[i].year != out[i - 1].year + 1:
            raise TableError(f"Conversion table is not contiguous at {out[i].year}")
    return tuple(out)


class ConversionTable:
    """
    Read-only pair of anchor tables built from per-year month lengths.

    ``epoch_ad`` is the Gregorian date of 1 Baishakh of ``epoch_year``.
    """

    def __init__(
        self,
        rows: Iterable[YearRow],
        *,
        epoch_year: int = EPOCH_BS_YEAR,
        epoch_ad: date = EPOCH_AD,
    ):
        self._rows: Dict[int, YearRow] = {r.year: r for r in rows}
        if not self._rows:
            raise TableError("Conversion table is empty")
        self.min_year = min(self._rows)
        self.max_year = max(self._rows)
        if not (self.min_year <= epoch_year <= self.max_year):
            raise TableError(f"Epoch year {epoch_year} is not covered by the table")

        self._nepali: Dict[Tuple[int, int], NepaliAnchor] = {}
        self._gregorian: Dict[Tuple[int, int], GregorianAnchor] = {}
        self._build(epoch_year, to_jdn(epoch_ad))

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    def _build(self, epoch_year: int, epoch_jdn: int) -> None:
        jdn = epoch_jdn - sum(self._rows[y].length for y in range(self.min_year, epoch_year))

        # (first_jdn, last_jdn, year, month) for every BS month, in order
        spans: List[Tuple[int, int, int, int]] = []
        for y in range(self.min_year, self.max_year + 1):
            for m, n in enumerate(self._rows[y].months, start=1):
                last = jdn + n - 1
                g = from_jdn(last)
                self._nepali[(y, m)] = NepaliAnchor(n, g.year, g.month, g.day)
                spans.append((jdn, last, y, m))
                jdn = last + 1

        first_jdn, final_jdn = spans[0][0], spans[-1][1]
        g0 = from_jdn(first_jdn)
        gy, gm = g0.year, g0.month
        i = 0
        while to_jdn(date(gy, gm, 1)) <= final_jdn:
            n = gregorian_month_length(gy, gm)
            last = to_jdn(date(gy, gm, n))
            while i < len(spans) and spans[i][1] < last:
                i += 1
            if i < len(spans):
                start, _, y, m = spans[i]
                self._gregorian[(gy, gm)] = GregorianAnchor(n, y, m, last - start + 1)
            else:
                # month runs past the table; anchor on a virtual day of the next year
                self._gregorian[(gy, gm)] = GregorianAnchor(n, self.max_year + 1, 1, last - final_jdn)
            gy, gm = (gy + 1, 1) if gm == 12 else (gy, gm + 1)

        log.debug(
            "Built conversion table %d..%d BS (%d Nepali / %d Gregorian anchors)",
            self.min_year, self.max_year, len(self._nepali), len(self._gregorian),
        )

    # ---------------------------------------------------------
    # Lookups
    # ---------------------------------------------------------

    def nepali_entry(self, year: int, month: int) -> Optional[NepaliAnchor]:
        return self._nepali.get((year, month))

    def gregorian_entry(self, year: int, month: int) -> Optional[GregorianAnchor]:
        return self._gregorian.get((year, month))

    def month_length(self, year: int, month: int) -> Optional[int]:
        e = self._nepali.get((year, month))
        return e.month_length if e is not None else None

    def year_length(self, year: int) -> Optional[int]:
        r = self._rows.get(year)
        return r.length if r is not None else None

    def is_projected(self, year: int) -> bool:
        r = self._rows.get(year)
        return bool(r and r.projected)

    def gregorian_range(self) -> Tuple[date, date]:
        """First and last Gregorian days covered by the table."""
        first = self._nepali[(self.min_year, 1)]
        last = self._nepali[(self.max_year, 12)]
        start = date(first.greg_year, first.greg_month, first.greg_day)
        start = from_jdn(to_jdn(start) - first.month_length + 1)
        return start, date(last.greg_year, last.greg_month, last.greg_day)


def read_table(path: Path) -> ConversionTable:
    with path.open("r", encoding="utf-8", newline="") as f:
        return ConversionTable(read_rows(csv.DictReader(f)))


@lru_cache(maxsize=1)
def load_table() -> ConversionTable:
    """
    Load the conversion table.

    Search order:
      1) CALNEP_TABLE environment variable (path to CSV with the same columns)
      2) packaged data (calnep/data/bs_month_lengths.csv)
    """
    p = os.environ.get(ENV_TABLE, "").strip()
    if p:
        path = Path(p).expanduser()
        if path.is_file():
            try:
                table = read_table(path)
                log.debug("Loaded conversion table override from %s", path)
                return table
            except (OSError, TableError) as e:
                log.warning("Ignoring %s=%s: %s", ENV_TABLE, path, e)
        else:
            log.warning("Ignoring %s=%s: not a file", ENV_TABLE, path)

    res = importlib.resources.files("calnep").joinpath("data").joinpath(DATA_FILE)
    with res.open("r", encoding="utf-8", newline="") as f:
        return ConversionTable(read_rows(csv.DictReader(f)))
