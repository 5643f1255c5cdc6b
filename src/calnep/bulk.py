"""
calnep.bulk
-----------
Order-preserving conversion of many dates at once.

Each element is converted independently; the first invalid element aborts the
whole call with that element's error. Large inputs may be spread over a thread
pool, which is safe because the conversion tables are read-only once loaded.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Callable, Iterable, Iterator, List, Optional, TypeVar, Union

from .core.date import NepaliDate
from .parser import parse

T = TypeVar("T")
R = TypeVar("R")

# inputs larger than this go through the thread pool when parallel=True
PARALLEL_THRESHOLD = 500
DEFAULT_BATCH_SIZE = 1000


def _to_nepali(d: Union[date, datetime]) -> NepaliDate:
    return NepaliDate.from_gregorian(d)

def _to_gregorian(d: Union[NepaliDate, str]) -> date:
    if isinstance(d, str):
        d = parse(d)
    return d.english_date


def map_dates(
    fn: Callable[[T], R],
    items: Iterable[T],
    *,
    parallel: bool = False,
    max_workers: Optional[int] = None,
    threshold: int = PARALLEL_THRESHOLD,
) -> List[R]:
    seq = list(items)
    if parallel and len(seq) > threshold:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(fn, seq))
    return [fn(x) for x in seq]

def to_nepali_dates(
    gregorian_dates: Iterable[Union[date, datetime]],
    parallel: bool = False,
    max_workers: Optional[int] = None,
) -> List[NepaliDate]:
    return map_dates(_to_nepali, gregorian_dates, parallel=parallel, max_workers=max_workers)

def to_gregorian_dates(
    nepali_dates: Iterable[Union[NepaliDate, str]],
    parallel: bool = False,
    max_workers: Optional[int] = None,
) -> List[date]:
    """Strings are run through the smart parser first."""
    return map_dates(_to_gregorian, nepali_dates, parallel=parallel, max_workers=max_workers)

def batch_process(
    items: Iterable[T],
    batch_size: int = DEFAULT_BATCH_SIZE,
    converter: Callable[[T], R] = _to_nepali,
    max_workers: Optional[int] = None,
) -> Iterator[R]:
    """
    Stream `items` through `converter` one batch at a time.

    At most one batch is held in memory; results come out in input order.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    batch: List[T] = []
    for x in items:
        batch.append(x)
        if len(batch) >= batch_size:
            yield from map_dates(converter, batch, parallel=True, max_workers=max_workers)
            batch = []
    if batch:
        yield from map_dates(converter, batch, parallel=True, max_workers=max_workers)
