#!/usr/bin/env python3
from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

import argparse

import calnep


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "calnep[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "calnep[diagnostics]"') from e


def day_of_year(d: date) -> int:
    return (d - date(d.year, 1, 1)).days + 1


def rolling_median(np, y, win: int = 11):
    """Centered rolling median with edge padding."""
    if win < 3:
        return y.astype(float)
    if win % 2 == 0:
        win += 1
    k = win // 2
    ypad = np.pad(y, (k, k), mode="edge")
    out = np.empty_like(y, dtype=float)
    for i in range(len(y)):
        out[i] = float(np.median(ypad[i : i + win]))
    return out


def build_series(np, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray", "np.ndarray"]:
    """BS years, day-of-year of 1 Baishakh, and a projected-row mask."""
    years = np.arange(start_year, end_year + 1, dtype=int)
    y = np.empty_like(years, dtype=float)
    projected = np.zeros_like(years, dtype=bool)
    for i, Y in enumerate(years):
        y[i] = float(day_of_year(calnep.new_year_day(int(Y))))
        projected[i] = calnep.is_projected_year(int(Y))
    return years, y, projected


def main(argv: Optional[List[str]] = None) -> int:
    lo, hi = calnep.supported_years()
    p = argparse.ArgumentParser(description="Scatter plot of the Gregorian day-of-year of 1 Baishakh.")
    p.add_argument("--from-year", type=int, default=lo)
    p.add_argument("--to-year", type=int, default=hi)
    p.add_argument("--show-trend", action="store_true")
    p.add_argument("--trend-win", type=int, default=11, help="Rolling median window (odd recommended).")
    p.add_argument("--outbase", default="new_year_scatter", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "legend.fontsize": 10,
    })

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)

    ax.set_xlabel("BS year")
    ax.set_ylabel("Day-of-year of 1 Baishakh (Jan 1 = 1)")
    ax.set_title("Nepali New Year in the Gregorian calendar")

    x, y, projected = build_series(np, args.from_year, args.to_year)
    ax.scatter(x[~projected], y[~projected], s=14, c="tab:blue", alpha=0.6, label="published")
    ax.scatter(
        x[projected], y[projected],
        s=14, facecolors="none", edgecolors="0.45", linewidths=1.0, alpha=0.6, label="projected",
    )

    if args.show_trend:
        ax.plot(x, rolling_median(np, y, win=int(args.trend_win)), color="tab:red", linewidth=1.6)

    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    outbase = args.outbase
    fig.savefig(outbase + ".png", dpi=300)
    print(f"Saved: {outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
