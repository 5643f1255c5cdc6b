"""Diagnostics package.

- round_trip, new_years_table, pretty_month: plain-text checks, no extra dependencies
- new_year_scatter: needs the diagnostics extras (numpy, matplotlib)
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "new_year_scatter"]
