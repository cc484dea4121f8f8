"""Diagnostics package.

- pretty_month, era_table: always available, plain-text output
- moon_chart: optional (requires the diagnostics extra: numpy, matplotlib)
"""

__all__ = ["pretty_month", "era_table", "moon_chart"]
