"""Tabular result interpretation for chat query answers.

Turns the schema-less rows returned by a generated SQL query into a
chart-ready structure.

Design Notes:
-------------
Pipeline:
  - Classify columns of the first row (numeric flag + keyword families).
  - Resolve one x-axis, at most one series column and one metric.
  - With a series column, pivot long rows into one wide row per x value.
  - Order the x domain chronologically when time-like, else lexically.

Limitations:
  - Only the first row is sampled for numeric detection; ragged rows are
    read with missing keys as None.
  - Duplicate (x, series) pairs keep the last value seen.
  - Time parsing covers month/year granularity only.
"""

from viz.axes import AxisResolution, ColumnRole, resolve_axes
from viz.normalize import (
    format_cell,
    format_number,
    is_time_like_column,
    month_index,
    normalize_number,
)
from viz.ordering import order_axis_values, sort_rows_by_axis
from viz.pivot import PivotResult, pivot_rows
from viz.schema import ChartStatus, build_chart_schema

__all__ = [
    "AxisResolution",
    "ChartStatus",
    "ColumnRole",
    "PivotResult",
    "build_chart_schema",
    "format_cell",
    "format_number",
    "is_time_like_column",
    "month_index",
    "normalize_number",
    "order_axis_values",
    "pivot_rows",
    "resolve_axes",
    "sort_rows_by_axis",
]
