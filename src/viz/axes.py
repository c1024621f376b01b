"""Axis role resolution for untyped result sets."""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from viz.classifier import (
    GEOGRAPHY_KEYWORDS,
    ColumnProfile,
    KeywordFamily,
    classify_columns,
    name_matches,
)
from viz.config import VizSettings, get_settings
from viz.normalize import is_finite_number, is_time_like_column, looks_like_time_name

logger = logging.getLogger(__name__)


class ColumnRole(Enum):
    """Role a column plays in a chart."""

    X_AXIS = "x-axis"
    SERIES = "series"
    METRIC = "metric"
    UNUSED = "unused"


@dataclass(frozen=True)
class AxisResolution:
    """Roles chosen for a result set. All None when nothing could be resolved."""

    x_axis: Optional[str] = None
    series: Optional[str] = None
    metric: Optional[str] = None
    is_multi_series: bool = False

    @property
    def is_resolved(self) -> bool:
        """True when both an x-axis and a metric were found."""
        return self.x_axis is not None and self.metric is not None

    def roles(self, columns: List[str]) -> Dict[str, ColumnRole]:
        """Map every column to its role."""
        assigned = {
            self.x_axis: ColumnRole.X_AXIS,
            self.series: ColumnRole.SERIES,
            self.metric: ColumnRole.METRIC,
        }
        return {column: assigned.get(column, ColumnRole.UNUSED) for column in columns}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API responses."""
        return asdict(self)


def _pick_x_axis(profiles: List[ColumnProfile]) -> Optional[str]:
    non_numeric = [p for p in profiles if not p.is_numeric]
    for candidates in (
        [p for p in profiles if p.has(KeywordFamily.TIME)],
        [p for p in profiles if p.has(KeywordFamily.GEOGRAPHY)],
        [p for p in non_numeric if looks_like_time_name(p.name)],
        non_numeric,
    ):
        if candidates:
            return candidates[0].name
    return None


def _pick_series(profiles: List[ColumnProfile], x_axis: Optional[str]) -> Optional[str]:
    if x_axis is None:
        return None
    remaining = [p for p in profiles if not p.is_numeric and p.name != x_axis]
    for candidates in (
        [p for p in remaining if p.has(KeywordFamily.PRODUCT)],
        [p for p in remaining if p.has(KeywordFamily.GEOGRAPHY)],
        remaining,
    ):
        if candidates:
            return candidates[0].name
    return None


def _pick_metric(profiles: List[ColumnProfile], exclude: Optional[str] = None) -> Optional[str]:
    numeric = [p for p in profiles if p.is_numeric and p.name != exclude]
    ranked = [p for p in numeric if p.metric_rank is not None]
    if ranked:
        # min() keeps the first column among equal ranks.
        return min(ranked, key=lambda p: p.metric_rank).name
    if numeric:
        return numeric[0].name
    return None


def pick_metric_excluding(rows: Optional[List[Dict[str, Any]]], column: str) -> Optional[str]:
    """Pick the metric as resolve_axes would, ignoring one column.

    Month text such as "Jan 2024" reads as the number 2024, so a time x-axis
    can also be the first numeric column.
    """
    if not rows or not isinstance(rows, list) or not isinstance(rows[0], dict):
        return None
    return _pick_metric(classify_columns(rows[0]), exclude=column)


def resolve_axes(
    rows: Optional[List[Dict[str, Any]]], settings: Optional[VizSettings] = None
) -> AxisResolution:
    """Choose the x-axis, series and metric columns for a result set.

    Args:
        rows: Result records. The first record's columns are authoritative.
        settings: Optional overrides for the time-detection sampling.

    Returns:
        AxisResolution; every field is None/False for an empty result set.
    """
    if not rows or not isinstance(rows, list) or not isinstance(rows[0], dict):
        return AxisResolution()

    settings = settings or get_settings()
    sample = rows[0]
    profiles = classify_columns(sample)

    x_axis = _pick_x_axis(profiles)
    series = _pick_series(profiles, x_axis)
    metric = _pick_metric(profiles)

    x_values = [
        row.get(x_axis) for row in rows[: settings.swap_sample_rows] if isinstance(row, dict)
    ]
    x_looks_time = is_time_like_column(x_axis, x_values, settings)
    if (
        not x_looks_time
        and not name_matches(x_axis, GEOGRAPHY_KEYWORDS)
        and name_matches(series, GEOGRAPHY_KEYWORDS)
    ):
        logger.debug("Swapping x-axis %r with geographic series %r", x_axis, series)
        x_axis, series = series, x_axis

    is_multi = bool(
        x_axis
        and series
        and metric
        and x_axis != series
        and is_finite_number(sample.get(metric))
    )

    resolution = AxisResolution(
        x_axis=x_axis, series=series, metric=metric, is_multi_series=is_multi
    )
    logger.debug("Resolved axes: %s", resolution)
    return resolution
