"""Long-to-wide reshaping for multi-series charts."""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from viz.config import VizSettings
from viz.normalize import as_text, normalize_number
from viz.ordering import distinct_values, order_axis_values

logger = logging.getLogger(__name__)


@dataclass
class PivotResult:
    """Wide rows plus the series values they are keyed by."""

    data: List[Dict[str, Any]] = field(default_factory=list)
    series: List[Any] = field(default_factory=list)


def series_field(value: Any) -> str:
    """Return the wide-row field name used for a series value."""
    return value if isinstance(value, str) else as_text(value)


def pivot_rows(
    rows: List[Dict[str, Any]],
    x_key: str,
    series_key: str,
    metric_key: str,
    settings: Optional[VizSettings] = None,
) -> PivotResult:
    """Reshape one-row-per-(x, series) records into one row per x value.

    Each wide row holds the x value under ``x_key`` and one field per series
    value seen with that x. Combinations that never occur are left out rather
    than zero-filled. Non-finite metrics become 0, and a repeated
    (x, series) pair overwrites the earlier value. A series value named like
    ``x_key`` is still listed in ``series`` but never replaces the x field.
    Non-record entries are skipped.
    """
    wide: Dict[Any, Dict[str, Any]] = {}
    seen_series: List[Any] = []
    overwritten = 0
    collisions = 0

    for row in rows:
        if not isinstance(row, dict):
            continue
        x = row.get(x_key)
        series_value = row.get(series_key)
        metric = normalize_number(row.get(metric_key))

        wide_row = wide.setdefault(x, {x_key: x})
        name = series_field(series_value)
        seen_series.append(series_value)
        if name == x_key:
            # The x field is never overwritten by a series value.
            collisions += 1
            continue
        if name in wide_row:
            overwritten += 1
        wide_row[name] = metric if math.isfinite(metric) else 0

    if overwritten:
        logger.debug("Pivot overwrote %d duplicate (x, series) pairs", overwritten)
    if collisions:
        logger.warning(
            "Pivot skipped %d values whose series name collides with x field %r",
            collisions,
            x_key,
        )

    ordered_x = order_axis_values(wide.keys(), x_key, settings)
    return PivotResult(
        data=[wide[x] for x in ordered_x],
        series=distinct_values(seen_series),
    )
