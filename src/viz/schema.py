import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from viz.axes import AxisResolution, pick_metric_excluding, resolve_axes
from viz.config import SUPPORTED_CHART_TYPES, VizSettings, get_settings
from viz.normalize import is_time_like_column
from viz.ordering import sort_rows_by_axis
from viz.pivot import pivot_rows, series_field

logger = logging.getLogger(__name__)

# Header labels the chat UI shows for well-known sales columns.
DISPLAY_LABELS = {
    "name": "Product",
    "revenue": "Revenue (RM)",
    "total_sales": "Quantity Sold",
    "branch_name": "Branch",
    "region": "Region",
}


class ChartStatus(str, Enum):
    """Outcome of building a chart payload."""

    EMPTY = "empty"
    UNRESOLVED = "unresolved"
    SINGLE_SERIES = "single_series"
    MULTI_SERIES = "multi_series"


class AxisFormat(str, Enum):
    """Tick formatting hint for the renderer."""

    TIME = "time"
    CATEGORY = "category"
    NUMBER = "number"


@dataclass
class Series:
    """One visual series: a display name and the data field it reads."""

    name: str
    field: str


@dataclass
class AxisSpec:
    """Axis configuration for a chart."""

    field: Optional[str] = None
    label: Optional[str] = None
    format: Optional[str] = None


@dataclass
class ChartSchema:
    """Chart schema payload for the UI renderer."""

    status: str
    chartType: Optional[str] = None
    isMultiSeries: bool = False
    data: List[Dict[str, Any]] = field(default_factory=list)
    series: List[Series] = field(default_factory=list)
    xAxis: Optional[AxisSpec] = None
    yAxis: Optional[AxisSpec] = None
    title: Optional[str] = None


def column_label(column: Optional[str]) -> Optional[str]:
    """Return the display label for a column name."""
    if column is None:
        return None
    return DISPLAY_LABELS.get(column, column)


def _drop_none(payload: Any) -> Any:
    if isinstance(payload, dict):
        return {key: _drop_none(value) for key, value in payload.items() if value is not None}
    if isinstance(payload, list):
        return [_drop_none(item) for item in payload]
    return payload


def _to_payload(schema: ChartSchema) -> Dict[str, Any]:
    payload = asdict(schema)
    # result rows keep their nulls
    data = payload.pop("data")
    payload = _drop_none(payload)
    payload["data"] = data
    return payload


def _requested_chart_type(chart_hint: Optional[str], settings: VizSettings) -> str:
    hint = (chart_hint or "").strip().lower()
    if hint in SUPPORTED_CHART_TYPES:
        return hint
    return settings.default_chart_type


def build_chart_schema(
    rows: Optional[List[Dict[str, Any]]],
    chart_hint: Optional[str] = None,
    x_key: Optional[str] = None,
    y_key: Optional[str] = None,
    x_label: Optional[str] = None,
    y_label: Optional[str] = None,
    title: Optional[str] = None,
    settings: Optional[VizSettings] = None,
) -> Dict[str, Any]:
    """Build a ChartSchema payload from result rows.

    Explicit ``x_key``/``y_key`` take precedence over the inferred x-axis and
    metric, while the series column still comes from inference.

    Returns:
        The payload as a dict with None fields removed. ``status`` tells an
        empty result apart from one whose axes could not be resolved.
    """
    settings = settings or get_settings()

    if not rows or not isinstance(rows, list) or not isinstance(rows[0], dict):
        return _to_payload(ChartSchema(status=ChartStatus.EMPTY.value, title=title))

    resolution = resolve_axes(rows, settings)
    x_axis = x_key or resolution.x_axis
    metric = y_key or resolution.metric
    if not y_key and metric is not None and metric == x_axis:
        # Never plot the x-axis against itself while another number exists.
        metric = pick_metric_excluding(rows, x_axis) or metric
    effective = AxisResolution(
        x_axis=x_axis,
        series=resolution.series,
        metric=metric,
        is_multi_series=resolution.is_multi_series,
    )
    ex, ey = effective.x_axis, effective.metric

    if not effective.is_resolved:
        logger.info("Unable to resolve chart axes from %d rows", len(rows))
        return _to_payload(ChartSchema(status=ChartStatus.UNRESOLVED.value, title=title))

    requested = _requested_chart_type(chart_hint, settings)
    series_key = effective.series
    multi = effective.is_multi_series and series_key is not None and series_key != ex

    if multi:
        pivoted = pivot_rows(rows, ex, series_key, ey, settings)
        data = pivoted.data
        series = [
            Series(name=series_field(s), field=series_field(s))
            for s in pivoted.series
            if series_field(s) != ex
        ]
        time_like = is_time_like_column(ex, [row.get(ex) for row in data], settings)
        # Pie is single-series only.
        chart_type = "line" if time_like and requested == "line" else "bar"
        status = ChartStatus.MULTI_SERIES
    else:
        data = sort_rows_by_axis(rows, ex, settings)
        series = [Series(name=column_label(ey), field=ey)]
        time_like = is_time_like_column(ex, [row.get(ex) for row in data], settings)
        chart_type = requested
        status = ChartStatus.SINGLE_SERIES

    schema = ChartSchema(
        status=status.value,
        chartType=chart_type,
        isMultiSeries=multi,
        data=data,
        series=series,
        xAxis=AxisSpec(
            field=ex,
            label=x_label or column_label(ex),
            format=(AxisFormat.TIME if time_like else AxisFormat.CATEGORY).value,
        ),
        yAxis=AxisSpec(field=ey, label=y_label or column_label(ey), format=AxisFormat.NUMBER.value),
        title=title,
    )
    logger.info(
        "Built %s %s chart (x=%s, series=%s, metric=%s)",
        status.value,
        chart_type,
        ex,
        series_key if multi else None,
        ey,
    )
    return _to_payload(schema)
