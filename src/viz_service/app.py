"""HTTP service that turns query results into chart payloads."""

import hashlib
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry import trace
from pydantic import BaseModel, Field

from viz.axes import resolve_axes
from viz.config import get_settings
from viz.metrics import viz_metrics
from viz.schema import ChartStatus, build_chart_schema

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("viz_service")

app = FastAPI(title="Result Visualization Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def validate_startup_configuration() -> None:
    """Fail fast on invalid VIZ_* settings."""
    get_settings()


class ChartRequest(BaseModel):
    """Query answer to visualize, with optional rendering overrides."""

    sql: Optional[str] = None
    results: List[Dict[str, Any]] = Field(default_factory=list)
    chart_type: Optional[str] = None
    x_key: Optional[str] = None
    y_key: Optional[str] = None
    x_label: Optional[str] = None
    y_label: Optional[str] = None
    title: Optional[str] = None


class ChartResponse(BaseModel):
    """Chart payload, or None with the reason it could not be built."""

    chart: Optional[Dict[str, Any]] = None
    reason: str


class ResolveRequest(BaseModel):
    """Result rows whose axis roles should be inferred."""

    results: List[Dict[str, Any]] = Field(default_factory=list)


class ResolveResponse(BaseModel):
    """Inferred axis roles."""

    x_axis: Optional[str] = None
    series: Optional[str] = None
    metric: Optional[str] = None
    is_multi_series: bool = False
    roles: Dict[str, str] = Field(default_factory=dict)


_REASONS = {
    ChartStatus.EMPTY.value: "No results found.",
    ChartStatus.UNRESOLVED.value: "Unable to resolve chart axes from the result.",
}


def _hash_sql(sql: str) -> str:
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


@app.get("/healthz")
async def healthz() -> Dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/viz/chart", response_model=ChartResponse)
async def build_chart(request: ChartRequest) -> ChartResponse:
    """Build a chart payload for a query answer.

    This is best-effort: a result that cannot be charted, or an unexpected
    failure while building, comes back as ``chart=None`` with a reason.
    """
    with tracer.start_as_current_span("viz.build_chart") as span:
        span.set_attribute("viz.row_count", len(request.results))
        if request.sql:
            span.set_attribute("db.statement_hash", _hash_sql(request.sql))

        try:
            chart = build_chart_schema(
                request.results,
                chart_hint=request.chart_type,
                x_key=request.x_key,
                y_key=request.y_key,
                x_label=request.x_label,
                y_label=request.y_label,
                title=request.title,
            )
        except Exception as e:
            logger.exception("Chart generation failed")
            span.set_attribute("viz.status", "error")
            viz_metrics.record_failure()
            return ChartResponse(chart=None, reason=f"Chart generation failed: {str(e)}")

        status = chart["status"]
        span.set_attribute("viz.status", status)
        viz_metrics.record_chart(status, chart.get("chartType"))

        if status in _REASONS:
            return ChartResponse(chart=None, reason=_REASONS[status])

        return ChartResponse(
            chart=chart,
            reason=f"Generated {chart['chartType']} chart based on data shape",
        )


@app.post("/viz/resolve", response_model=ResolveResponse)
async def resolve(request: ResolveRequest) -> ResolveResponse:
    """Infer x-axis, series and metric columns without building a chart."""
    resolution = resolve_axes(request.results)
    columns = list(request.results[0].keys()) if request.results else []
    return ResolveResponse(
        **resolution.to_dict(),
        roles={column: role.value for column, role in resolution.roles(columns).items()},
    )
