"""Optional low-cardinality metrics for chart generation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from opentelemetry import metrics

from viz.config import get_env_bool

logger = logging.getLogger(__name__)


def is_otel_exporter_configured() -> bool:
    """Return True when an OTLP metrics exporter is configured in the environment."""
    if (os.getenv("OTEL_METRICS_EXPORTER") or "").strip().lower() == "none":
        return False
    endpoint = (os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or "").strip()
    metrics_endpoint = (os.getenv("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT") or "").strip()
    return bool(endpoint or metrics_endpoint)


def is_metrics_enabled(enabled_env_var: str) -> bool:
    """Explicit env override wins; otherwise follow exporter configuration."""
    if os.getenv(enabled_env_var) is not None:
        try:
            return get_env_bool(enabled_env_var, False)
        except ValueError:
            logger.warning("Invalid %s value; metrics disabled.", enabled_env_var)
            return False
    return is_otel_exporter_configured()


@dataclass
class ChartMetrics:
    """Counters for chart outcomes, emitted only when metrics are enabled."""

    meter_name: str
    enabled_env_var: str
    _counters: Dict[str, Any] = field(default_factory=dict)

    def record_chart(self, status: str, chart_type: Optional[str] = None) -> None:
        """Count one chart build by outcome and chart type."""
        attributes = {"status": status}
        if chart_type:
            attributes["chart_type"] = chart_type
        self._add("viz.charts.built", attributes, "Chart payloads built by outcome")

    def record_failure(self) -> None:
        """Count one chart build that raised unexpectedly."""
        self._add("viz.charts.failed", {}, "Chart payload builds that raised")

    def _add(self, name: str, attributes: Dict[str, str], description: str) -> None:
        if not is_metrics_enabled(self.enabled_env_var):
            return
        try:
            counter = self._counters.get(name)
            if counter is None:
                counter = metrics.get_meter(self.meter_name).create_counter(
                    name=name, description=description, unit="1"
                )
                self._counters[name] = counter
            counter.add(1, attributes)
        except Exception as exc:
            logger.debug("Counter metric emission failed for %s: %s", name, exc)


viz_metrics = ChartMetrics(
    meter_name="resultviz",
    enabled_env_var="VIZ_OBSERVABILITY_METRICS_ENABLED",
)
