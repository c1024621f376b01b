"""Unit test environment helpers."""

import pytest

from viz.config import reset_settings

_VIZ_ENV_VARS = (
    "VIZ_TIME_SAMPLE_SIZE",
    "VIZ_TIME_LIKE_RATIO",
    "VIZ_SWAP_SAMPLE_ROWS",
    "VIZ_MAX_FRACTION_DIGITS",
    "VIZ_THOUSANDS_SEPARATOR",
    "VIZ_DECIMAL_SEPARATOR",
    "VIZ_DEFAULT_CHART_TYPE",
    "VIZ_OBSERVABILITY_METRICS_ENABLED",
)


@pytest.fixture(autouse=True)
def _default_viz_env(monkeypatch):
    """Start every test from default VIZ_* settings with metrics off."""
    for name in _VIZ_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT", raising=False)
    reset_settings()
    yield
    reset_settings()
