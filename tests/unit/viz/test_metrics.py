from unittest.mock import MagicMock, patch

from viz.metrics import ChartMetrics, is_metrics_enabled, is_otel_exporter_configured


def test_metrics_disabled_by_default():
    assert not is_otel_exporter_configured()
    assert not is_metrics_enabled("VIZ_OBSERVABILITY_METRICS_ENABLED")


def test_exporter_enables_metrics(monkeypatch):
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")
    assert is_metrics_enabled("VIZ_OBSERVABILITY_METRICS_ENABLED")

    monkeypatch.setenv("OTEL_METRICS_EXPORTER", "none")
    assert not is_metrics_enabled("VIZ_OBSERVABILITY_METRICS_ENABLED")


def test_explicit_flag_wins(monkeypatch):
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")
    monkeypatch.setenv("VIZ_OBSERVABILITY_METRICS_ENABLED", "false")
    assert not is_metrics_enabled("VIZ_OBSERVABILITY_METRICS_ENABLED")

    monkeypatch.setenv("VIZ_OBSERVABILITY_METRICS_ENABLED", "bogus")
    assert not is_metrics_enabled("VIZ_OBSERVABILITY_METRICS_ENABLED")


def test_record_chart_emits_counter(monkeypatch):
    monkeypatch.setenv("TEST_VIZ_METRICS", "true")
    meter = MagicMock()
    counter = meter.create_counter.return_value

    with patch("viz.metrics.metrics.get_meter", return_value=meter):
        chart_metrics = ChartMetrics(meter_name="test", enabled_env_var="TEST_VIZ_METRICS")
        chart_metrics.record_chart("multi_series", "bar")
        chart_metrics.record_chart("empty")

    meter.create_counter.assert_called_once()
    assert counter.add.call_count == 2
    counter.add.assert_any_call(1, {"status": "multi_series", "chart_type": "bar"})
    counter.add.assert_any_call(1, {"status": "empty"})


def test_record_chart_is_noop_when_disabled():
    meter = MagicMock()
    with patch("viz.metrics.metrics.get_meter", return_value=meter):
        ChartMetrics(meter_name="test", enabled_env_var="TEST_VIZ_METRICS_OFF").record_failure()
    meter.create_counter.assert_not_called()
