"""Tests for TelemetryConfig and exporter selection."""

from unittest.mock import MagicMock

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from caseflow.shared.telemetry import telemetry as telemetry_module
from caseflow.shared.telemetry.telemetry import (
    TelemetryConfig,
    _build_exporter,
    get_telemetry,
    set_telemetry,
)


def test_disabled_config_installs_no_provider() -> None:
    config = TelemetryConfig("caseflow", "0.1.0", enabled=False)
    assert config.setup_telemetry(exporter_type="none") is None
    assert config.tracer_provider is None
    assert config.active is False


def test_none_exporter_returns_provider_and_shutdown_releases_it() -> None:
    config = TelemetryConfig("caseflow", "0.1.0", environment="test")
    provider = config.setup_telemetry(exporter_type="none", sample_rate=0.5)
    assert isinstance(provider, TracerProvider)
    assert config.active is True

    config.shutdown()
    assert config.tracer_provider is None
    # Second shutdown is a no-op.
    config.shutdown()


def test_exporter_selection() -> None:
    assert _build_exporter("none", None) is None
    assert isinstance(_build_exporter("console", None), ConsoleSpanExporter)
    # otlp without an endpoint and unknown names fall back to stdout.
    assert isinstance(_build_exporter("otlp", None), ConsoleSpanExporter)
    assert isinstance(_build_exporter("jaeger", None), ConsoleSpanExporter)


def test_instrumentation_skipped_until_setup(monkeypatch) -> None:
    instrument_app = MagicMock()
    monkeypatch.setattr(
        telemetry_module.FastAPIInstrumentor, "instrument_app", instrument_app
    )
    config = TelemetryConfig("caseflow", "0.1.0")
    config.instrument_fastapi(MagicMock())
    instrument_app.assert_not_called()


def test_set_and_get_telemetry() -> None:
    config = TelemetryConfig("caseflow", "0.1.0", enabled=False)
    set_telemetry(config)
    try:
        assert get_telemetry() is config
    finally:
        set_telemetry(None)
    assert get_telemetry() is None
