"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from caseflow.shared.telemetry.logging import get_logger, setup_logging
from caseflow.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from caseflow.shared.telemetry.tracing import (
    add_span_attributes,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
]
