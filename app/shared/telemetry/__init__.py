"""Logging, OpenTelemetry setup and span helpers."""

from app.shared.telemetry.logging import get_logger, setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry
from app.shared.telemetry.tracing import SAFE_SPAN_ATTRIBUTES, add_span_attributes, traced

__all__ = [
    "SAFE_SPAN_ATTRIBUTES",
    "TelemetryConfig",
    "add_span_attributes",
    "get_logger",
    "get_telemetry",
    "set_telemetry",
    "setup_logging",
    "traced",
]
