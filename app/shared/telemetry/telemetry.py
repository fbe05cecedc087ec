"""OpenTelemetry tracing setup.

One TracerProvider per process, built at startup from settings and torn
down at shutdown. HTTP requests are traced by the FastAPI instrumentor;
ledger calls add child spans through app.shared.telemetry.tracing.
"""

import logging
import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

# Probes would dominate the trace volume.
_EXCLUDED_URLS = "/api/v1/health"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Return the span exporter for exporter_type, or None for 'none'.

    Raises:
        ValueError: Unknown exporter type, or 'otlp' without an endpoint.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "console":
        return ConsoleSpanExporter()
    if exporter_type == "otlp":
        if not otlp_endpoint:
            raise ValueError("TELEMETRY_OTLP_ENDPOINT is required for the otlp exporter")
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    raise ValueError(
        f"Unknown telemetry exporter '{exporter_type}'. Use 'console', 'otlp' or 'none'"
    )


class TelemetryConfig:
    """Owns the process TracerProvider and the FastAPI instrumentation."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Build the TracerProvider and install it globally.

        Args:
            exporter_type: "console", "otlp" or "none" (spans created, not exported).
            otlp_endpoint: OTLP gRPC endpoint, e.g. http://localhost:4317.
            sample_rate: Root-span sampling ratio between 0.0 and 1.0.

        Returns:
            The provider, or None when telemetry is disabled.

        Raises:
            ValueError: Invalid exporter configuration.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        exporter = _build_exporter(exporter_type, otlp_endpoint)
        provider = TracerProvider(
            resource=Resource.create({
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }),
            sampler=ParentBased(TraceIdRatioBased(sample_rate)),
        )
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Trace every request except health probes."""
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=self.tracer_provider, excluded_urls=_EXCLUDED_URLS
        )

    def shutdown(self) -> None:
        """Flush pending spans and release the exporter."""
        if self.tracer_provider is None:
            return
        self.tracer_provider.shutdown()
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry set at startup, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Install (or clear, with None) the process telemetry."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
