"""OpenTelemetry setup for the caseflow API process and outbox worker.

Spans come from three places: FastAPI requests, SQLAlchemy statements (the
outbox claim, trigger lookups, instance updates) and the @traced use cases
(outbox.drain, workflow.start, workflow.advance). Log records carry the
active trace_id/span_id once logging is instrumented.
"""

import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from caseflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

EXPORTERS = ("console", "otlp", "none")

# Probes hit these every few seconds; tracing them only adds noise.
UNTRACED_URLS = "/api/v1/health,/api/v1/health/ready"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Span exporter for exporter_type; None means spans are sampled but not exported."""
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("TELEMETRY_OTLP_ENDPOINT is not set; caseflow spans go to stdout")
    elif exporter_type != "console":
        logger.warning(
            "Unknown TELEMETRY_EXPORTER %r (expected one of %s); using console",
            exporter_type,
            ", ".join(EXPORTERS),
        )
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus instrumentation for one caseflow process.

    Each instrument_* call is a no-op until setup_telemetry() has installed
    a provider, so the lifespan can call them unconditionally.
    """

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

    @property
    def active(self) -> bool:
        return self.enabled and self.tracer_provider is not None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Install the global tracer provider.

        Args:
            exporter_type: "console", "otlp" or "none".
            otlp_endpoint: OTLP gRPC collector, e.g. http://localhost:4317.
            sample_rate: Fraction of traces kept, 0.0 to 1.0.

        Returns:
            The provider, or None when telemetry is disabled or setup failed.
        """
        if not self.enabled:
            logger.info("caseflow telemetry disabled")
            return None
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=TraceIdRatioBased(sample_rate),
            )
            exporter = _build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception as e:
            logger.exception("caseflow telemetry setup failed: %s", e)
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing %s %s (%s) via %s exporter at sample rate %.2f",
            self.service_name,
            self.service_version,
            self.environment,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Trace HTTP requests except the health probes."""
        if not self.active:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=UNTRACED_URLS
            )
        except Exception as e:
            logger.exception("Could not trace FastAPI requests: %s", e)

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Trace statements on engine (outbox claims, instance locks, audit inserts)."""
        if not self.active:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=self.tracer_provider
            )
        except Exception as e:
            logger.exception("Could not trace SQLAlchemy statements: %s", e)

    def instrument_logging(self) -> None:
        """Inject trace_id/span_id into log records (format left to setup_logging)."""
        if not self.active:
            return
        try:
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider, set_logging_format=False
            )
        except Exception as e:
            logger.exception("Could not add trace context to logs: %s", e)

    def shutdown(self) -> None:
        """Flush pending spans (e.g. the last drain cycle) and release the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception as e:
            logger.exception("caseflow telemetry shutdown failed: %s", e)
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Telemetry installed by the lifespan, or None."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
