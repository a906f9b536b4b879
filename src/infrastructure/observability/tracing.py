"""OpenTelemetry tracing for the monitoring adapter.

Spans:
- monitoring_adapter.get_values: one per guarantee evaluation
- HTTP GET to the CIMI server: children of the above, via httpx instrumentation
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from src.__version__ import __version__
from src.infrastructure.config import get_settings
from src.infrastructure.config.settings import ObservabilitySettings

logger = logging.getLogger(__name__)


def setup_tracing(
    config: ObservabilitySettings | None = None,
    environment: str | None = None,
) -> TracerProvider:
    """Install a global TracerProvider exporting to an OTLP collector.

    An empty exporter endpoint keeps spans in-process (no exporter), which is
    what local runs and tests want.

    Args:
        config: Observability settings; defaults to the global settings
        environment: deployment.environment attribute; defaults to the global settings

    Returns:
        The installed TracerProvider (call shutdown() to flush on exit)
    """
    settings = get_settings()
    otel_config = config or settings.observability

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": otel_config.service_name,
                "service.version": __version__,
                "deployment.environment": environment or settings.environment,
            }
        ),
        sampler=ParentBased(TraceIdRatioBased(otel_config.trace_sample_rate)),
    )

    if otel_config.exporter_otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=otel_config.exporter_otlp_endpoint,
                    insecure=otel_config.exporter_otlp_insecure,
                )
            )
        )
        logger.info(
            f"Exporting traces to {otel_config.exporter_otlp_endpoint} "
            f"(sample rate {otel_config.trace_sample_rate})"
        )
    else:
        logger.info("No OTLP endpoint configured, spans are not exported")

    trace.set_tracer_provider(provider)
    HTTPXClientInstrumentor().instrument(tracer_provider=provider)

    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Tracer for manual spans; a no-op tracer until setup_tracing() runs."""
    return trace.get_tracer(name)
