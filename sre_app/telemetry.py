"""OpenTelemetry tracing setup: OTLP gRPC export through a batch processor."""

import logging

from opentelemetry import propagate, trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from . import config

log = logging.getLogger(__name__)

TRACER_NAME = "sre-observability-app"


def build_resource() -> Resource:
    return Resource.create({
        "service.name":           config.SERVICE_NAME,
        "service.version":        config.SERVICE_VERSION,
        "deployment.environment": config.DEPLOYMENT_ENVIRONMENT,
    })


def init_tracing(
    endpoint: str = config.OTEL_EXPORTER_OTLP_ENDPOINT,
    insecure: bool = config.OTEL_INSECURE,
) -> TracerProvider:
    """Install a global tracer provider and the W3C propagators.

    Export is batched on a background thread; a collector that is down only
    costs dropped spans, never a failed request. Call ``shutdown()`` on the
    returned provider to flush on exit.
    """
    provider = TracerProvider(resource=build_resource())
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=insecure))
    )
    trace.set_tracer_provider(provider)
    propagate.set_global_textmap(
        CompositePropagator([TraceContextTextMapPropagator(), W3CBaggagePropagator()])
    )
    log.info("Tracing to %s (insecure=%s)", endpoint, insecure)
    return provider
