from __future__ import annotations

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ..core.config import Settings


def init_otel(app: FastAPI, settings: Settings) -> TracerProvider:
    """
    Trace every request of `app` and ship spans over OTLP gRPC.

    Returns the provider so callers can flush or shut it down.
    """
    otel_cfg = settings.otel

    tracer_provider = TracerProvider(
        resource=Resource.create(
            {
                SERVICE_NAME: otel_cfg.service_name,
                SERVICE_VERSION: app.version,
                "deployment.environment": settings.app.env.value,
            }
        )
    )
    tracer_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=otel_cfg.exporter_otlp_endpoint, insecure=True)
        )
    )
    trace.set_tracer_provider(tracer_provider)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider)
    return tracer_provider
