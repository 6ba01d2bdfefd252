import os
from contextlib import contextmanager
from typing import Iterator, Optional

from flask import Flask

try:
    from opentelemetry import context as otel_context
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.flask import FlaskInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
except ImportError:  # pragma: no cover - optional dependency
    otel_context = None  # type: ignore
    trace = None  # type: ignore
    FlaskInstrumentor = None  # type: ignore

TRACER_NAME = "moodwave.catalog"


def _otlp_endpoint(app: Flask) -> Optional[str]:
    return app.config.get("OTEL_EXPORTER_OTLP_ENDPOINT") or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")


def init_tracing(app: Flask) -> bool:
    """Export request spans over OTLP when the ``otel`` extra is installed and an endpoint is set."""
    if FlaskInstrumentor is None:  # pragma: no cover - optional dependency
        return False

    endpoint = _otlp_endpoint(app)
    if not endpoint:
        return False

    resource = Resource.create(
        {
            "service.name": app.config.get("OTEL_SERVICE_NAME") or os.getenv("OTEL_SERVICE_NAME", "moodwave"),
            "catalog.market": app.config.get("CATALOG_MARKET", ""),
        }
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=endpoint,
                headers=os.getenv("OTEL_EXPORTER_OTLP_HEADERS"),
                insecure=app.config.get("OTEL_EXPORTER_OTLP_INSECURE", True),
            )
        )
    )
    trace.set_tracer_provider(provider)

    # probe and scrape endpoints are not traced
    FlaskInstrumentor().instrument_app(app, excluded_urls="healthz,metrics")
    app.logger.info("Tracing enabled; exporting to %s", endpoint)
    return True


@contextmanager
def catalog_span(operation: str, resource_id: Optional[str] = None) -> Iterator[None]:
    """Wrap one catalog round trip in a child span of the current request."""
    if trace is None:  # pragma: no cover - optional dependency
        yield
        return
    with trace.get_tracer(TRACER_NAME).start_as_current_span(f"catalog.{operation}") as span:
        if resource_id:
            span.set_attribute("catalog.resource_id", resource_id)
        yield


def capture_context():
    """The caller's trace context, for handing to worker threads."""
    if otel_context is None:  # pragma: no cover - optional dependency
        return None
    return otel_context.get_current()


@contextmanager
def attached_context(ctx) -> Iterator[None]:
    """Make ``ctx`` current on this thread for the duration of the block."""
    if ctx is None:
        yield
        return
    token = otel_context.attach(ctx)
    try:
        yield
    finally:
        otel_context.detach(token)
