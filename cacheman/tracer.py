import logging
from contextlib import asynccontextmanager

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import config

log = logging.getLogger(__name__)

_tracer = trace.get_tracer("cacheman")


def configure_tracing(enabled: bool | None = None) -> bool:
    """Install an SDK provider exporting spans to the console.

    Without it the API's default no-op provider is in effect and spans cost
    next to nothing.
    """
    enabled = config.TRACING if enabled is None else enabled
    if not enabled:
        return False
    provider = TracerProvider()
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    log.info("otel tracer configured")
    return True


@asynccontextmanager
async def start_span_async(name: str, **attributes):
    with _tracer.start_as_current_span(name, attributes=attributes) as span:
        yield span
