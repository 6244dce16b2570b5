"""
OpenTelemetry tracing.

Spans are always created through the OpenTelemetry API, which is a no-op until
``setup_tracing`` installs an SDK tracer provider. Exporting is optional: with
``OTEL_CONSOLE_EXPORT`` enabled, finished spans are printed to stdout.
"""

import logging
from functools import wraps
from typing import Optional

from opentelemetry import trace
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

logger = logging.getLogger(__name__)

_initialized = False


def setup_tracing(service_name: str = "sahara-backend", console_export: bool = False, enable: bool = True) -> None:
    """
    Install the SDK tracer provider and instrument Django.

    Args:
        service_name: Name reported on every span
        console_export: Print finished spans to stdout
        enable: Leave the no-op provider in place when False
    """
    global _initialized

    if _initialized:
        logger.debug("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    try:
        tracer_provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: service_name}))
        if console_export:
            tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(tracer_provider)

        DjangoInstrumentor().instrument()

        _initialized = True
        logger.info(f"OpenTelemetry tracing initialized for service: {service_name}")
    except Exception as e:
        logger.error(f"Failed to initialize tracing: {e}")


def get_tracer(name: Optional[str] = None) -> trace.Tracer:
    """
    Tracer for custom spans.

    Example:
        with get_tracer(__name__).start_as_current_span("analytics_build"):
            ...
    """
    return trace.get_tracer(name or __name__)


def trace_function(operation_name: Optional[str] = None):
    """Decorator wrapping a function call in a span."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            span_name = operation_name or f"{func.__module__}.{func.__name__}"
            with get_tracer(func.__module__).start_as_current_span(span_name):
                return func(*args, **kwargs)

        return wrapper

    return decorator
