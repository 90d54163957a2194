"""
Participle Atlas - OpenTelemetry Tracing

Spans around each build stage. When tracing is disabled the API's no-op
provider is used, so instrumented code runs unchanged.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from config import TracingConfig

# Global state
_tracer_provider: Optional[TracerProvider] = None


def setup_tracing(config: Optional[TracingConfig] = None) -> Optional[TracerProvider]:
    """
    Install an SDK tracer provider when tracing is enabled.

    Args:
        config: Tracing configuration. Uses defaults if not provided.

    Returns:
        The installed TracerProvider, or None when tracing is disabled
    """
    global _tracer_provider

    config = config or TracingConfig()
    if not config.enabled:
        return None
    if _tracer_provider is not None:
        return _tracer_provider

    resource = Resource.create({
        "service.name": config.service_name,
        "service.version": config.service_version,
        "deployment.environment": config.environment,
    })
    provider = TracerProvider(resource=resource)
    if config.console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer_provider = provider
    return provider


def get_tracer(name: str, version: str = "1.0.0") -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Example:
        >>> tracer = get_tracer(__name__)
        >>> with tracer.start_as_current_span("rows.extract") as span:
        ...     span.set_attribute("rows", 42)
    """
    return trace.get_tracer(name, version)


def shutdown_tracing() -> None:
    """Flush and drop the SDK provider, if one was installed."""
    global _tracer_provider
    if _tracer_provider is not None:
        _tracer_provider.shutdown()
    _tracer_provider = None


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    tracer_name: str = "atlas.pipeline",
) -> Iterator[Span]:
    """
    Context manager for creating spans with automatic error handling.

    Example:
        >>> with create_span("dataset.write", attributes={"output.dir": "public"}) as span:
        ...     paths = write_dataset(...)
        ...     span.set_attribute("output.files", len(paths))
    """
    tracer = get_tracer(tracer_name)
    with tracer.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                _set_safe_attribute(span, key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise


def _set_safe_attribute(span: Span, key: str, value: Any) -> None:
    """Set span attribute, coercing values OpenTelemetry cannot store."""
    if isinstance(value, (str, bool, int, float)):
        span.set_attribute(key, value)
    else:
        span.set_attribute(key, str(value))
