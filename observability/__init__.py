"""
Participle Atlas - Observability Package

Structured logging (structlog) and tracing (OpenTelemetry) for the build.

Usage:
    from observability import setup_logging, get_logger, create_span

    setup_logging()
    logger = get_logger(__name__)

    with create_span("rows.extract"):
        ...
"""
from observability.logging import (
    setup_logging,
    get_logger,
    LogContext,
)
from observability.tracing import (
    setup_tracing,
    get_tracer,
    create_span,
    shutdown_tracing,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "LogContext",
    "setup_tracing",
    "get_tracer",
    "create_span",
    "shutdown_tracing",
]
