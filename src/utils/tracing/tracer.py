"""
Tracer initialization and configuration for OpenTelemetry.

Provides setup functions for tracing override application and row
transformation, exporting spans over OTLP when an endpoint is configured.
"""

import logging
import os
import threading

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "table-overrides"

# Global tracer instance
_tracer: trace.Tracer | None = None
_is_initialized = False
_init_lock = threading.RLock()


def initialize_tracing(
    service_name: str | None = None,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
    sampling_rate: float = 1.0
) -> trace.Tracer:
    """
    Initialize distributed tracing with OpenTelemetry.

    Args:
        service_name: Name of the service (default: OTEL_SERVICE_NAME or
            "table-overrides")
        otlp_endpoint: OTLP collector endpoint (default: OTLP_ENDPOINT; no
            OTLP export when neither is set)
        console_export: If True, also export traces to console (debug)
        sampling_rate: Sampling rate 0.0-1.0 (1.0 = trace everything)

    Returns:
        Configured tracer instance

    Example:
        >>> tracer = initialize_tracing(otlp_endpoint="localhost:4317")
    """
    global _tracer, _is_initialized

    with _init_lock:
        if _is_initialized:
            logger.warning("Tracing already initialized, returning existing tracer")
            return _tracer

        if service_name is None:
            service_name = os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME)

        resource = Resource(attributes={
            SERVICE_NAME: service_name
        })

        provider = TracerProvider(
            resource=resource,
            sampler=TraceIdRatioBased(sampling_rate),
        )

        exporters = []

        if otlp_endpoint is None:
            otlp_endpoint = os.getenv("OTLP_ENDPOINT")

        if otlp_endpoint:
            otlp_exporter = OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=True
            )
            provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
            exporters.append("OTLP")
            logger.info(f"OTLP exporter configured: {otlp_endpoint}")

        # Console exporter for debugging
        if console_export or os.getenv("TRACE_CONSOLE", "").lower() == "true":
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
            exporters.append("Console")
            logger.info("Console exporter configured")

        if not exporters:
            logger.debug("No trace exporters configured, spans stay local")

        trace.set_tracer_provider(provider)

        _tracer = trace.get_tracer(service_name)
        _is_initialized = True

        logger.info(
            f"Tracing initialized: {service_name} "
            f"(exporters: {', '.join(exporters) or 'none'}, sampling: {sampling_rate})"
        )

        return _tracer


def get_tracer() -> trace.Tracer:
    """
    Get the global tracer instance.

    Initializes tracing with defaults if not already initialized. Safe to
    call from several threads; the provider is installed once.

    Returns:
        Configured tracer instance
    """
    global _tracer

    if _tracer is None:
        with _init_lock:
            if _tracer is None:
                logger.debug("Tracer not initialized, initializing with defaults")
                _tracer = initialize_tracing()

    return _tracer


def shutdown_tracing() -> None:
    """
    Shutdown tracing and flush pending spans.

    Should be called before application exit.
    """
    global _is_initialized

    if _is_initialized:
        provider = trace.get_tracer_provider()
        if hasattr(provider, "shutdown"):
            provider.shutdown()
        logger.info("Tracing shutdown complete")
        _is_initialized = False
