"""
Span helpers for override and row transformation steps.

trace_operation opens a span around one step; add_span_attributes and
add_span_event annotate whatever span is current, so rule code never has
to carry a span reference around.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from .tracer import get_tracer


def _attribute_value(value: Any):
    """Coerce a value into something OpenTelemetry accepts as an attribute."""
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (set, frozenset)):
        return sorted(str(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value)


@contextmanager
def trace_operation(operation_name: str, **attributes) -> Iterator[trace.Span]:
    """
    Run a block inside an internal span.

    Errors are recorded on the span, which is marked failed, and re-raised.

    Example:
        >>> with trace_operation("apply_overrides", table="rhnpackage") as span:
        ...     table = registry.apply(table)
        ...     span.set_attribute("main_unique_index", table.main_unique_index_name)
    """
    with get_tracer().start_as_current_span(
        operation_name,
        kind=trace.SpanKind.INTERNAL,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        for key, value in attributes.items():
            span.set_attribute(key, _attribute_value(value))

        try:
            yield span
        except Exception as e:
            span.set_attribute("error.type", type(e).__name__)
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def add_span_attributes(**attributes):
    """Set attributes on the current span, if it is recording."""
    current_span = trace.get_current_span()
    if current_span.is_recording():
        for key, value in attributes.items():
            current_span.set_attribute(key, _attribute_value(value))


def add_span_event(name: str, **attributes):
    """
    Add an event to the current span.

    Example:
        >>> with trace_operation("apply_overrides"):
        ...     add_span_event("override_applied", effects=["pk_sequence"])
    """
    current_span = trace.get_current_span()
    if current_span.is_recording():
        current_span.add_event(
            name,
            attributes={k: _attribute_value(v) for k, v in attributes.items()},
        )
