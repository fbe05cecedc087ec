"""Span helpers for ledger calls.

Only identifiers (document id, hash, stage, backend) ever become span
attributes; encryption keys and document bytes never do.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

P = ParamSpec("P")
T = TypeVar("T")

_tracer = trace.get_tracer("docledger")

# Attribute names accepted by add_span_attributes; others are dropped.
SAFE_SPAN_ATTRIBUTES = frozenset(
    {"document_id", "document_hash", "operation", "backend", "stage"}
)


def traced(
    span_name: str,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Run the decorated coroutine function inside a span named span_name.

    Exceptions are recorded on the span, which is marked ERROR, and re-raised.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with _tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: Any) -> None:
    """Tag the current span with allowlisted attributes (prefixed 'docledger.')."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    for key, value in attributes.items():
        if key in SAFE_SPAN_ATTRIBUTES and value is not None:
            span.set_attribute(f"docledger.{key}", str(value))
