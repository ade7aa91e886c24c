"""Custom span helpers for xrefs instrumentation."""

from __future__ import annotations

import functools
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from xrefs_core.telemetry.setup import get_meter, get_tracer

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from xrefs_core.schema import Direction

F = TypeVar("F", bound=Callable[..., Any])


def trace_xrefs_call(operation: str) -> Callable[[F], F]:
    """Decorator to trace an xrefs service operation.

    Adds attributes to the span:
    - xrefs.operation: The operation name (e.g., "nodes", "decorations")

    Each completed call also increments the ``xrefs.requests`` counter,
    labelled with the operation and an ``xrefs.outcome`` of "ok" or "error".

    Usage:
        @trace_xrefs_call("nodes")
        async def nodes(self, request: NodesRequest) -> list[NodeInfo]:
            ...

    Args:
        operation: The service operation name

    Returns:
        Decorated async function with tracing
    """

    def decorator(func: F) -> F:
        requests = get_meter(__name__).create_counter(
            "xrefs.requests",
            unit="1",
            description="xrefs service calls by operation and outcome",
        )

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(__name__)
            with tracer.start_as_current_span(
                f"xrefs.{operation}",
                attributes={"xrefs.operation": operation},
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    requests.add(1, {"xrefs.operation": operation, "xrefs.outcome": "error"})
                    raise
                requests.add(1, {"xrefs.operation": operation, "xrefs.outcome": "ok"})
                return result

        return wrapper  # type: ignore[return-value]

    return decorator


@asynccontextmanager
async def trace_store_read(
    operation: str,
    store: str,
    direction: Direction | None = None,
) -> AsyncIterator[trace.Span]:
    """Context manager for tracing graph store reads.

    Usage:
        async with trace_store_read("read_edges", "sql", Direction.REVERSE) as span:
            rows = await session.execute(query)
            span.set_attribute("graphstore.rows", len(rows))

    Args:
        operation: The store operation (e.g., "read_facts", "read_edges")
        store: The store engine name (e.g., "memory", "sql")
        direction: Edge direction for edge reads

    Yields:
        The active span for adding additional attributes
    """
    tracer = get_tracer(__name__)
    attrs: dict[str, Any] = {"graphstore.engine": store}
    if direction is not None:
        attrs["graphstore.direction"] = direction.value

    with tracer.start_as_current_span(
        f"graphstore.{operation}",
        attributes=attrs,
    ) as span:
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
