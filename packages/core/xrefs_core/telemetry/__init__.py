"""OpenTelemetry initialization and utilities.

Telemetry is disabled by default. When OTEL_ENABLED=false no SDK import
occurs and spans go to the no-op tracer of the OpenTelemetry API.

Usage:
    from xrefs_core.telemetry import init_telemetry, shutdown_telemetry

    # In your application startup:
    telemetry_enabled = init_telemetry(service_suffix="-api")

    # In your application shutdown:
    await shutdown_telemetry()
"""

from xrefs_core.telemetry.setup import (
    get_meter,
    get_tracer,
    init_telemetry,
    shutdown_telemetry,
)
from xrefs_core.telemetry.spans import (
    trace_store_read,
    trace_xrefs_call,
)

__all__ = [
    "init_telemetry",
    "shutdown_telemetry",
    "get_tracer",
    "get_meter",
    "trace_store_read",
    "trace_xrefs_call",
]
