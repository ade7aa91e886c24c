"""OpenTelemetry setup with conditional initialization.

All OTEL SDK imports are lazy so a disabled deployment never loads the SDK or
its exporters; the API package alone yields no-op tracers and meters.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opentelemetry.metrics import Meter
    from opentelemetry.sdk.trace.sampling import Sampler
    from opentelemetry.trace import Tracer

_tracer: Tracer | None = None
_meter: Meter | None = None
_initialized = False

logger = logging.getLogger(__name__)


def _build_sampler(name: str, ratio: float) -> Sampler:
    from opentelemetry.sdk.trace.sampling import (
        ALWAYS_OFF,
        ALWAYS_ON,
        ParentBasedTraceIdRatio,
        TraceIdRatioBased,
    )

    if name == "always_off":
        return ALWAYS_OFF
    if name == "traceidratio":
        return TraceIdRatioBased(ratio)
    if name == "parentbased_traceidratio":
        return ParentBasedTraceIdRatio(ratio)
    return ALWAYS_ON


def init_telemetry(
    service_suffix: str = "",
    extra_resource_attributes: dict[str, str] | None = None,
) -> bool:
    """Initialize OpenTelemetry if enabled.

    Safe to call multiple times; later calls are no-ops.

    Args:
        service_suffix: Suffix appended to the service name (e.g., "-api")
        extra_resource_attributes: Additional resource attributes to include

    Returns:
        True if telemetry is active, False if disabled
    """
    global _tracer, _meter, _initialized

    if _initialized:
        return True

    from xrefs_core.settings import get_settings

    settings = get_settings()

    if not settings.otel_enabled:
        logger.debug("OpenTelemetry disabled (OTEL_ENABLED=false)")
        return False

    from opentelemetry import metrics, trace
    from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
        OTLPMetricExporter,
    )
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.sdk.metrics import MeterProvider
    from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
    from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    service_name = settings.otel_service_name + service_suffix
    resource_attrs: dict[str, str] = {
        SERVICE_NAME: service_name,
        SERVICE_VERSION: "0.1.0",
        "deployment.environment": "development" if settings.debug else "production",
    }
    if extra_resource_attributes:
        resource_attrs.update(extra_resource_attributes)
    resource = Resource.create(resource_attrs)

    tracer_provider = TracerProvider(
        resource=resource,
        sampler=_build_sampler(settings.otel_traces_sampler, settings.otel_traces_sampler_arg),
    )
    tracer_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint))
    )
    trace.set_tracer_provider(tracer_provider)
    _tracer = trace.get_tracer(__name__)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=settings.otel_exporter_otlp_endpoint),
        export_interval_millis=60000,
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[metric_reader]))
    _meter = metrics.get_meter(__name__)

    _initialized = True
    logger.info(
        "OpenTelemetry initialized: service=%s, endpoint=%s",
        service_name,
        settings.otel_exporter_otlp_endpoint,
    )
    return True


async def shutdown_telemetry() -> None:
    """Flush and shut down telemetry exporters.

    Safe to call even if telemetry was never initialized.
    """
    global _initialized, _tracer, _meter

    if not _initialized:
        return

    from opentelemetry import metrics, trace

    for provider in (trace.get_tracer_provider(), metrics.get_meter_provider()):
        if hasattr(provider, "shutdown"):
            provider.shutdown()

    _initialized = False
    _tracer = None
    _meter = None
    logger.info("OpenTelemetry shutdown complete")


def get_tracer(name: str = __name__) -> Tracer:
    """Get a tracer instance (no-op if OTEL is disabled)."""
    from opentelemetry import trace

    if _tracer is not None:
        return _tracer
    return trace.get_tracer(name)


def get_meter(name: str = __name__) -> Meter:
    """Get a meter instance (no-op if OTEL is disabled)."""
    from opentelemetry import metrics

    if _meter is not None:
        return _meter
    return metrics.get_meter(name)
