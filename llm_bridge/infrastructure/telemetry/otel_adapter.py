"""OpenTelemetry adapter for metrics and tracing."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from opentelemetry import metrics, trace

from llm_bridge.application.ports.telemetry_port import SpanIds, TelemetryPort

logger = logging.getLogger(__name__)

INSTRUMENTATION_LIBRARY = "llm_bridge"


@dataclass
class OtelConfig:
    """Configuration for OpenTelemetry."""

    service_name: str = "llm-bridge"
    otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"
    environment: str = "production"
    enable_console: bool = False  # Debug: print metrics/spans to console
    install_sdk: bool = True  # False: use whatever providers are globally registered


def _attributes(tags: dict[str, Any] | None) -> dict[str, Any]:
    # OTel rejects None attribute values
    return {k: v for k, v in (tags or {}).items() if v is not None}


class OpenTelemetryAdapter(TelemetryPort):
    """OpenTelemetry adapter for metrics and distributed tracing.

    Metrics:
    - Counters: incr() for events (queries, failures)
    - Histograms: observe() for distributions (latency)
    - Gauges: gauge() for per-call values (token usage)

    Traces:
    - span() opens a span as the current span and yields its ids

    Instruments are created lazily and cached per metric name. Providers can
    be injected (tests use in-memory readers/exporters); otherwise the SDK is
    configured from OtelConfig.
    """

    def __init__(
        self,
        cfg: OtelConfig,
        meter_provider: Any | None = None,
        tracer_provider: Any | None = None,
    ) -> None:
        self._cfg = cfg
        self._counters: dict[str, Any] = {}
        self._histograms: dict[str, Any] = {}
        self._gauges: dict[str, Any] = {}

        if meter_provider is None and tracer_provider is None and cfg.install_sdk:
            meter_provider, tracer_provider = self._init_sdk()

        self._meter = (meter_provider or metrics.get_meter_provider()).get_meter(
            INSTRUMENTATION_LIBRARY
        )
        self._tracer = (tracer_provider or trace.get_tracer_provider()).get_tracer(
            INSTRUMENTATION_LIBRARY
        )

    def _init_sdk(self) -> tuple[Any, Any]:
        """Initialize OpenTelemetry SDK providers and register them globally.

        Sets up:
        - OTLP exporters (if endpoint configured)
        - Console exporters (if enable_console=True)
        """
        sdk_metrics = import_module("opentelemetry.sdk.metrics")
        sdk_metrics_export = import_module("opentelemetry.sdk.metrics.export")
        sdk_trace = import_module("opentelemetry.sdk.trace")
        sdk_trace_export = import_module("opentelemetry.sdk.trace.export")
        sdk_resources = import_module("opentelemetry.sdk.resources")

        resource = sdk_resources.Resource.create(
            {
                "service.name": self._cfg.service_name,
                "deployment.environment": self._cfg.environment,
            }
        )

        readers = []
        tracer_provider = sdk_trace.TracerProvider(resource=resource)

        if self._cfg.otlp_endpoint:
            try:
                otlp_metrics = import_module(
                    "opentelemetry.exporter.otlp.proto.grpc.metric_exporter"
                )
                otlp_traces = import_module("opentelemetry.exporter.otlp.proto.grpc.trace_exporter")
            except ImportError as exc:
                raise ImportError(
                    "OTLP export requires opentelemetry-exporter-otlp. "
                    "Install it with: pip install 'llm-bridge[otlp]'"
                ) from exc
            readers.append(
                sdk_metrics_export.PeriodicExportingMetricReader(
                    otlp_metrics.OTLPMetricExporter(endpoint=self._cfg.otlp_endpoint)
                )
            )
            tracer_provider.add_span_processor(
                sdk_trace_export.BatchSpanProcessor(
                    otlp_traces.OTLPSpanExporter(endpoint=self._cfg.otlp_endpoint)
                )
            )

        if self._cfg.enable_console:
            readers.append(
                sdk_metrics_export.PeriodicExportingMetricReader(
                    sdk_metrics_export.ConsoleMetricExporter()
                )
            )
            tracer_provider.add_span_processor(
                sdk_trace_export.SimpleSpanProcessor(sdk_trace_export.ConsoleSpanExporter())
            )

        meter_provider = sdk_metrics.MeterProvider(resource=resource, metric_readers=readers)
        metrics.set_meter_provider(meter_provider)
        trace.set_tracer_provider(tracer_provider)
        logger.debug(
            "OpenTelemetry SDK initialized (otlp=%s, console=%s)",
            bool(self._cfg.otlp_endpoint),
            self._cfg.enable_console,
        )
        return meter_provider, tracer_provider

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        """Increment a counter metric.

        Examples:
            - incr("llm.queries.total", {"provider": "github"})
            - incr("llm.errors.total", {"error_type": "ExecutionError"})
        """
        if name not in self._counters:
            self._counters[name] = self._meter.create_counter(
                name=name,
                description=f"Counter for {name}",
            )
        self._counters[name].add(1, attributes=_attributes(tags))

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        """Observe a value for histogram metric, e.g. observe("llm.query.latency_ms", 812.5)."""
        if name not in self._histograms:
            self._histograms[name] = self._meter.create_histogram(
                name=name,
                description=f"Histogram for {name}",
            )
        self._histograms[name].record(value, attributes=_attributes(tags))

    def gauge(self, name: str, value: int | float, tags: dict[str, Any] | None = None) -> None:
        """Record the latest value of a gauge, e.g. gauge("llm.input_tokens", 7500, attrs)."""
        if name not in self._gauges:
            self._gauges[name] = self._meter.create_gauge(
                name=name,
                description=f"Gauge for {name}",
            )
        self._gauges[name].set(value, attributes=_attributes(tags))

    @contextmanager
    def span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[SpanIds]:
        with self._tracer.start_as_current_span(name, attributes=_attributes(attributes)) as span:
            ctx = span.get_span_context()
            ids = SpanIds(
                trace_id=trace.format_trace_id(ctx.trace_id),
                span_id=trace.format_span_id(ctx.span_id),
            )
            span.set_attribute("trace_id", ids.trace_id)
            span.set_attribute("span_id", ids.span_id)
            yield ids
