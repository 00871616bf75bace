"""Telemetry port for monitoring and metrics."""

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class SpanIds:
    """Hex-encoded identifiers of the active span (all zeros when not sampled)."""

    trace_id: str
    span_id: str


@runtime_checkable
class TelemetryPort(Protocol):
    """Port for telemetry and monitoring."""

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        """Increment a counter metric."""
        ...

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        """Observe a value for histogram/summary metric."""
        ...

    def gauge(self, name: str, value: int | float, tags: dict[str, Any] | None = None) -> None:
        """Record the current value of a gauge metric."""
        ...

    def span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> AbstractContextManager[SpanIds]:
        """Open a trace span for the duration of the `with` block."""
        ...
