"""Per-call context handed to LLM clients.

Carries the telemetry handle and the caller's cancellation token explicitly
instead of relying on process-global tracing/metrics state.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from llm_bridge.application.ports.telemetry_port import TelemetryPort


@dataclass(frozen=True)
class CallContext:
    telemetry: TelemetryPort
    cancel: threading.Event = field(default_factory=threading.Event)

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()
