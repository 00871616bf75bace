"""Application ports package.

Re-exports the ports that infrastructure adapters implement.
"""

from llm_bridge.application.ports.context import CallContext
from llm_bridge.application.ports.llm_client_port import LLMClientPort
from llm_bridge.application.ports.sandbox_port import ExecResult, SandboxPort
from llm_bridge.application.ports.telemetry_port import SpanIds, TelemetryPort

__all__ = [
    "CallContext",
    "ExecResult",
    "LLMClientPort",
    "SandboxPort",
    "SpanIds",
    "TelemetryPort",
]
