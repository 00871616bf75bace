"""Tests for the port protocols."""

import threading
from contextlib import contextmanager

from llm_bridge.application.ports import (
    CallContext,
    ExecResult,
    LLMClientPort,
    SandboxPort,
    SpanIds,
    TelemetryPort,
)
from llm_bridge.domain.models import LLMResponse


class EchoClient:
    def send_query(self, ctx, history, tools=()):  # type: ignore[no-untyped-def]
        return LLMResponse(content=history[-1].content)

    def is_retryable(self, error):  # type: ignore[no-untyped-def]
        return False


class EchoSandbox:
    def run(self, command, env=None, workdir=None, cancel=None):  # type: ignore[no-untyped-def]
        return ExecResult(stdout=" ".join(command), stderr="")


class NullTelemetry:
    def incr(self, name, tags=None):  # type: ignore[no-untyped-def]
        pass

    def observe(self, name, value, tags=None):  # type: ignore[no-untyped-def]
        pass

    def gauge(self, name, value, tags=None):  # type: ignore[no-untyped-def]
        pass

    @contextmanager
    def span(self, name, attributes=None):  # type: ignore[no-untyped-def]
        yield SpanIds(trace_id="a" * 32, span_id="b" * 16)


def test_fakes_satisfy_protocols():
    assert isinstance(EchoClient(), LLMClientPort)
    assert isinstance(EchoSandbox(), SandboxPort)
    assert isinstance(NullTelemetry(), TelemetryPort)


def test_object_without_is_retryable_is_not_a_client():
    class Incomplete:
        def send_query(self, ctx, history, tools=()):  # type: ignore[no-untyped-def]
            return LLMResponse(content="")

    assert not isinstance(Incomplete(), LLMClientPort)


def test_exec_result_carries_both_streams():
    result = ExecResult(stdout="out", stderr="err")

    assert (result.stdout, result.stderr) == ("out", "err")


def test_call_context_owns_a_fresh_cancel_token():
    a = CallContext(telemetry=NullTelemetry())
    b = CallContext(telemetry=NullTelemetry())

    a.cancel.set()

    assert a.cancelled
    assert not b.cancelled


def test_call_context_uses_supplied_cancel_token():
    token = threading.Event()
    ctx = CallContext(telemetry=NullTelemetry(), cancel=token)

    token.set()

    assert ctx.cancelled
