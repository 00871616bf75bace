"""GitHub Copilot CLI client.

There is no Python SDK for GitHub Copilot, so this adapter drives the
`copilot` command-line tool inside a sandbox: one prompt in, the markdown
answer on stdout, a usage summary on stderr.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from llm_bridge.application.ports.context import CallContext
from llm_bridge.application.ports.llm_client_port import LLMClientPort
from llm_bridge.application.ports.sandbox_port import SandboxPort
from llm_bridge.domain.models import (
    ConversationMessage,
    Endpoint,
    LLMResponse,
    TokenUsage,
    ToolCall,
    ToolDefinition,
)
from llm_bridge.domain.services.model_names import GITHUB_MODEL_PREFIXES, strip_model_prefix
from llm_bridge.domain.services.prompt_selection import select_prompt
from llm_bridge.domain.services.usage_parsing import extract_token_usage

logger = logging.getLogger(__name__)

COPILOT_BIN = "copilot"
TOKEN_ENV_VAR = "GITHUB_TOKEN"
DEFAULT_WORKDIR = "/workspace"
CONTENT_TYPE = "text/markdown"

# Metric names shared with the other provider clients.
LLM_INPUT_TOKENS = "llm.input_tokens"
LLM_OUTPUT_TOKENS = "llm.output_tokens"
LLM_INPUT_TOKENS_CACHE_READS = "llm.input_tokens.cache_reads"
LLM_SANDBOX_DURATION_MS = "llm.sandbox.duration_ms"


@dataclass
class CopilotCLIAdapter(LLMClientPort):
    endpoint: Endpoint
    sandbox: SandboxPort
    workdir: str = DEFAULT_WORKDIR
    model_prefixes: Sequence[str] = GITHUB_MODEL_PREFIXES

    @property
    def model(self) -> str:
        """Model name as the Copilot CLI knows it (alias prefix removed)."""
        return strip_model_prefix(self.endpoint.model, self.model_prefixes)

    def build_command(self, model: str, prompt: str) -> list[str]:
        return [COPILOT_BIN, "--model", model, "--prompt", prompt, "--stream", "off"]

    def send_query(
        self,
        ctx: CallContext,
        history: Sequence[ConversationMessage],
        tools: Sequence[ToolDefinition] = (),
    ) -> LLMResponse:
        # The CLI takes a single --prompt and keeps no chat state between runs,
        # so only the last (user) turn is sent.
        prompt = select_prompt(history)
        model = self.model

        if tools:
            logger.debug("ignoring %d tool definition(s); copilot cli has no tool calls", len(tools))

        attrs = {
            "model": model,
            "provider": self.endpoint.provider,
        }
        with ctx.telemetry.span(
            "copilot.send_query",
            attributes={"content_type": CONTENT_TYPE, **attrs},
        ) as ids:
            attrs["trace_id"] = ids.trace_id
            attrs["span_id"] = ids.span_id

            logger.debug("dispatching copilot cli (model=%s, turns=%d)", model, len(history))
            outcome = "error"
            started = time.monotonic()
            try:
                result = self.sandbox.run(
                    self.build_command(model, prompt),
                    env={TOKEN_ENV_VAR: self.endpoint.credential},
                    workdir=self.workdir,
                    cancel=ctx.cancel,
                )
                outcome = "ok"
            finally:
                ctx.telemetry.observe(
                    LLM_SANDBOX_DURATION_MS,
                    (time.monotonic() - started) * 1000,
                    {**attrs, "outcome": outcome},
                )

            parsed = extract_token_usage(result.stderr)
            if parsed is None:
                logger.warning(
                    "no token usage found in copilot cli diagnostics (model=%s)",
                    model,
                    extra={"_extra": {"model": model, "provider": self.endpoint.provider}},
                )
                usage = TokenUsage()
            else:
                logger.debug("copilot cli usage: %s", parsed)
                usage = parsed
            self._record_usage(ctx, usage, attrs)

        tool_calls: tuple[ToolCall, ...] = ()
        return LLMResponse(content=result.stdout, tool_calls=tool_calls, token_usage=usage)

    def is_retryable(self, error: BaseException | None) -> bool:
        # The CLI exposes no transient-failure signal, so nothing is retried.
        return False

    @staticmethod
    def _record_usage(ctx: CallContext, usage: TokenUsage, attrs: dict[str, str]) -> None:
        ctx.telemetry.gauge(LLM_INPUT_TOKENS, usage.input_tokens, attrs)
        ctx.telemetry.gauge(LLM_OUTPUT_TOKENS, usage.output_tokens, attrs)
        ctx.telemetry.gauge(LLM_INPUT_TOKENS_CACHE_READS, usage.cached_token_reads, attrs)
