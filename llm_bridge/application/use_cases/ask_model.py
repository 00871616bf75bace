# llm_bridge/application/use_cases/ask_model.py
from __future__ import annotations

import logging

from llm_bridge.application.dto.ask_dto import AskRequest
from llm_bridge.application.ports.context import CallContext
from llm_bridge.application.ports.llm_client_port import LLMClientPort
from llm_bridge.domain.errors import DomainError, ValidationError
from llm_bridge.domain.models import (
    ConversationMessage,
    LLMResponse,
    PromptRequest,
    Role,
)
from llm_bridge.domain.types import Result

logger = logging.getLogger(__name__)

LLM_QUERIES_TOTAL = "llm.queries.total"
LLM_QUERIES_FAILED = "llm.queries.failed"


class AskModel:
    """
    Application Use-Case: send one question to an LLM client.
    No I/O of its own; errors are returned via Result[T, E] unchanged.
    """

    def __init__(self, client: LLMClientPort) -> None:
        self.client = client

    def execute(self, req: AskRequest, ctx: CallContext) -> Result[LLMResponse, DomainError]:
        # 1) Validate
        if not req.question or not req.question.strip():
            return self._fail(ValidationError("question must not be empty"), ctx)

        # 2) Build the prompt request
        history: list[ConversationMessage] = []
        if req.system_prompt:
            history.append(ConversationMessage(role=Role.SYSTEM, content=req.system_prompt))
        history.extend(req.history)
        history.append(ConversationMessage(role=Role.USER, content=req.question))
        prompt = PromptRequest(history=history, tools=req.tools)

        # 3) Send
        ctx.telemetry.incr(LLM_QUERIES_TOTAL)
        try:
            response = self.client.send_query(ctx, prompt.history, prompt.tools)
        except DomainError as ex:
            return self._fail(ex, ctx)
        return Result.success(response)

    def _fail(self, error: DomainError, ctx: CallContext) -> Result[LLMResponse, DomainError]:
        retryable = self.client.is_retryable(error)
        logger.info("LLM query failed: %s (retryable=%s)", type(error).__name__, retryable)
        ctx.telemetry.incr(
            LLM_QUERIES_FAILED, {"error_type": type(error).__name__, "retryable": retryable}
        )
        return Result.failure(error)
