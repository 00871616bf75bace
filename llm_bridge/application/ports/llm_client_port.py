from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from llm_bridge.application.ports.context import CallContext
from llm_bridge.domain.models import ConversationMessage, LLMResponse, ToolDefinition


@runtime_checkable
class LLMClientPort(Protocol):
    """Contract every provider client satisfies so callers can swap backends freely."""

    def send_query(
        self,
        ctx: CallContext,
        history: Sequence[ConversationMessage],
        tools: Sequence[ToolDefinition] = (),
    ) -> LLMResponse: ...

    def is_retryable(self, error: BaseException | None) -> bool:
        """Whether a failed call may be repeated as-is."""
        ...
