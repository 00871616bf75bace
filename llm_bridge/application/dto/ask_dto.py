# llm_bridge/application/dto/ask_dto.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from llm_bridge.domain.models import ConversationMessage, ToolDefinition


@dataclass(frozen=True)
class AskRequest:
    """
    DTO for asking a model a question.

    - question:      the user turn to send (non-empty)
    - history:       earlier turns, oldest first (accepted; single-prompt clients ignore them)
    - system_prompt: optional system message placed before the history
    - tools:         tool definitions offered to the model
    """

    question: str
    history: Sequence[ConversationMessage] = ()
    system_prompt: str | None = None
    tools: Sequence[ToolDefinition] = ()
