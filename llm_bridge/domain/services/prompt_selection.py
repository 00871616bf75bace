# llm_bridge/domain/services/prompt_selection.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

from collections.abc import Sequence

from llm_bridge.domain.errors import ValidationError
from llm_bridge.domain.models import ConversationMessage, Role


def select_prompt(history: Sequence[ConversationMessage]) -> str:
    """
    Return the active prompt: the content of the last message in `history`.

    Clients built on single-prompt tools accept a full history but only send
    its last turn, which must come from the user.
    """
    if not history:
        raise ValidationError(
            "conversation history cannot be empty - add a user message before sending"
        )

    prompt = history[-1]
    if prompt.role is not Role.USER:
        raise ValidationError(
            f"the last message in history must be from the user, got {prompt.role.value!r}"
        )
    return prompt.content
