# llm_bridge/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from llm_bridge.domain.errors import ValidationError


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


@dataclass(frozen=True)
class ConversationMessage:
    """One turn of a conversation. `role` accepts a Role or its string value."""

    role: Role
    content: str

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "role", Role(self.role))
        except ValueError as ex:
            raise ValidationError(f"unknown message role: {self.role!r}") from ex


@dataclass(frozen=True)
class ToolDefinition:
    """Tool schema offered to a model. Accepted by clients, never executed here."""

    name: str
    description: str = ""
    parameters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCall:
    id: str
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PromptRequest:
    """
    Conversation history plus the tools offered for this call.

    Built fresh per call; sequences are frozen into tuples on construction.
    """

    history: Sequence[ConversationMessage]
    tools: Sequence[ToolDefinition] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "history", tuple(self.history))
        object.__setattr__(self, "tools", tuple(self.tools or ()))


@dataclass(frozen=True)
class Endpoint:
    """
    Where a client sends its queries.

    - credential: secret token, never shown in repr
    - model:      model identifier as configured (may carry a provider alias prefix)
    - provider:   provider tag used for telemetry and client selection
    """

    credential: str = field(repr=False)
    model: str
    provider: str


@dataclass(frozen=True)
class TokenUsage:
    """
    Token accounting for one model invocation.

    Cache counters are informational and excluded from total_tokens.
    """

    input_tokens: int = 0
    output_tokens: int = 0
    cached_token_reads: int = 0
    cached_token_writes: int = 0
    total_tokens: int = 0

    def __post_init__(self) -> None:
        for name in (
            "input_tokens",
            "output_tokens",
            "cached_token_reads",
            "cached_token_writes",
            "total_tokens",
        ):
            if getattr(self, name) < 0:
                raise ValidationError(f"{name} must be >= 0")

    @classmethod
    def from_counts(
        cls,
        input_tokens: int,
        output_tokens: int,
        cached_token_reads: int = 0,
        cached_token_writes: int = 0,
    ) -> TokenUsage:
        """Build a usage record with total_tokens derived from input + output."""
        return cls(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cached_token_reads=cached_token_reads,
            cached_token_writes=cached_token_writes,
            total_tokens=input_tokens + output_tokens,
        )


@dataclass(frozen=True)
class LLMResponse:
    """Normalized answer returned by every LLM client."""

    content: str
    tool_calls: tuple[ToolCall, ...] = ()
    token_usage: TokenUsage = field(default_factory=TokenUsage)
