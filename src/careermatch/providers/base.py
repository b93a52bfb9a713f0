"""Provider contracts for chat completion and embeddings.

The orchestrator and memory store depend only on these Protocols, so
tests can substitute scripted fakes for the SDK-backed implementations.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class ToolCallRequest:
    """A single tool invocation requested by the model."""

    id: str
    name: str
    arguments: str = "{}"

    def parse_arguments(self) -> dict[str, Any]:
        """Decode the JSON arguments; anything but a JSON object yields {}."""
        try:
            args = json.loads(self.arguments or "{}")
        except json.JSONDecodeError:
            return {}
        return args if isinstance(args, dict) else {}

    def to_message(self) -> dict[str, Any]:
        """Render in the OpenAI assistant-message tool_calls format."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass(frozen=True)
class Completion:
    """Model output for one turn: final content or tool requests."""

    content: str | None = None
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    finish_reason: str | None = None

    @property
    def wants_tools(self) -> bool:
        return bool(self.tool_calls)

    def to_message(self) -> dict[str, Any]:
        """Render as an assistant message for the transcript."""
        message: dict[str, Any] = {"role": "assistant", "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [tc.to_message() for tc in self.tool_calls]
        return message


class ChatCompletionProvider(Protocol):
    """OpenAI-compatible chat/tool-calling backend."""

    model: str

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str = "auto",
        temperature: float = 0.3,
    ) -> Completion:
        ...

    async def complete_text(self, prompt: str, system: str | None = None) -> str:
        ...


class EmbeddingProvider(Protocol):
    """Converts text to a fixed-dimension vector."""

    dimensions: int

    async def embed(self, text: str) -> list[float]:
        ...
