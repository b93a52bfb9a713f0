"""Chat-completion provider backed by AsyncGroq."""

from __future__ import annotations

import os
from typing import Any

import groq
from groq import AsyncGroq

from ..config import DEFAULT_MODEL
from ..errors import ProviderError
from .base import Completion, ToolCallRequest


class GroqChatProvider:
    """ChatCompletionProvider implementation that wraps AsyncGroq.

    Example:
        from groq import AsyncGroq
        from careermatch.providers import GroqChatProvider

        provider = GroqChatProvider(AsyncGroq(api_key="..."))
        completion = await provider.complete(messages, tools)
    """

    def __init__(
        self,
        client: AsyncGroq | None = None,
        model: str = DEFAULT_MODEL,
    ) -> None:
        """Initialize the provider.

        Args:
            client: The AsyncGroq client. Built from GROQ_API_KEY if omitted.
            model: The model identifier used for every request.
        """
        self._client = client or AsyncGroq(api_key=os.getenv("GROQ_API_KEY"))
        self.model = model

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str = "auto",
        temperature: float = 0.3,
    ) -> Completion:
        """Request one model turn with the given tool catalog."""
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                tools=tools or None,
                tool_choice=tool_choice if tools else None,
                temperature=temperature,
            )
        except groq.APIError as e:
            raise ProviderError(f"Chat completion failed: {e}") from e

        choice = response.choices[0]
        message = choice.message
        tool_calls = [
            ToolCallRequest(
                id=tc.id,
                name=tc.function.name,
                arguments=tc.function.arguments or "{}",
            )
            for tc in (message.tool_calls or [])
        ]
        return Completion(
            content=message.content,
            tool_calls=tool_calls,
            finish_reason=choice.finish_reason,
        )

    async def complete_text(self, prompt: str, system: str | None = None) -> str:
        """Complete a prompt without tools and return the text response."""
        messages: list[dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=0.1,
            )
        except groq.APIError as e:
            raise ProviderError(f"Chat completion failed: {e}") from e

        return response.choices[0].message.content or ""
