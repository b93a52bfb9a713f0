"""Agent loop implementation."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..conversation_logger import ConversationLogger, get_conversation_logger
from ..errors import ProviderError
from ..memory.store import MemoryStore
from ..providers.base import ChatCompletionProvider
from ..tools import AgentContext, ToolContext, ToolRegistry
from .prompt import build_system_prompt
from .response import AgentResponse, Fallback, parse_agent_response

if TYPE_CHECKING:
    from ..config import Settings
    from .reflection import ReflectionWriter

EXHAUSTED_MESSAGE = (
    "I couldn't finish that request within the allowed number of steps. "
    "Please try again or narrow it down."
)
CANCELLED_MESSAGE = "The request was cancelled before it finished."


class StopReason(Enum):
    """Reasons for stopping the agent loop."""

    COMPLETE = "complete"
    MAX_TURNS = "max_turns"
    CANCELLED = "cancelled"


@dataclass
class AgentConfig:
    """Configuration for the agent loop."""

    temperature: float = 0.3
    max_turns: int = 5
    memory_limit: int = 5
    memory_threshold: float = 0.7

    @classmethod
    def from_settings(cls, settings: Settings) -> AgentConfig:
        return cls(
            temperature=settings.temperature,
            max_turns=settings.max_turns,
            memory_limit=settings.memory_limit,
            memory_threshold=settings.memory_threshold,
        )


@dataclass
class ChatResult:
    """Result from running the agent loop."""

    response: AgentResponse
    stop_reason: StopReason
    turns: int
    tool_calls: list[dict[str, Any]] = field(default_factory=list)

    @property
    def exhausted(self) -> bool:
        """True when the turn budget ran out before a final answer."""
        return self.stop_reason == StopReason.MAX_TURNS


class AgentLoop:
    """Bounded plan → act → observe loop over a tool-calling model.

    Holds no per-session state: everything a call needs arrives through
    its parameters or the store, so concurrent chats are independent.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        provider: ChatCompletionProvider,
        store: MemoryStore,
        config: AgentConfig | None = None,
        reflection: ReflectionWriter | None = None,
        conversation_logger: ConversationLogger | None = None,
    ) -> None:
        self.registry = registry
        self.provider = provider
        self.store = store
        self.config = config or AgentConfig()
        self.reflection = reflection
        self.conv_logger = conversation_logger or get_conversation_logger()

    async def build_prompt(
        self, user_id: str, message: str, profile: dict[str, Any] | None
    ) -> str:
        """Assemble the system prompt from stored facts and retrieved memories."""
        facts = self.store.get_facts(user_id)
        memories = await self.store.search_memories(
            user_id,
            message,
            limit=self.config.memory_limit,
            threshold=self.config.memory_threshold,
        )
        return build_system_prompt(facts, memories, profile)

    async def chat(
        self,
        user_id: str,
        message: str,
        context: AgentContext,
        profile: dict[str, Any] | None = None,
        extra: dict[str, Any] | None = None,
        cancel_event: asyncio.Event | None = None,
        timeout: float | None = None,
    ) -> ChatResult:
        """Run the agent loop for one user message.

        Args:
            user_id: The user the conversation belongs to.
            message: The current user message.
            context: Ambient session/job/resume identifiers.
            profile: Optional profile snapshot for the system prompt.
            extra: Caller-supplied domain context merged into tool context.
            cancel_event: Set to stop issuing new iterations; also handed
                          to tools so they can abort cooperatively.
            timeout: Seconds after which no new iteration starts.

        Returns:
            ChatResult with the structured response and stop metadata.

        Raises:
            ProviderError: A model or embedding call failed.
        """
        session_id = context.session_id
        self.conv_logger.log_user_message(session_id, user_id, message)

        try:
            system_prompt = await self.build_prompt(user_id, message, profile)
        except ProviderError as e:
            self.conv_logger.log_error(session_id, str(e), context="memory_search")
            raise

        messages: list[dict[str, Any]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": message},
        ]
        tools = self.registry.list_descriptors()
        tool_context = ToolContext.from_agent_context(
            user_id, context, extra=extra, cancel_event=cancel_event
        )
        deadline = time.monotonic() + timeout if timeout is not None else None

        tool_calls_log: list[dict[str, Any]] = []
        last_content: str | None = None
        turns = 0
        stop_reason = StopReason.MAX_TURNS
        response: AgentResponse | None = None

        while turns < self.config.max_turns:
            if tool_context.cancelled or (
                deadline is not None and time.monotonic() >= deadline
            ):
                stop_reason = StopReason.CANCELLED
                break

            turns += 1
            self.conv_logger.log_llm_request(
                session_id,
                model=getattr(self.provider, "model", "unknown"),
                messages_count=len(messages),
                tools_count=len(tools),
            )

            # Plan
            try:
                completion = await self.provider.complete(
                    messages,
                    tools,
                    tool_choice="auto",
                    temperature=self.config.temperature,
                )
            except ProviderError as e:
                self.conv_logger.log_error(session_id, str(e), context="chat_completion")
                raise

            self.conv_logger.log_llm_response(
                session_id,
                has_content=bool(completion.content),
                tool_calls_count=len(completion.tool_calls),
                finish_reason=completion.finish_reason,
            )
            messages.append(completion.to_message())
            if completion.content:
                last_content = completion.content

            if not completion.wants_tools:
                outcome = parse_agent_response(completion.content or "")
                if isinstance(outcome, Fallback):
                    self.conv_logger.log_error(
                        session_id, outcome.reason, context="response_parse"
                    )
                response = outcome.response
                stop_reason = StopReason.COMPLETE
                break

            # Act, then observe
            for tool_call in completion.tool_calls:
                tool_args = tool_call.parse_arguments()
                self.conv_logger.log_tool_call(
                    session_id, tool_call.name, tool_args, tool_call.id
                )

                start_time = time.monotonic()
                result = await self.registry.dispatch(tool_call.name, tool_args, tool_context)
                duration_ms = (time.monotonic() - start_time) * 1000

                content = result.to_content()
                self.conv_logger.log_tool_result(
                    session_id,
                    tool_name=tool_call.name,
                    success=result.success,
                    output=content,
                    tool_call_id=tool_call.id,
                    error=result.error,
                    duration_ms=duration_ms,
                )
                tool_calls_log.append({
                    "id": tool_call.id,
                    "name": tool_call.name,
                    "args": tool_args,
                    "success": result.success,
                })
                messages.append({
                    "role": "tool",
                    "tool_call_id": tool_call.id,
                    "content": content,
                })

        if response is None:
            fallback = EXHAUSTED_MESSAGE
            if stop_reason == StopReason.CANCELLED:
                fallback = CANCELLED_MESSAGE
            response = AgentResponse(
                content=last_content or fallback,
                metadata={"stop_reason": stop_reason.value},
            )

        self.conv_logger.log_assistant_message(session_id, response.content)
        self.conv_logger.log_agent_stop(
            session_id,
            stop_reason=stop_reason.value,
            turns=turns,
            tool_calls_total=len(tool_calls_log),
        )

        if self.reflection is not None and stop_reason != StopReason.CANCELLED:
            self.reflection.schedule(user_id, message, response.content, session_id)

        return ChatResult(
            response=response,
            stop_reason=stop_reason,
            turns=turns,
            tool_calls=tool_calls_log,
        )
