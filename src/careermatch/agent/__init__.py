"""Agent loop, context assembly, response parsing and reflection."""

from .loop import AgentConfig, AgentLoop, ChatResult, StopReason
from .prompt import build_system_prompt
from .reflection import ReflectionWriter, summarize_turn
from .response import (
    AgentAction,
    AgentResponse,
    Fallback,
    Parsed,
    parse_agent_response,
)

__all__ = [
    "AgentAction",
    "AgentConfig",
    "AgentLoop",
    "AgentResponse",
    "ChatResult",
    "Fallback",
    "Parsed",
    "ReflectionWriter",
    "StopReason",
    "build_system_prompt",
    "parse_agent_response",
    "summarize_turn",
]
