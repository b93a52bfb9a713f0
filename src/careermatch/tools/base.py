"""Base tool interface, execution context and result type."""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AgentContext:
    """Ambient per-call data supplied by the caller of the agent."""

    session_id: str
    job_id: str | None = None
    resume_id: str | None = None


@dataclass
class ToolContext:
    """Everything a tool may need beyond its arguments.

    `extra` carries caller-supplied domain context. Long-running tools
    should check `cancelled` and abort cooperatively.
    """

    user_id: str
    session_id: str
    job_id: str | None = None
    resume_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    cancel_event: asyncio.Event | None = None

    @classmethod
    def from_agent_context(
        cls,
        user_id: str,
        context: AgentContext,
        extra: dict[str, Any] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ToolContext:
        return cls(
            user_id=user_id,
            session_id=context.session_id,
            job_id=context.job_id,
            resume_id=context.resume_id,
            extra=dict(extra or {}),
            cancel_event=cancel_event,
        )

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


@dataclass
class ToolResult:
    """Outcome of a dispatched tool call.

    `output` is the tool's JSON-serializable return value on success.
    """

    success: bool
    output: Any = None
    error: str | None = None

    def to_content(self) -> str:
        """Serialize for the tool-result message sent back to the model."""
        if not self.success:
            return json.dumps({"success": False, "error": self.error})
        if isinstance(self.output, str):
            return self.output
        return json.dumps(self.output, ensure_ascii=False, default=str)


_TYPE_CHECKS: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "array": (list,),
    "object": (dict,),
}


class Tool(ABC):
    """Base interface for all tools.

    The description is sent to the model verbatim; changing its wording
    changes model behavior.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description for the model."""
        ...

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """JSON Schema for tool parameters."""
        ...

    @abstractmethod
    async def execute(self, args: dict[str, Any], context: ToolContext) -> Any:
        """Run the tool and return a JSON-serializable result."""
        ...

    def get_schema(self) -> dict[str, Any]:
        """Get tool schema for model function calling."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def validate_args(self, args: dict[str, Any]) -> tuple[bool, str | None]:
        """Validate arguments against schema. Returns (valid, error_message)."""
        required = self.parameters.get("required", [])
        properties = self.parameters.get("properties", {})

        for name in required:
            if name not in args:
                return False, f"Missing required argument: {name}"

        # Basic type validation only
        for key, value in args.items():
            if key not in properties or value is None:
                continue
            expected_type = properties[key].get("type")
            allowed = _TYPE_CHECKS.get(expected_type)
            if allowed is None:
                continue
            # bool is an int subclass
            if isinstance(value, bool) and expected_type in ("integer", "number"):
                return False, f"Argument '{key}' must be a {expected_type}"
            if not isinstance(value, allowed):
                return False, f"Argument '{key}' must be a {expected_type}"
            enum = properties[key].get("enum")
            if enum and value not in enum:
                return False, f"Argument '{key}' must be one of: {', '.join(map(str, enum))}"

        return True, None
