"""Tool registry for describing and dispatching tools."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

from ..errors import ToolRegistrationError
from .base import Tool, ToolContext, ToolResult

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Immutable name -> tool map built once at startup."""

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        registered: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in registered:
                raise ToolRegistrationError(f"Tool '{tool.name}' already registered")
            registered[tool.name] = tool
        self._tools = MappingProxyType(registered)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def get(self, name: str) -> Tool | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[str]:
        """List all registered tool names."""
        return list(self._tools.keys())

    def list_descriptors(self) -> list[dict[str, Any]]:
        """Tool catalog in function-calling format (name, description, schema)."""
        return [tool.get_schema() for tool in self._tools.values()]

    async def dispatch(
        self, tool_name: str, args: dict[str, Any], context: ToolContext
    ) -> ToolResult:
        """Dispatch a tool call by name.

        Never raises for tool-level problems: unknown names, invalid
        arguments, exceptions from `execute` and outputs of the form
        `{"success": false, ...}` all become failed results the model can
        react to.
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            return ToolResult(success=False, error=f"Tool '{tool_name}' not found")

        valid, error = tool.validate_args(args)
        if not valid:
            return ToolResult(success=False, error=error)

        try:
            output = await tool.execute(args, context)
        except Exception as e:
            logger.warning("Tool %s raised: %s", tool_name, e)
            return ToolResult(success=False, error=f"Tool execution failed: {e}")

        # Tools may report their own failure as {"success": false, "error": ...}
        if isinstance(output, dict) and output.get("success") is False:
            error = output.get("error") or f"Tool '{tool_name}' reported failure"
            return ToolResult(success=False, output=output, error=str(error))

        return ToolResult(success=True, output=output)
