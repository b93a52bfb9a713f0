"""Memory tool for explicit fact recording."""

from typing import Any

from ..tools.base import Tool, ToolContext
from .models import Fact, FactCategory
from .store import MemoryStore


class RememberFactTool(Tool):
    """Tool for saving a fact the user explicitly states about themselves."""

    def __init__(self, store: MemoryStore) -> None:
        """Initialize with a memory store.

        Args:
            store: The MemoryStore for persistence.
        """
        self.store = store

    @property
    def name(self) -> str:
        return "remember_fact"

    @property
    def description(self) -> str:
        return (
            "Save a durable fact about the user (a skill, preference, career goal "
            "or constraint). Use only when the user explicitly states it or asks "
            "you to remember it."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "description": "Kind of fact",
                    "enum": [c.value for c in FactCategory],
                },
                "content": {
                    "type": "string",
                    "description": (
                        "The fact in third person, e.g. 'User prefers remote roles'"
                    ),
                },
                "confidence": {
                    "type": "number",
                    "description": "Confidence between 0 and 1 (default 1)",
                },
            },
            "required": ["category", "content"],
        }

    async def execute(self, args: dict[str, Any], context: ToolContext) -> Any:
        content = str(args.get("content", "")).strip()
        if not content:
            return {"success": False, "error": "'content' must not be empty"}

        raw_confidence = args.get("confidence")
        confidence = float(raw_confidence) if raw_confidence is not None else 1.0
        if not 0.0 <= confidence <= 1.0:
            return {"success": False, "error": "'confidence' must be between 0 and 1"}

        saved = self.store.add_fact(
            context.user_id,
            Fact(
                user_id=context.user_id,
                category=FactCategory(args["category"]),
                content=content,
                confidence=confidence,
                is_verified=True,
                source="explicit",
            ),
        )
        return {"success": True, "factId": saved.id, "message": "Fact saved"}
