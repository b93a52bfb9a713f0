"""Structured agent response and tolerant parsing of final model content."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

ACTION_TYPES = frozenset({"navigate", "execute", "show_modal", "confirm"})


@dataclass(frozen=True)
class AgentAction:
    """A UI action the assistant proposes."""

    type: str
    target: str
    label: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "target": self.target, "label": self.label}


@dataclass(frozen=True)
class AgentResponse:
    """The structured reply returned to the caller."""

    content: str
    actions: list[AgentAction] | None = None
    suggestions: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, omitting absent optional fields."""
        data: dict[str, Any] = {"content": self.content}
        if self.actions is not None:
            data["actions"] = [a.to_dict() for a in self.actions]
        if self.suggestions is not None:
            data["suggestions"] = list(self.suggestions)
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> AgentResponse:
        """Validate a decoded JSON value. Raises ValueError on any mismatch."""
        if not isinstance(data, dict):
            raise ValueError("response must be a JSON object")

        content = data.get("content")
        if not isinstance(content, str):
            raise ValueError("'content' must be a string")

        actions = data.get("actions")
        if actions is not None:
            if not isinstance(actions, list):
                raise ValueError("'actions' must be a list")
            actions = [_parse_action(a) for a in actions]

        suggestions = data.get("suggestions")
        if suggestions is not None:
            if not isinstance(suggestions, list) or not all(
                isinstance(s, str) for s in suggestions
            ):
                raise ValueError("'suggestions' must be a list of strings")

        metadata = data.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise ValueError("'metadata' must be an object")

        return cls(
            content=content,
            actions=actions,
            suggestions=suggestions,
            metadata=metadata,
        )


def _parse_action(data: Any) -> AgentAction:
    if not isinstance(data, dict):
        raise ValueError("action must be an object")
    if data.get("type") not in ACTION_TYPES:
        raise ValueError(f"unknown action type: {data.get('type')!r}")
    target = data.get("target")
    label = data.get("label")
    if not isinstance(target, str) or not isinstance(label, str):
        raise ValueError("action target and label must be strings")
    return AgentAction(type=data["type"], target=target, label=label)


@dataclass(frozen=True)
class Parsed:
    """Final content honored the JSON response contract."""

    response: AgentResponse


@dataclass(frozen=True)
class Fallback:
    """Final content was free text or malformed JSON; kept verbatim."""

    raw_text: str
    reason: str

    @property
    def response(self) -> AgentResponse:
        return AgentResponse(content=self.raw_text)


ParseOutcome = Parsed | Fallback


def parse_agent_response(raw_text: str) -> ParseOutcome:
    """Interpret final model content. Never raises."""
    if not raw_text.strip().startswith("{"):
        return Fallback(raw_text, "not a JSON object")
    try:
        return Parsed(AgentResponse.from_dict(json.loads(raw_text)))
    except (json.JSONDecodeError, ValueError, RecursionError) as e:
        return Fallback(raw_text, str(e))
