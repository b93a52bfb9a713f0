"""Data models for the memory system."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FactCategory(str, Enum):
    """Allowed categories for a user fact."""

    PREFERENCE = "preference"
    SKILL = "skill"
    CAREER_GOAL = "career_goal"
    CONSTRAINT = "constraint"
    OTHER = "other"


@dataclass(frozen=True)
class Fact:
    """A durable, structured belief about a user.

    Attributes:
        user_id: Owner of the fact.
        category: One of FactCategory.
        content: The fact in natural language.
        confidence: Value in [0, 1]. Validated by the caller, not the store.
        is_verified: Whether the user confirmed the fact.
        source: Origin, e.g. 'resume_upload', 'reflection', 'explicit'.
        id: Database ID, None for drafts.
        created_at: ISO timestamp when stored.
    """

    user_id: str
    category: FactCategory
    content: str
    confidence: float = 1.0
    is_verified: bool = False
    source: str | None = None
    id: int | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class Memory:
    """An embedded snippet of a past interaction.

    `similarity` is only populated on results of a similarity search.
    """

    user_id: str
    content: str
    embedding: list[float]
    importance: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)
    id: int | None = None
    created_at: str | None = None
    similarity: float | None = None
