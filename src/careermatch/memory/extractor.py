"""Fact extraction from a completed turn using the chat model."""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from ..providers.base import ChatCompletionProvider
from .models import Fact, FactCategory

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """Analyze this exchange between a job seeker and their career assistant and extract stable facts about the user worth remembering for future conversations.

Return ONLY valid JSON:
{
  "facts": [
    {"category": "<preference|skill|career_goal|constraint|other>", "content": "<fact in third person>", "confidence": <0..1>},
    ...
  ]
}

Rules:
- Only STABLE facts (no temporary states like "is tired")
- Content in THIRD PERSON ("User knows Python", not "I know Python")
- Do not record questions or hypotheses as facts
- If there are no new facts, return {"facts": []}

Exchange:
"""


class FactExtractor:
    """Extracts facts from a user/assistant exchange."""

    def __init__(self, provider: ChatCompletionProvider) -> None:
        self.provider = provider

    async def extract(self, user_id: str, user_message: str, assistant_content: str) -> list[Fact]:
        """Extract fact drafts from one exchange.

        Returns:
            List of extracted facts, empty if none found or on error.
        """
        if not user_message.strip():
            return []

        prompt = (
            EXTRACTION_PROMPT
            + f"User: {user_message}\nAssistant: {assistant_content}"
        )

        try:
            content = await self.provider.complete_text(prompt)
        except Exception as e:
            logger.warning(f"Fact extraction failed: {e}")
            return []

        return self._parse_response(user_id, content)

    def _parse_response(self, user_id: str, content: str) -> list[Fact]:
        """Parse the model response into fact drafts; empty on parse error."""
        json_str = content.strip()
        if json_str.startswith("```"):
            lines = [line for line in json_str.split("\n") if not line.startswith("```")]
            json_str = "\n".join(lines)

        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse extraction response: {e}")
            return []

        if not isinstance(data, dict) or not isinstance(data.get("facts"), list):
            logger.warning("Invalid response structure: missing 'facts' list")
            return []

        facts = []
        for item in data["facts"]:
            fact = self._to_fact(user_id, item)
            if fact is None:
                logger.warning(f"Skipping invalid fact item: {item}")
                continue
            facts.append(fact)
        return facts

    def _to_fact(self, user_id: str, item: Any) -> Fact | None:
        if not isinstance(item, dict):
            return None
        content = item.get("content")
        if not isinstance(content, str) or not content.strip():
            return None

        try:
            category = FactCategory(item.get("category"))
        except ValueError:
            category = FactCategory.OTHER

        try:
            confidence = float(item.get("confidence", 0.5))
        except (TypeError, ValueError):
            confidence = 0.5
        if not math.isfinite(confidence):
            confidence = 0.5
        confidence = min(max(confidence, 0.0), 1.0)

        return Fact(
            user_id=user_id,
            category=category,
            content=content.strip(),
            confidence=confidence,
            source="reflection",
        )
