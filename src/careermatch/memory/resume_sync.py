"""Derive facts from a parsed resume."""

from typing import Any

from .models import Fact, FactCategory
from .store import MemoryStore

RESUME_FACT_CONFIDENCE = 0.9
RESUME_FACT_SOURCE = "resume_upload"
MAX_SKILLS = 10


def extract_resume_facts(user_id: str, parsed: dict[str, Any]) -> list[Fact]:
    """Build fact drafts from parsed resume data.

    Produces at most one fact each for top skills, current role, first
    education entry and location.
    """
    facts: list[Fact] = []

    def add(category: FactCategory, content: str) -> None:
        facts.append(
            Fact(
                user_id=user_id,
                category=category,
                content=content,
                confidence=RESUME_FACT_CONFIDENCE,
                source=RESUME_FACT_SOURCE,
            )
        )

    skills = [s.get("name") for s in parsed.get("skills") or [] if s.get("name")]
    if skills:
        add(FactCategory.SKILL, f"User has skills: {', '.join(skills[:MAX_SKILLS])}")

    current = next(
        (w for w in parsed.get("work_experiences") or [] if w.get("is_current")),
        None,
    )
    if current:
        add(
            FactCategory.CAREER_GOAL,
            f"User is currently working as {current.get('position')} at {current.get('company')}",
        )

    education = (parsed.get("education") or [None])[0]
    if education:
        add(
            FactCategory.OTHER,
            f"User studied {education.get('major')} at {education.get('institution')}",
        )

    location = (parsed.get("personal_info") or {}).get("location")
    if location:
        add(FactCategory.PREFERENCE, f"User is located in {location}")

    return facts


def sync_resume_facts(store: MemoryStore, user_id: str, parsed: dict[str, Any]) -> list[Fact]:
    """Persist the facts derived from a parsed resume and return them."""
    return [store.add_fact(user_id, fact) for fact in extract_resume_facts(user_id, parsed)]
