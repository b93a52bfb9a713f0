"""System prompt assembly from profile, facts and memories."""

from collections.abc import Mapping, Sequence
from typing import Any

from ..memory.models import Fact, Memory

NO_PROFILE = "No profile data available."
NO_FACTS = "No facts yet."
NO_MEMORIES = "No relevant memories found."

PROFILE_FIELDS = (
    ("Name", "full_name"),
    ("Email", "email"),
    ("Location", "location"),
    ("Headline", "headline"),
    ("Summary", "professional_summary"),
)

SYSTEM_PROMPT = """You are CareerMatch AI, a proactive career assistant.
You have full access to the user's profile and data. DO NOT refuse to answer questions about the user's own information.

## User Profile
{profile}

## User Facts (Learned)
{facts}

## Relevant Memories
{memories}

## Instructions
- **You can access links**: the `scrape_job` and `batch_import_jobs` tools read any job URL. Never say you cannot open a link.
- **Single URL**: to analyze a posting, call `scrape_job`, then analyze the returned job against the user's profile and facts.
- **Multiple URLs**: call `batch_import_jobs` with the full list of URLs. Do not ask for permission first.
- **Saving**: after analyzing a scraped job, ask the user for explicit confirmation before calling `save_job`. Only call `save_job` once the user confirms.
- **Resumes**: when the user pastes resume text, call `analyze_resume` to structure it.
- **Facts**: call `remember_fact` only for stable facts the user explicitly states about themselves.
- **Proactive**: suggest next steps based on the user's goals.

## Output Format
If you are NOT calling a tool, you MUST return a single JSON object and nothing else:
{{
  "content": "Markdown formatted response",
  "actions": [
    {{ "type": "navigate", "target": "/jobs", "label": "Browse Jobs" }}
  ],
  "suggestions": ["Save this job", "Find similar jobs"],
  "metadata": {{ "intent": "job_search" }}
}}
Allowed action types: navigate, execute, show_modal, confirm."""


def _render_profile(profile: Mapping[str, Any] | None) -> str:
    if not profile:
        return NO_PROFILE
    return "\n".join(
        f"- {label}: {profile.get(key) or 'Unknown'}" for label, key in PROFILE_FIELDS
    )


def _render_bullets(items: Sequence[Fact] | Sequence[Memory], empty: str) -> str:
    if not items:
        return empty
    return "\n".join(f"- {item.content}" for item in items)


def build_system_prompt(
    facts: Sequence[Fact],
    memories: Sequence[Memory],
    profile: Mapping[str, Any] | None = None,
) -> str:
    """Render the system prompt.

    Pure and deterministic: identical inputs always produce identical text.

    Args:
        facts: Facts about the user, rendered in the given order.
        memories: Retrieved memories, rendered in the given order.
        profile: Profile snapshot (full_name, email, location, headline,
                 professional_summary), or None.

    Returns:
        Complete system prompt string.
    """
    return SYSTEM_PROMPT.format(
        profile=_render_profile(profile),
        facts=_render_bullets(facts, NO_FACTS),
        memories=_render_bullets(memories, NO_MEMORIES),
    )
