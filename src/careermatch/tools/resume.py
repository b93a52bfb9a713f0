"""Resume analysis tool and its model-backed parser."""

from __future__ import annotations

import json
from typing import Any, Protocol

from ..providers.base import ChatCompletionProvider
from .base import Tool, ToolContext

RESUME_PARSE_PROMPT = """Extract structured information from the resume below.

Return ONLY valid JSON with this shape:
{
  "personal_info": {"full_name": "", "email": "", "phone": "", "location": "", "professional_summary": ""},
  "work_experiences": [{"company": "", "position": "", "start_date": "", "end_date": "", "is_current": false, "description": "", "achievements": [], "technologies": []}],
  "education": [{"institution": "", "degree": "", "major": "", "start_date": "", "end_date": ""}],
  "skills": [{"name": "", "level": "", "category": ""}],
  "projects": [{"name": "", "description": "", "technologies": []}]
}

Resume:
"""


class ResumeParser(Protocol):
    """Turns raw resume text into structured data."""

    async def parse(self, content: str) -> dict[str, Any]:
        ...


class LLMResumeParser:
    """ResumeParser that asks the chat model for structured JSON."""

    def __init__(self, provider: ChatCompletionProvider) -> None:
        self.provider = provider

    async def parse(self, content: str) -> dict[str, Any]:
        text = (await self.provider.complete_text(RESUME_PARSE_PROMPT + content)).strip()
        if text.startswith("```"):
            text = "\n".join(line for line in text.split("\n") if not line.startswith("```"))
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Resume parser returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Resume parser returned a non-object response")
        return data


class AnalyzeResumeTool(Tool):
    """Structure resume text into skills, experience and education."""

    def __init__(self, parser: ResumeParser) -> None:
        self.parser = parser

    @property
    def name(self) -> str:
        return "analyze_resume"

    @property
    def description(self) -> str:
        return (
            "Analyze a resume text content to extract structured information "
            "like skills, experience, and education."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "content": {
                    "type": "string",
                    "description": "The full text content of the resume to analyze",
                },
            },
            "required": ["content"],
        }

    async def execute(self, args: dict[str, Any], context: ToolContext) -> Any:
        data = await self.parser.parse(args["content"])
        return {"success": True, "data": data}
