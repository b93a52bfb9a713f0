"""Tests for resume analysis."""

import pytest

from careermatch.tools import AnalyzeResumeTool, LLMResumeParser, ToolContext
from fakes import ScriptedProvider

RESUME_JSON = '{"personal_info": {"full_name": "Ana"}, "skills": [{"name": "Python"}]}'


@pytest.mark.asyncio
async def test_parser_returns_structured_data():
    provider = ScriptedProvider(text_responses=[RESUME_JSON])

    data = await LLMResumeParser(provider).parse("Ana, Python developer")

    assert data["skills"] == [{"name": "Python"}]
    assert provider.text_calls[0].endswith("Ana, Python developer")


@pytest.mark.asyncio
async def test_parser_strips_code_fence():
    provider = ScriptedProvider(text_responses=[f"```json\n{RESUME_JSON}\n```"])
    data = await LLMResumeParser(provider).parse("resume")
    assert data["personal_info"]["full_name"] == "Ana"


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["not json", "[1, 2]"])
async def test_parser_rejects_bad_output(reply):
    provider = ScriptedProvider(text_responses=[reply])
    with pytest.raises(ValueError):
        await LLMResumeParser(provider).parse("resume")


@pytest.mark.asyncio
async def test_analyze_resume_tool():
    tool = AnalyzeResumeTool(LLMResumeParser(ScriptedProvider(text_responses=[RESUME_JSON])))

    result = await tool.execute({"content": "resume text"}, ToolContext(user_id="u1", session_id="s1"))

    assert result["success"] is True
    assert result["data"]["skills"][0]["name"] == "Python"
