"""Tests for the remember_fact tool."""

import pytest

from careermatch.memory import FactCategory, MemoryStore, RememberFactTool
from careermatch.tools import ToolContext, ToolRegistry


@pytest.fixture
def tool(store: MemoryStore) -> RememberFactTool:
    return RememberFactTool(store)


@pytest.fixture
def context() -> ToolContext:
    return ToolContext(user_id="u1", session_id="s1")


def test_schema(tool: RememberFactTool):
    schema = tool.get_schema()
    assert schema["function"]["name"] == "remember_fact"
    params = schema["function"]["parameters"]
    assert params["required"] == ["category", "content"]
    assert params["properties"]["category"]["enum"] == [
        "preference", "skill", "career_goal", "constraint", "other"
    ]


@pytest.mark.asyncio
async def test_saves_verified_fact(tool: RememberFactTool, store: MemoryStore, context: ToolContext):
    result = await tool.execute(
        {"category": "preference", "content": "User prefers remote roles"}, context
    )

    assert result["success"] is True
    assert result["message"] == "Fact saved"
    [fact] = store.get_facts("u1", FactCategory.PREFERENCE)
    assert result["factId"] == fact.id
    assert fact.is_verified is True
    assert fact.source == "explicit"
    assert fact.confidence == 1.0


@pytest.mark.asyncio
async def test_blank_content_rejected(tool: RememberFactTool, store: MemoryStore, context: ToolContext):
    result = await tool.execute({"category": "skill", "content": "  "}, context)
    assert result["success"] is False
    assert store.get_facts("u1") == []


@pytest.mark.asyncio
async def test_confidence_out_of_range_rejected(
    tool: RememberFactTool, store: MemoryStore, context: ToolContext
):
    result = await tool.execute(
        {"category": "skill", "content": "User knows Rust", "confidence": 1.5}, context
    )
    assert result == {"success": False, "error": "'confidence' must be between 0 and 1"}
    assert store.get_facts("u1") == []


def test_invalid_category_fails_validation(tool: RememberFactTool):
    valid, error = tool.validate_args({"category": "hobby", "content": "x"})
    assert not valid
    assert "must be one of" in error


@pytest.mark.asyncio
async def test_null_confidence_defaults_to_one(
    tool: RememberFactTool, store: MemoryStore, context: ToolContext
):
    result = await tool.execute(
        {"category": "skill", "content": "User knows Rust", "confidence": None}, context
    )
    assert result["success"] is True
    [fact] = store.get_facts("u1")
    assert fact.confidence == 1.0


@pytest.mark.asyncio
async def test_rejected_fact_is_a_failed_dispatch(tool: RememberFactTool, context: ToolContext):
    registry = ToolRegistry([tool])

    result = await registry.dispatch(
        "remember_fact", {"category": "skill", "content": "x", "confidence": 2}, context
    )

    assert not result.success
    assert result.error == "'confidence' must be between 0 and 1"
