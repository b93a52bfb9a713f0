"""Tests for final-content parsing."""

import pytest

from careermatch.agent import AgentAction, AgentResponse, Fallback, Parsed, parse_agent_response


def test_valid_json_with_empty_actions():
    outcome = parse_agent_response('{"content":"hi","actions":[]}')
    assert isinstance(outcome, Parsed)
    assert outcome.response == AgentResponse(content="hi", actions=[])


def test_plain_text_falls_back():
    outcome = parse_agent_response("hello")
    assert isinstance(outcome, Fallback)
    assert outcome.response == AgentResponse(content="hello")


def test_malformed_json_falls_back():
    outcome = parse_agent_response("{not valid json")
    assert isinstance(outcome, Fallback)
    assert outcome.response.content == "{not valid json"


def test_full_response():
    raw = """{
      "content": "Saved **Engineer** at Acme.",
      "actions": [{"type": "navigate", "target": "/jobs/42", "label": "View job"}],
      "suggestions": ["Analyze match"],
      "metadata": {"intent": "save_job"}
    }"""
    response = parse_agent_response(raw).response
    assert response.actions == [AgentAction("navigate", "/jobs/42", "View job")]
    assert response.suggestions == ["Analyze match"]
    assert response.metadata == {"intent": "save_job"}


def test_leading_whitespace_allowed():
    outcome = parse_agent_response('  \n{"content": "hi"}')
    assert isinstance(outcome, Parsed)
    assert outcome.response.actions is None


@pytest.mark.parametrize(
    "raw",
    [
        '{"actions": []}',
        '{"content": 42}',
        '{"content": "x", "actions": [{"type": "teleport", "target": "/", "label": "Go"}]}',
        '{"content": "x", "actions": [{"type": "navigate", "target": "/"}]}',
        '{"content": "x", "actions": {}}',
        '{"content": "x", "suggestions": [1, 2]}',
        '{"content": "x", "metadata": []}',
    ],
)
def test_contract_violations_fall_back_to_raw_text(raw):
    outcome = parse_agent_response(raw)
    assert isinstance(outcome, Fallback)
    assert outcome.response == AgentResponse(content=raw)


def test_empty_content_falls_back():
    assert parse_agent_response("").response == AgentResponse(content="")


def test_json_array_is_not_a_response():
    outcome = parse_agent_response('["a"]')
    assert isinstance(outcome, Fallback)


def test_to_dict_omits_missing_fields():
    assert AgentResponse(content="hi").to_dict() == {"content": "hi"}
    assert AgentResponse(
        content="hi", actions=[AgentAction("confirm", "save", "Save")], suggestions=[]
    ).to_dict() == {
        "content": "hi",
        "actions": [{"type": "confirm", "target": "save", "label": "Save"}],
        "suggestions": [],
    }


def test_deeply_nested_json_falls_back():
    raw = '{"content": ' + "[" * 100_000 + "]" * 100_000 + "}"
    outcome = parse_agent_response(raw)
    assert isinstance(outcome, Fallback)
    assert outcome.response.content == raw
