"""Tests for the meeting summary service."""

import json

import httpx
import pytest

from conftest import FakeInferenceClient
from meeting_scribe.config import Settings
from meeting_scribe.inference import GeminiInferenceClient
from meeting_scribe.inference.base import ResponseShape
from meeting_scribe.services.summary_service import analyze_meeting, build_summary_prompt, fallback_summary

SUMMARY = {
    "overview": "Weekly sync about the launch.",
    "keyDecisions": ["Launch moves to Friday"],
    "actionItems": [
        {"id": None, "task": "Update the release notes", "assignee": "Bob", "dueDate": "Thursday", "priority": "HIGH"},
        {"id": 7, "task": "Book the room", "priority": "urgent"},
    ],
    "keyTopics": ["launch"],
    "nextSteps": ["Meet again Monday"],
}


def test_prompt_contains_transcript():
    prompt = build_summary_prompt("  Bob: we ship Friday.  ")
    assert prompt.endswith("Meeting transcript:\nBob: we ship Friday.")
    assert '"keyDecisions"' in prompt


@pytest.mark.asyncio
async def test_summary_parsed():
    client = FakeInferenceClient("```json\n" + json.dumps(SUMMARY) + "\n```")
    summary = await analyze_meeting("Bob: we ship Friday.", client)
    assert client.calls[0][1] == ResponseShape.OBJECT
    assert summary.overview == "Weekly sync about the launch."
    assert summary.key_decisions == ["Launch moves to Friday"]
    first, second = summary.action_items
    assert (first.id, first.priority, first.due_date) == ("action_1", "high", "Thursday")
    assert (second.id, second.priority, second.assignee) == ("7", "medium", None)


@pytest.mark.asyncio
async def test_no_client_returns_fallback():
    assert await analyze_meeting("text", None) == fallback_summary()


@pytest.mark.asyncio
async def test_inference_failure_returns_fallback(failing_inference):
    summary = await analyze_meeting("text", failing_inference)
    assert summary.key_topics == ["Audio transcription completed"]
    assert summary.next_steps == ["Review transcription manually"]


@pytest.mark.asyncio
async def test_invalid_structure_returns_fallback():
    client = FakeInferenceClient('{"overview": "x", "actionItems": [{"assignee": "Bob"}]}')
    assert await analyze_meeting("text", client) == fallback_summary()


def test_fallback_serializes_with_camel_case():
    data = fallback_summary().model_dump(by_alias=True)
    assert set(data) == {"overview", "keyDecisions", "actionItems", "keyTopics", "nextSteps"}


@pytest.mark.asyncio
async def test_malformed_service_response_returns_fallback():
    settings = Settings(GEMINI_API_KEY="g-key", GEMINI_MODELS="model-a")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=["not", "an", "object"]))
    client = GeminiInferenceClient(settings, transport=transport)
    assert await analyze_meeting("We agreed.", client) == fallback_summary()


@pytest.mark.asyncio
async def test_unexpected_client_error_returns_fallback():
    client = FakeInferenceClient(error=RuntimeError("client bug"))
    assert await analyze_meeting("We agreed.", client) == fallback_summary()
