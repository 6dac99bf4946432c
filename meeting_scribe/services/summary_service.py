"""
Meeting summary: one inference call that turns transcript text into a
structured summary. Never fails: any inference or validation problem
returns the fallback summary so the client still gets a 200.
"""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import InferenceClient, ResponseShape
from meeting_scribe.inference.parsing import extract_json
from meeting_scribe.schemas.summary import MeetingSummary

logger = logging.getLogger(__name__)

_SUMMARY_PROMPT = """Analyze this meeting transcript and summarize it as JSON with this structure:

{{
  "overview": "Brief overview of the meeting or conversation",
  "keyDecisions": ["Decisions made, agreements reached, conclusions drawn, or choices finalized"],
  "actionItems": [
    {{
      "id": "unique_id",
      "task": "specific action item or task mentioned",
      "assignee": "person assigned (if mentioned, otherwise null)",
      "dueDate": "due date (if mentioned, otherwise null)",
      "priority": "high|medium|low"
    }}
  ],
  "keyTopics": ["Main topics, subjects, or themes discussed"],
  "nextSteps": ["Future actions, follow-ups, or next meetings mentioned"]
}}

Guidelines:
- Look carefully for decisions. Informal agreements, commitments and resolutions count as decisions.
- Action items include any task, to-do, or responsibility mentioned.
- Be thorough but accurate. Do not invent information that is not in the transcript.

Meeting transcript:
{text}"""


def fallback_summary() -> MeetingSummary:
    return MeetingSummary(
        overview="Unable to generate AI summary due to API issues. Transcription was successful.",
        key_decisions=[],
        action_items=[],
        key_topics=["Audio transcription completed"],
        next_steps=["Review transcription manually"],
    )


def build_summary_prompt(text: str) -> str:
    return _SUMMARY_PROMPT.format(text=text.strip())


async def analyze_meeting(text: str, client: Optional[InferenceClient]) -> MeetingSummary:
    if client is None:
        logger.warning("Meeting summary requested but no inference backend is configured")
        return fallback_summary()

    try:
        raw = await client.generate(build_summary_prompt(text), ResponseShape.OBJECT)
        payload = extract_json(raw, ResponseShape.OBJECT)
        summary = MeetingSummary.model_validate(payload)
    except InferenceError as e:
        logger.warning("Meeting summary failed: %s", e)
        return fallback_summary()
    except ValidationError as e:
        logger.warning("Meeting summary had an unexpected structure: %s", e)
        return fallback_summary()
    except Exception as e:
        logger.exception("Meeting summary failed unexpectedly: %s", e)
        return fallback_summary()

    for index, item in enumerate(summary.action_items):
        if not item.id:
            item.id = f"action_{index + 1}"
    logger.info(
        "Meeting summary: %s decisions, %s action items, %s topics",
        len(summary.key_decisions), len(summary.action_items), len(summary.key_topics),
    )
    return summary
