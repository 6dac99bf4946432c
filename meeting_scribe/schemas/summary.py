"""Schemas for the analyze-meeting (summary) API."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SummaryRequest(BaseModel):
    """Request body for POST /api/analyze-meeting."""

    text: str = Field(..., min_length=1, description="Plain meeting transcript")


class ActionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    task: str
    assignee: Optional[str] = None
    due_date: Optional[str] = Field(None, alias="dueDate")
    priority: Literal["high", "medium", "low"] = "medium"

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> str:
        return "" if value is None else str(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: object) -> str:
        value = str(value or "").strip().lower()
        return value if value in ("high", "medium", "low") else "medium"


class MeetingSummary(BaseModel):
    """Structured summary; field aliases match the JSON the model is asked for."""

    model_config = ConfigDict(populate_by_name=True)

    overview: str = ""
    key_decisions: list[str] = Field(default_factory=list, alias="keyDecisions")
    action_items: list[ActionItem] = Field(default_factory=list, alias="actionItems")
    key_topics: list[str] = Field(default_factory=list, alias="keyTopics")
    next_steps: list[str] = Field(default_factory=list, alias="nextSteps")
