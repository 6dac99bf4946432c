"""Pydantic schemas for API request/response."""
from meeting_scribe.schemas.summary import ActionItem, MeetingSummary, SummaryRequest
from meeting_scribe.schemas.transcription import ErrorResponse, Segment, TranscriptionResponse

__all__ = [
    "ActionItem",
    "ErrorResponse",
    "MeetingSummary",
    "Segment",
    "SummaryRequest",
    "TranscriptionResponse",
]
