"""
Schemas for the transcribe-audio API.

Output: ordered speaker-labeled segments plus the recognizer's full transcript.
Errors: {"error": "..."} with a non-200 status.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from meeting_scribe.speakers.models import TranscriptSegment


class Segment(BaseModel):
    """One labeled utterance."""

    id: str = Field(..., description="segment_<index>, index in transcript order")
    speaker: str = Field(..., description="Resolved speaker name or default 'Speaker N'")
    text: str = Field(..., description="Trimmed utterance text")
    timestamp: str = Field(..., description="'MM:SS - MM:SS', floored seconds")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Recognizer confidence 0-1 (0.9 when absent)")

    @classmethod
    def from_domain(cls, segment: TranscriptSegment) -> "Segment":
        return cls(
            id=segment.id,
            speaker=segment.speaker,
            text=segment.text,
            timestamp=segment.timestamp,
            confidence=min(1.0, max(0.0, segment.confidence)),
        )


class TranscriptionResponse(BaseModel):
    """Response body for POST /api/transcribe-audio."""

    model_config = ConfigDict(populate_by_name=True)

    transcription: list[Segment] = Field(..., description="Segments, one per utterance, in order")
    full_text: str = Field("", alias="fullText", description="Recognizer's plain full transcript")


class ErrorResponse(BaseModel):
    error: str
