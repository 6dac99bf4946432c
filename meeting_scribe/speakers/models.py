"""
Speaker labeling data structures.

Everything here lives for one pipeline run only; nothing is persisted or
shared between requests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Provenance(str, Enum):
    """Where a name came from. Lower rank = higher precedence."""

    INTRODUCTION = "introduction"
    INFERENCE = "inference"
    DEFAULT = "default"

    @property
    def rank(self) -> int:
        return _PROVENANCE_RANK[self]


_PROVENANCE_RANK = {
    Provenance.INTRODUCTION: 0,
    Provenance.INFERENCE: 1,
    Provenance.DEFAULT: 2,
}


@dataclass(frozen=True)
class NameCandidate:
    """A proposed name for one voice id, before consistency validation."""

    voice_id: int
    name: str
    provenance: Provenance


@dataclass
class InferenceOutcome:
    """
    What the contextual inference stage contributed.

    candidates: voice-level names (multi-voice mode).
    turn_labels: one label per utterance (collapsed-diarization mode), or None.
    """

    candidates: list[NameCandidate] = field(default_factory=list)
    turn_labels: Optional[list[str]] = None

    @property
    def is_empty(self) -> bool:
        return not self.candidates and self.turn_labels is None


@dataclass
class TranscriptSegment:
    """One labeled output segment. timestamp is "MM:SS - MM:SS"."""

    id: str
    speaker: str
    text: str
    timestamp: str
    confidence: float
