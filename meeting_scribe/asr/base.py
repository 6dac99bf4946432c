"""
SpeechRecognizer: abstract interface for a diarizing speech-to-text service.

Implementations: DeepgramRecognizer.
The recognizer is a black box: it returns utterances already split by voice,
each with a numeric voice id. We never re-derive diarization from audio.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Utterance:
    """One recognized utterance. start/end in seconds from the start of the recording."""

    voice_id: int
    text: str
    start: float
    end: float
    confidence: Optional[float] = None  # 0.0-1.0; None when the provider did not report one


@dataclass
class RecognitionResult:
    """Result of one recognize call."""

    utterances: list[Utterance] = field(default_factory=list)
    full_text: str = ""


class SpeechRecognizer(ABC):
    """
    Abstract recognizer. Accepts raw audio bytes in any container the
    provider understands; content_type is forwarded as-is.
    """

    @abstractmethod
    async def recognize(self, audio: bytes, content_type: str) -> RecognitionResult:
        """
        Transcribe and diarize one recording.
        Raises UpstreamServiceError when the provider call fails.
        """
        ...
