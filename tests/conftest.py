"""Shared fakes for recognizer and inference tests (no network calls)."""

from typing import Optional

import pytest

from meeting_scribe.asr.base import RecognitionResult, SpeechRecognizer, Utterance
from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import InferenceClient, ResponseShape


class FakeInferenceClient(InferenceClient):
    """Returns a canned response (or raises) and records every prompt."""

    def __init__(self, response: str = "", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: list[tuple[str, ResponseShape]] = []

    async def generate(self, prompt: str, shape: ResponseShape) -> str:
        self.calls.append((prompt, shape))
        if self.error is not None:
            raise self.error
        return self.response


class FakeRecognizer(SpeechRecognizer):
    def __init__(self, result: Optional[RecognitionResult] = None, error: Optional[Exception] = None):
        self.result = result or RecognitionResult()
        self.error = error
        self.calls: list[tuple[bytes, str]] = []

    async def recognize(self, audio: bytes, content_type: str) -> RecognitionResult:
        self.calls.append((audio, content_type))
        if self.error is not None:
            raise self.error
        return self.result


def utt(voice_id: int, text: str, start: float = 0.0, end: float = 1.0, confidence: Optional[float] = 0.8) -> Utterance:
    return Utterance(voice_id=voice_id, text=text, start=start, end=end, confidence=confidence)


@pytest.fixture
def failing_inference():
    return FakeInferenceClient(error=InferenceError("service unavailable"))
