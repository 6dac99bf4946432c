"""
Transcribe + label: recognizer call, then the speaker labeling pipeline.

Fatal: no audio, missing recognizer key, recognizer failure, no utterances.
Everything after recognition is best-effort and always returns segments.
"""
from __future__ import annotations

import logging
from typing import Optional

from meeting_scribe.asr.base import SpeechRecognizer
from meeting_scribe.asr.deepgram import DeepgramRecognizer
from meeting_scribe.config import Settings, get_settings
from meeting_scribe.errors import InputError
from meeting_scribe.inference import get_inference_client
from meeting_scribe.inference.base import InferenceClient
from meeting_scribe.schemas.transcription import Segment, TranscriptionResponse
from meeting_scribe.speakers.pipeline import LabelingOptions, label_speakers

logger = logging.getLogger(__name__)


def get_speech_recognizer(settings: Settings | None = None) -> SpeechRecognizer:
    return DeepgramRecognizer(settings or get_settings())


async def transcribe_and_label(
    audio: bytes,
    content_type: str,
    recognizer: SpeechRecognizer,
    inference: Optional[InferenceClient],
    options: LabelingOptions,
) -> TranscriptionResponse:
    if not audio:
        raise InputError("No audio file provided")

    recognition = await recognizer.recognize(audio, content_type)
    if not recognition.utterances:
        raise InputError("No speech was recognized in the audio")

    segments = await label_speakers(recognition.utterances, inference, options)
    return TranscriptionResponse(
        transcription=[Segment.from_domain(s) for s in segments],
        full_text=recognition.full_text,
    )


async def transcribe_audio(audio: bytes, content_type: str, settings: Settings | None = None) -> TranscriptionResponse:
    """Entry point with recognizer and inference client chosen from config."""
    settings = settings or get_settings()
    return await transcribe_and_label(
        audio,
        content_type,
        recognizer=get_speech_recognizer(settings),
        inference=get_inference_client(settings),
        options=LabelingOptions.from_settings(settings),
    )
