"""
DeepgramRecognizer: pre-recorded transcription with diarization via Deepgram.

One POST per recording; utterances come back already grouped per voice.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from meeting_scribe.asr.base import RecognitionResult, SpeechRecognizer, Utterance
from meeting_scribe.config import Settings, get_settings
from meeting_scribe.errors import ConfigurationError, UpstreamServiceError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "audio/webm"


def _query_params(settings: Settings) -> dict[str, str]:
    return {
        "model": settings.DEEPGRAM_MODEL,
        "smart_format": "true",
        "punctuate": "true",
        "diarize": "true",
        "utterances": "true",
        "language": settings.DEEPGRAM_LANGUAGE,
        "multichannel": "false",
        "numerals": "true",
    }


def _parse_utterance(raw: dict[str, Any]) -> Utterance:
    confidence = raw.get("confidence")
    return Utterance(
        voice_id=int(raw.get("speaker", 0) or 0),
        text=str(raw.get("transcript", "") or ""),
        start=float(raw.get("start", 0.0) or 0.0),
        end=float(raw.get("end", 0.0) or 0.0),
        confidence=float(confidence) if confidence is not None else None,
    )


def parse_deepgram_response(data: dict[str, Any]) -> RecognitionResult:
    """Convert a Deepgram /v1/listen JSON body into a RecognitionResult."""
    results = data.get("results") or {}
    utterances = [_parse_utterance(u) for u in results.get("utterances") or [] if isinstance(u, dict)]

    full_text = ""
    channels = results.get("channels") or []
    if channels:
        alternatives = (channels[0] or {}).get("alternatives") or []
        if alternatives:
            full_text = (alternatives[0] or {}).get("transcript", "") or ""

    return RecognitionResult(utterances=utterances, full_text=full_text)


class DeepgramRecognizer(SpeechRecognizer):
    """
    Remote recognizer. Raises ConfigurationError when DEEPGRAM_API_KEY is
    unset, UpstreamServiceError on transport errors and non-2xx responses.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    async def recognize(self, audio: bytes, content_type: str) -> RecognitionResult:
        settings = self._settings
        api_key = (settings.DEEPGRAM_API_KEY or "").strip()
        if not api_key:
            raise ConfigurationError("DEEPGRAM_API_KEY is not configured")

        headers = {
            "Authorization": f"Token {api_key}",
            "Content-Type": content_type or DEFAULT_CONTENT_TYPE,
        }
        logger.info("Deepgram request: %s bytes, content_type=%s", len(audio), headers["Content-Type"])

        try:
            async with httpx.AsyncClient(
                timeout=settings.RECOGNIZER_TIMEOUT_SECONDS,
                transport=self._transport,
            ) as client:
                resp = await client.post(
                    settings.DEEPGRAM_URL,
                    params=_query_params(settings),
                    headers=headers,
                    content=audio,
                )
        except httpx.HTTPError as e:
            logger.error("Deepgram request failed: %s", e)
            raise UpstreamServiceError(f"Deepgram request failed: {e}") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            raise UpstreamServiceError(
                f"Deepgram API error: {resp.status_code} - {resp.text}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamServiceError("Deepgram returned a non-JSON body") from e

        result = parse_deepgram_response(data if isinstance(data, dict) else {})
        logger.info("Deepgram returned %s utterances", len(result.utterances))
        return result
