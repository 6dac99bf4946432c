"""Tests for the Deepgram recognizer (HTTP mocked with httpx.MockTransport)."""

import httpx
import pytest

from meeting_scribe.asr.deepgram import DeepgramRecognizer, parse_deepgram_response
from meeting_scribe.config import Settings
from meeting_scribe.errors import ConfigurationError, UpstreamServiceError

DEEPGRAM_BODY = {
    "results": {
        "channels": [{"alternatives": [{"transcript": "Alice, can you update us? Sure, Bob."}]}],
        "utterances": [
            {"speaker": 0, "transcript": "Alice, can you update us?", "start": 0.0, "end": 2.5, "confidence": 0.97},
            {"speaker": 1, "transcript": "Sure, Bob.", "start": 2.6, "end": 3.4},
        ],
    }
}


def _settings(**overrides) -> Settings:
    values = {"DEEPGRAM_API_KEY": "dg-key"}
    values.update(overrides)
    return Settings(**values)


class TestParseResponse:
    def test_utterances_and_full_text(self):
        result = parse_deepgram_response(DEEPGRAM_BODY)
        assert result.full_text == "Alice, can you update us? Sure, Bob."
        assert [(u.voice_id, u.text) for u in result.utterances] == [
            (0, "Alice, can you update us?"),
            (1, "Sure, Bob."),
        ]
        assert result.utterances[0].confidence == 0.97
        assert result.utterances[1].confidence is None

    def test_missing_sections(self):
        result = parse_deepgram_response({})
        assert result.utterances == []
        assert result.full_text == ""


class TestDeepgramRecognizer:
    @pytest.mark.asyncio
    async def test_request_shape(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=DEEPGRAM_BODY)

        recognizer = DeepgramRecognizer(_settings(), transport=httpx.MockTransport(handler))
        result = await recognizer.recognize(b"audio-bytes", "audio/wav")

        request = seen["request"]
        assert request.headers["Authorization"] == "Token dg-key"
        assert request.headers["Content-Type"] == "audio/wav"
        assert request.url.params["diarize"] == "true"
        assert request.url.params["utterances"] == "true"
        assert request.url.params["model"] == "nova-2"
        assert request.content == b"audio-bytes"
        assert len(result.utterances) == 2

    @pytest.mark.asyncio
    async def test_default_content_type(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content_type"] = request.headers["Content-Type"]
            return httpx.Response(200, json=DEEPGRAM_BODY)

        recognizer = DeepgramRecognizer(_settings(), transport=httpx.MockTransport(handler))
        await recognizer.recognize(b"x", "")
        assert seen["content_type"] == "audio/webm"

    @pytest.mark.asyncio
    async def test_missing_key(self):
        recognizer = DeepgramRecognizer(_settings(DEEPGRAM_API_KEY=""))
        with pytest.raises(ConfigurationError):
            await recognizer.recognize(b"x", "audio/webm")

    @pytest.mark.asyncio
    async def test_error_status(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, text="bad key"))
        recognizer = DeepgramRecognizer(_settings(), transport=transport)
        with pytest.raises(UpstreamServiceError) as exc_info:
            await recognizer.recognize(b"x", "audio/webm")
        assert exc_info.value.status_code == 401
        assert "401 - bad key" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        recognizer = DeepgramRecognizer(_settings(), transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamServiceError):
            await recognizer.recognize(b"x", "audio/webm")

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        recognizer = DeepgramRecognizer(_settings(), transport=transport)
        with pytest.raises(UpstreamServiceError):
            await recognizer.recognize(b"x", "audio/webm")
