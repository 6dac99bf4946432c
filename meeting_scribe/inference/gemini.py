"""
GeminiInferenceClient: Google Gemini generateContent over REST.

Models are tried in order (GEMINI_MODELS); the first one that answers with
text wins. This is the only retry we do: one attempt per model.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from meeting_scribe.config import Settings, get_settings
from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import InferenceClient, ResponseShape, shape_instruction

logger = logging.getLogger(__name__)


def _model_list(raw: str) -> list[str]:
    return [m.strip() for m in (raw or "").split(",") if m.strip()]


def _generated_text(data: Any) -> str:
    """candidates[0].content.parts[0].text; "" when the model produced no text."""
    if not isinstance(data, dict):
        raise InferenceError(f"Unexpected Gemini response type: {type(data).__name__}")
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise InferenceError("Unexpected Gemini response: candidates is not a list")
    if not candidates:
        return ""
    candidate = candidates[0]
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise InferenceError("Unexpected Gemini response: no content parts")
    if not parts:
        return ""
    text = parts[0].get("text") if isinstance(parts[0], dict) else None
    return text.strip() if isinstance(text, str) else ""


class GeminiInferenceClient(InferenceClient):
    """Gemini REST client. Raises InferenceError after every model has failed."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._api_key = (settings.GEMINI_API_KEY or "").strip()
        self._base_url = settings.GEMINI_BASE_URL.rstrip("/")
        self._models = _model_list(settings.GEMINI_MODELS)
        self._temperature = settings.GEMINI_TEMPERATURE
        self._max_output_tokens = settings.GEMINI_MAX_OUTPUT_TOKENS
        self._timeout = settings.INFERENCE_TIMEOUT_SECONDS
        self._transport = transport

    def _payload(self, prompt: str, shape: ResponseShape) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": f"{prompt}\n\n{shape_instruction(shape)}"}]}],
            "generationConfig": {
                "temperature": self._temperature,
                "maxOutputTokens": self._max_output_tokens,
            },
        }

    async def generate(self, prompt: str, shape: ResponseShape) -> str:
        if not self._api_key:
            raise InferenceError("GEMINI_API_KEY is not configured")
        if not self._models:
            raise InferenceError("GEMINI_MODELS is empty")

        payload = self._payload(prompt, shape)
        last_error = "no attempt made"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            for model in self._models:
                url = f"{self._base_url}/models/{model}:generateContent"
                logger.info("Gemini request: model=%s", model)
                try:
                    resp = await client.post(url, params={"key": self._api_key}, json=payload)
                except httpx.HTTPError as e:
                    last_error = str(e) or type(e).__name__
                    logger.warning("Gemini attempt failed (model=%s): %s", model, last_error)
                    continue

                if resp.status_code != 200:
                    last_error = f"{resp.status_code} - {resp.text}"
                    logger.warning("Gemini attempt failed (model=%s): %s", model, last_error)
                    continue

                try:
                    text = _generated_text(resp.json())
                except ValueError:
                    text = ""
                except InferenceError as e:
                    last_error = str(e)
                    logger.warning("Gemini attempt failed (model=%s): %s", model, last_error)
                    continue
                if not text:
                    last_error = "No text generated in response"
                    logger.warning("Gemini attempt failed (model=%s): %s", model, last_error)
                    continue

                logger.info("Gemini answered with model=%s (%s chars)", model, len(text))
                return text

        raise InferenceError(f"All Gemini attempts failed. Last error: {last_error}")
