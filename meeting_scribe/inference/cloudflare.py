"""
CloudflareInferenceClient: text generation via Cloudflare Workers AI.

Same REST endpoint and auth as the Workers AI chat models:
POST /accounts/{account_id}/ai/run/{model} with system + user messages.
"""
from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from meeting_scribe.config import Settings, get_settings
from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import InferenceClient, ResponseShape, shape_instruction

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a careful transcript analyst. Work only with the transcript you are given. "
    "Never invent facts. Always respond in JSON only, with no markdown or extra text."
)


def _get_cloudflare_auth(settings: Settings) -> tuple[str, str]:
    """Return (account_id, token) for Workers AI."""
    account_id = (getattr(settings, "CLOUDFLARE_ACCOUNT_ID", "") or "").strip()
    token = (getattr(settings, "CLOUDFLARE_API_TOKEN", "") or "").strip()
    return account_id, token


def _response_content(data: Any) -> str:
    # Workers AI returns { "result": { "response": "..." } } or direct { "response": "..." }.
    # JSON-looking answers are sometimes already decoded into objects.
    result = data.get("result", data) if isinstance(data, dict) else data
    if isinstance(result, dict):
        content = result.get("response", "")
    else:
        content = result
    if isinstance(content, (dict, list)):
        return json.dumps(content, ensure_ascii=False)
    if isinstance(content, str):
        return content.strip()
    return ""


class CloudflareInferenceClient(InferenceClient):
    """Workers AI client. Raises InferenceError on auth, transport, or empty response."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._account_id, self._token = _get_cloudflare_auth(settings)
        self._model = settings.CLOUDFLARE_MODEL
        self._max_tokens = settings.CLOUDFLARE_MAX_TOKENS
        self._timeout = settings.INFERENCE_TIMEOUT_SECONDS
        self._transport = transport

    async def generate(self, prompt: str, shape: ResponseShape) -> str:
        if not self._account_id or not self._token:
            raise InferenceError("CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN are required")

        url = f"https://api.cloudflare.com/client/v4/accounts/{self._account_id}/ai/run/{self._model}"
        payload = {
            "messages": [
                {"role": "system", "content": _SYSTEM_PROMPT},
                {"role": "user", "content": f"{prompt}\n\n{shape_instruction(shape)}"},
            ],
            "max_tokens": self._max_tokens,
            "temperature": 0.1,
        }
        logger.info("Workers AI request: model=%s", self._model)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(
                    url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self._token}", "Content-Type": "application/json"},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise InferenceError(f"Workers AI request failed: {e}") from e
        except ValueError as e:
            raise InferenceError("Workers AI returned a non-JSON body") from e

        content = _response_content(data)
        if not content:
            raise InferenceError("Cloudflare Workers AI returned empty response")
        return content
