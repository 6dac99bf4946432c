"""
Inference: swappable text-inference backends.

- gemini: Google Gemini generateContent (model fallback chain).
- cloudflare: Cloudflare Workers AI.
- none: no inference; speaker labeling uses introductions and defaults only.
"""
from __future__ import annotations

import logging

from meeting_scribe.config import Settings, get_settings
from meeting_scribe.inference.base import InferenceClient, ResponseShape
from meeting_scribe.inference.cloudflare import CloudflareInferenceClient
from meeting_scribe.inference.gemini import GeminiInferenceClient
from meeting_scribe.inference.parsing import extract_json

logger = logging.getLogger(__name__)


def get_inference_client(settings: Settings | None = None) -> InferenceClient | None:
    """Return inference client from config (gemini / cloudflare / none). None when unavailable."""
    settings = settings or get_settings()
    backend = (getattr(settings, "INFERENCE_BACKEND", "") or "none").strip().lower()
    if backend == "none":
        return None
    if backend == "gemini":
        if not (settings.GEMINI_API_KEY or "").strip():
            logger.warning("INFERENCE_BACKEND=gemini but GEMINI_API_KEY is empty; inference disabled")
            return None
        return GeminiInferenceClient(settings)
    if backend == "cloudflare":
        if not (settings.CLOUDFLARE_ACCOUNT_ID or "").strip() or not (settings.CLOUDFLARE_API_TOKEN or "").strip():
            logger.warning("INFERENCE_BACKEND=cloudflare but Cloudflare credentials are empty; inference disabled")
            return None
        return CloudflareInferenceClient(settings)
    logger.warning("Unknown INFERENCE_BACKEND=%s; use gemini, cloudflare or none", backend)
    return None


__all__ = [
    "InferenceClient",
    "ResponseShape",
    "GeminiInferenceClient",
    "CloudflareInferenceClient",
    "extract_json",
    "get_inference_client",
]
