"""Tolerant JSON extraction from free-form model output."""
from __future__ import annotations

import json
import re
from typing import Any

from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import ResponseShape

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```", re.IGNORECASE)

_OPENERS = {ResponseShape.OBJECT: "{", ResponseShape.ARRAY: "["}
_TYPES = {ResponseShape.OBJECT: dict, ResponseShape.ARRAY: list}


def strip_code_fences(raw: str) -> str:
    """Remove Markdown ``` / ```json fences (anywhere in the text)."""
    return _CODE_FENCE.sub("", raw or "").strip()


def extract_json(raw: str, shape: ResponseShape) -> Any:
    """
    Return the first well-formed JSON value of the requested shape in raw.

    Scans every opening bracket of the expected kind and tries to decode from
    there, so prose before/after the payload and stray brackets are skipped.
    Raises InferenceError when nothing decodes.
    """
    text = strip_code_fences(raw)
    if not text:
        raise InferenceError("Inference response was empty")

    decoder = json.JSONDecoder()
    opener = _OPENERS[shape]
    expected = _TYPES[shape]
    pos = text.find(opener)
    while pos != -1:
        try:
            value, _ = decoder.raw_decode(text, pos)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, expected):
            return value
        pos = text.find(opener, pos + 1)

    raise InferenceError(f"No JSON {shape.value} found in inference response")
