"""
InferenceClient: abstract interface for a text-in / text-out inference service.

Implementations: GeminiInferenceClient, CloudflareInferenceClient.
Callers pass the JSON shape they expect; the service answers free-form text
that should embed that JSON. Extraction lives in inference.parsing.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class ResponseShape(str, Enum):
    """Top-level JSON type the caller expects in the response."""

    OBJECT = "object"
    ARRAY = "array"


def shape_instruction(shape: ResponseShape) -> str:
    """Trailing instruction appended to every prompt so the model answers JSON only."""
    if shape == ResponseShape.ARRAY:
        return "Respond with only the JSON array, no additional text."
    return "Respond with only the JSON object, no additional text."


class InferenceClient(ABC):
    """Abstract inference service. One generate() call = at most one logical request."""

    @abstractmethod
    async def generate(self, prompt: str, shape: ResponseShape) -> str:
        """
        Send prompt, return the raw generated text.
        Raises InferenceError on transport errors, non-2xx, or empty output.
        """
        ...
