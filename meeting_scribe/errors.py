"""
Error taxonomy.

- InputError / ConfigurationError: fatal, surfaced to the caller.
- UpstreamServiceError: recognizer failed; fatal, surfaced to the caller.
- InferenceError: inference failed or answered in the wrong shape; always
  recovered where it is raised (speaker labeling, meeting summary).

Name conflicts between voices are not exceptions: the validator reverts the
claimants to default labels and reports them in its result.
"""
from __future__ import annotations


class ScribeError(Exception):
    """Base for all errors raised by meeting_scribe."""


class InputError(ScribeError):
    """Request cannot be processed: no audio, no utterances, bad input."""


class ConfigurationError(InputError):
    """Required configuration (e.g. an API key) is missing."""


class UpstreamServiceError(ScribeError):
    """Speech recognizer call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InferenceError(ScribeError):
    """Inference service failed, timed out, or returned an unusable payload."""
