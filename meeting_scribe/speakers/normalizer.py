"""Dense display ranks for provider voice ids (default "Speaker N" labels)."""
from __future__ import annotations

from typing import Iterable

from meeting_scribe.asr.base import Utterance

DEFAULT_LABEL_PREFIX = "Speaker "


def rank_voices(utterances: Iterable[Utterance]) -> dict[int, int]:
    """Map each distinct voice id to a 1-based rank, ascending by voice id."""
    return {voice_id: rank for rank, voice_id in enumerate(sorted({u.voice_id for u in utterances}), start=1)}


def default_label(rank: int) -> str:
    return f"{DEFAULT_LABEL_PREFIX}{rank}"
