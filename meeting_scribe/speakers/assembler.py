"""Label resolution and segment assembly."""
from __future__ import annotations

import math
from typing import Mapping, Optional, Sequence

from meeting_scribe.asr.base import Utterance
from meeting_scribe.speakers.models import TranscriptSegment
from meeting_scribe.speakers.normalizer import default_label

DEFAULT_CONFIDENCE = 0.9


def format_timestamp(seconds: float) -> str:
    """MM:SS from floored seconds. 59.9 -> "00:59", 60 -> "01:00"."""
    total = max(0, math.floor(seconds or 0.0))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def format_span(start: float, end: float) -> str:
    return f"{format_timestamp(start)} - {format_timestamp(end)}"


def resolve_label(
    index: int,
    utterance: Utterance,
    ranks: Mapping[int, int],
    assignment: Mapping[int, str],
    turn_labels: Optional[Sequence[str]] = None,
) -> str:
    """Per-utterance label > validated voice name > "Speaker {rank}"."""
    if turn_labels is not None:
        return turn_labels[index]
    name = assignment.get(utterance.voice_id)
    if name:
        return name
    return default_label(ranks[utterance.voice_id])


def assemble_segments(
    utterances: Sequence[Utterance],
    ranks: Mapping[int, int],
    assignment: Mapping[int, str],
    turn_labels: Optional[Sequence[str]] = None,
) -> list[TranscriptSegment]:
    """One segment per utterance, same order."""
    if turn_labels is not None and len(turn_labels) != len(utterances):
        raise ValueError("turn_labels must have one label per utterance")
    return [
        TranscriptSegment(
            id=f"segment_{index}",
            speaker=resolve_label(index, utterance, ranks, assignment, turn_labels),
            text=utterance.text.strip(),
            timestamp=format_span(utterance.start, utterance.end),
            confidence=utterance.confidence if utterance.confidence is not None else DEFAULT_CONFIDENCE,
        )
        for index, utterance in enumerate(utterances)
    ]
