"""
Continuation merge: rejoin one sentence the recognizer split into two turns.

"So what I wanted to say," + "is that the budget is fine." (same voice,
second part starts lowercase) becomes one utterance. Runs before inference,
so prompt indices refer to the merged list.
"""
from __future__ import annotations

from typing import Optional

from meeting_scribe.asr.base import Utterance


def _is_continuation(previous: Utterance, current: Utterance) -> bool:
    if previous.voice_id != current.voice_id:
        return False
    head = current.text.lstrip()[:1]
    return previous.text.rstrip().endswith(",") and head.isalpha() and head.islower()


def _min_confidence(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


def merge_continuations(utterances: list[Utterance]) -> list[Utterance]:
    merged: list[Utterance] = []
    for utterance in utterances:
        if merged and _is_continuation(merged[-1], utterance):
            previous = merged[-1]
            merged[-1] = Utterance(
                voice_id=previous.voice_id,
                text=f"{previous.text.rstrip()} {utterance.text.strip()}",
                start=previous.start,
                end=utterance.end,
                confidence=_min_confidence(previous.confidence, utterance.confidence),
            )
        else:
            merged.append(utterance)
    return merged
