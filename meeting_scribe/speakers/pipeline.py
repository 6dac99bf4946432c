"""
Speaker labeling pipeline.

utterances -> (optional continuation merge) -> voice ranks -> introductions
-> contextual inference -> consistency validation -> labeled segments.

Only an empty utterance list short-circuits (empty result). Inference is
best-effort: any failure there degrades to introductions and default
"Speaker N" labels, never to an error.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from meeting_scribe.asr.base import Utterance
from meeting_scribe.config import Settings
from meeting_scribe.inference.base import InferenceClient
from meeting_scribe.speakers.assembler import assemble_segments
from meeting_scribe.speakers.contextual import ContextualInferenceEngine
from meeting_scribe.speakers.continuation import merge_continuations
from meeting_scribe.speakers.introductions import extract_introductions
from meeting_scribe.speakers.models import TranscriptSegment
from meeting_scribe.speakers.normalizer import rank_voices
from meeting_scribe.speakers.strategies import DEFAULT_STRATEGIES, InferenceStrategy
from meeting_scribe.speakers.validator import validate_candidates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelingOptions:
    min_introduction_confidence: float = 0.9
    inference_enabled: bool = True
    inference_timeout: float = 30.0
    merge_continuations: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "LabelingOptions":
        return cls(
            min_introduction_confidence=settings.INTRODUCTION_MIN_CONFIDENCE,
            inference_enabled=settings.SPEAKER_INFERENCE_ENABLED,
            inference_timeout=settings.INFERENCE_TIMEOUT_SECONDS,
            merge_continuations=settings.MERGE_CONTINUATIONS,
        )


async def label_speakers(
    utterances: Sequence[Utterance],
    client: Optional[InferenceClient] = None,
    options: LabelingOptions = LabelingOptions(),
    strategies: Sequence[InferenceStrategy] = DEFAULT_STRATEGIES,
) -> list[TranscriptSegment]:
    """Return one labeled segment per utterance (per merged utterance when merging is on)."""
    if not utterances:
        return []

    items = list(utterances)
    if options.merge_continuations:
        items = merge_continuations(items)
        logger.info("Continuation merge: %s -> %s utterances", len(utterances), len(items))

    ranks = rank_voices(items)
    introductions = extract_introductions(items, options.min_introduction_confidence)
    known_names = {c.voice_id: c.name for c in introductions}

    engine = ContextualInferenceEngine(
        client if options.inference_enabled else None,
        strategies=strategies,
        timeout=options.inference_timeout,
    )
    outcome = await engine.infer(items, ranks, known_names)

    validation = validate_candidates([*introductions, *outcome.candidates])
    segments = assemble_segments(items, ranks, validation.assignment, outcome.turn_labels)
    logger.info(
        "Labeled %s segments: %s voices, %s named, %s conflicts, turn labels=%s",
        len(segments), len(ranks), len(validation.assignment), len(validation.conflicts),
        outcome.turn_labels is not None,
    )
    return segments
