"""
Introduction extractor: seeds names from explicit self-introductions.

Deterministic, runs before inference. A name found here is final for its
voice id: later stages may never replace it.

Matching rules (all must hold):
- the utterance confidence is at least min_confidence (missing confidence never qualifies);
- the captured token is capitalized in the text and is not a stopword
  ("Good", "Here", "Everyone", ...);
- the name is not already taken by another voice id.
The first accepted introduction per voice id wins.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from meeting_scribe.asr.base import Utterance
from meeting_scribe.speakers.models import NameCandidate, Provenance

logger = logging.getLogger(__name__)

_NAME = r"([A-Z][a-z]{1,14})\b"

# Trigger phrases match in any case; the name itself must be capitalized as
# the recognizer wrote it, so "I'm working" or "hi, how are you" never match.
# Tried in order; a stopword capture falls through to the next pattern.
_PATTERNS = (
    r"\b(?i:my name is|i['’]m|i am|this is|call me)\s+" + _NAME,
    r"\b(?i:hi|hello|hey),?\s+" + _NAME,
    r"^" + _NAME + r",?\s+(?i:here|speaking)\b",
    r"^(?i:it['’]s|it is)\s+" + _NAME,
    r"\b" + _NAME + r"\s+(?i:is my name)\b",
)

# Capitalized words that follow the trigger phrases at sentence starts.
_STOPWORDS = frozenset({
    "a", "about", "absolutely", "actually", "afraid", "again", "all", "also", "an", "and",
    "anyway", "as", "at", "back", "basically", "by", "calling", "certainly", "clearly",
    "definitely", "done", "everybody", "everyone", "excited", "exactly", "fine", "finally",
    "folks", "for", "from", "glad", "going", "gonna", "good", "great", "guys", "happy",
    "here", "honestly", "hopefully", "how", "i", "in", "is", "it", "just", "late", "literally",
    "looking", "me", "morning", "muted", "my", "new", "nice", "not", "now", "obviously", "of",
    "okay", "on", "probably", "ready", "really", "seriously", "so", "sorry", "speaking",
    "still", "sure", "talking", "team", "thank", "thanks", "that", "the", "there", "thinking",
    "this", "to", "totally", "trying", "very", "we", "well", "what", "when", "where", "who",
    "why", "with", "wondering", "working", "yes", "you",
})


@dataclass(frozen=True)
class IntroductionRules:
    """Immutable pattern + stopword configuration, built once per process."""

    patterns: tuple[re.Pattern, ...]
    stopwords: frozenset[str]

    @classmethod
    def build(cls, patterns: Iterable[str] = _PATTERNS, stopwords: Iterable[str] = _STOPWORDS) -> "IntroductionRules":
        return cls(
            patterns=tuple(re.compile(p) for p in patterns),
            stopwords=frozenset(w.lower() for w in stopwords),
        )


DEFAULT_RULES = IntroductionRules.build()


def _capitalize(token: str) -> str:
    return token[:1].upper() + token[1:].lower()


def find_introduced_name(text: str, rules: IntroductionRules = DEFAULT_RULES) -> Optional[str]:
    """Return the self-introduced name in text, or None."""
    for pattern in rules.patterns:
        match = pattern.search(text or "")
        if match and match.group(1):
            token = match.group(1)
            if token.lower() not in rules.stopwords:
                return _capitalize(token)
    return None


def extract_introductions(
    utterances: Iterable[Utterance],
    min_confidence: float = 0.9,
    rules: IntroductionRules = DEFAULT_RULES,
) -> list[NameCandidate]:
    """One candidate per introduced voice id, in order of first introduction."""
    by_voice: dict[int, NameCandidate] = {}
    claimed: set[str] = set()
    for utterance in utterances:
        if utterance.voice_id in by_voice:
            continue
        if utterance.confidence is None or utterance.confidence < min_confidence:
            continue
        name = find_introduced_name(utterance.text, rules)
        if name is None or name.lower() in claimed:
            continue
        by_voice[utterance.voice_id] = NameCandidate(utterance.voice_id, name, Provenance.INTRODUCTION)
        claimed.add(name.lower())
        logger.info("Voice %s introduced as %s", utterance.voice_id, name)
    return list(by_voice.values())
