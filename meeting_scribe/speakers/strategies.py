"""
Inference strategies for contextual speaker naming.

Each strategy decides whether it applies to a transcript, builds the prompt,
and turns the decoded JSON payload into an InferenceOutcome. The engine
runs the first strategy that applies; prompt wording and cue heuristics can
be swapped by passing other strategies to the engine.

- VoiceNamingStrategy ("Mode A"): several voice ids; asks for voice id -> name.
- TurnLabelingStrategy ("Mode B"): one voice id covers everything but the text
  reads like a conversation; asks for one speaker label per utterance.
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from meeting_scribe.asr.base import Utterance
from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import ResponseShape
from meeting_scribe.speakers.assembler import format_timestamp
from meeting_scribe.speakers.introductions import DEFAULT_RULES
from meeting_scribe.speakers.models import InferenceOutcome, NameCandidate, Provenance
from meeting_scribe.speakers.validator import COLLECTIVE_TERMS

logger = logging.getLogger(__name__)

# Names the model uses when it has no evidence; not worth committing.
_PLACEHOLDER = re.compile(r"^(?:speaker\s*\w+|unknown(?:\s+speaker)?|none|n/?a)$", re.IGNORECASE)

# "Jason, can you take minutes?" / "Yes, Tony."
_LEADING_ADDRESS = re.compile(r"^\s*([A-Z][a-z]{1,14}),")
_TRAILING_ADDRESS = re.compile(r",\s*([A-Z][a-z]{1,14})\s*[.!?]*\s*$")

_NOT_A_NAME = DEFAULT_RULES.stopwords | frozenset({
    "absolutely", "actually", "additionally", "alright", "anyhow", "anyway", "anyways",
    "besides", "but", "cool", "first", "fortunately", "frankly", "hello", "hey", "hi", "hmm",
    "however", "indeed", "lastly", "later", "listen", "look", "luckily", "meanwhile", "next",
    "no", "nope", "oh", "ok", "otherwise", "perfect", "please", "plus", "right", "sadly",
    "second", "then", "third", "uh", "um", "unfortunately", "wait", "yeah", "yep",
})


def _utterance_lines(utterances: Sequence[Utterance], include_voice: bool) -> str:
    lines = []
    for index, u in enumerate(utterances):
        span = f"{format_timestamp(u.start)}-{format_timestamp(u.end)}"
        voice = f" voice {u.voice_id}" if include_voice else ""
        lines.append(f"[{index}]{voice} ({span}): {u.text.strip()}")
    return "\n".join(lines)


def has_address_cues(utterances: Sequence[Utterance]) -> bool:
    """True when some utterance addresses someone by name next to a comma."""
    for u in utterances:
        for pattern in (_LEADING_ADDRESS, _TRAILING_ADDRESS):
            match = pattern.search(u.text or "")
            if match and match.group(1).lower() not in _NOT_A_NAME:
                return True
    return False


class InferenceStrategy(ABC):
    """One way of asking the inference service about speakers."""

    name: str = ""
    shape: ResponseShape = ResponseShape.OBJECT

    @abstractmethod
    def applies(self, utterances: Sequence[Utterance], ranks: Mapping[int, int]) -> bool:
        ...

    @abstractmethod
    def build_prompt(self, utterances: Sequence[Utterance], known_names: Mapping[int, str]) -> str:
        ...

    @abstractmethod
    def interpret(self, payload: Any, utterances: Sequence[Utterance], ranks: Mapping[int, int]) -> InferenceOutcome:
        """Raise InferenceError when the payload cannot be used at all."""
        ...


class VoiceNamingStrategy(InferenceStrategy):
    """Several voices: infer a real name per voice id from conversational cues."""

    name = "voice_naming"
    shape = ResponseShape.OBJECT

    def applies(self, utterances: Sequence[Utterance], ranks: Mapping[int, int]) -> bool:
        return len(ranks) >= 2

    def build_prompt(self, utterances: Sequence[Utterance], known_names: Mapping[int, str]) -> str:
        voice_ids = ", ".join(str(v) for v in sorted({u.voice_id for u in utterances}))
        known = "\n".join(f"- voice {v} = {n}" for v, n in sorted(known_names.items())) or "- none"
        forbidden = ", ".join(f'"{t}"' for t in sorted(COLLECTIVE_TERMS))
        return f"""Identify the real names of the speakers in this diarized meeting transcript.
Each line is: [utterance index] voice <voice id> (start-end): text.

Use ONLY these kinds of evidence:
1. Self-introduction: "I'm Dana", "my name is Dana", "Dana here".
2. Direct address: when an utterance names a person ("Alice, can you update us?"), the NEXT utterance by a DIFFERENT voice belongs to that person.
3. Response to address: when a reply names a person ("Sure, Bob."), the PREVIOUS utterance's voice belongs to that person.
Chain these rules forward and backward so all assignments agree with each other.

Worked example: voice 3 says "Alice, can you update us?" and voice 5 replies "Sure, Bob." Then voice 3 is "Bob" (named in the reply) and voice 5 is "Alice" (named in the address).

Rules:
- Never use collective or generic terms as names ({forbidden}).
- Every name must be unique: two voices can never share a name.
- If there is not enough evidence for a voice, use "Speaker <voice id>" with the ORIGINAL voice id shown in the transcript.
- Keep these already identified speakers unchanged:
{known}

Voice ids: {voice_ids}

Transcript:
{_utterance_lines(utterances, include_voice=True)}

Return a JSON object mapping each voice id (as a string) to a name, for example {{"0": "Alice", "1": "Bob"}}."""

    def interpret(self, payload: Any, utterances: Sequence[Utterance], ranks: Mapping[int, int]) -> InferenceOutcome:
        if not isinstance(payload, dict):
            raise InferenceError("Voice naming expects a JSON object")
        candidates: list[NameCandidate] = []
        for key, value in payload.items():
            try:
                voice_id = int(str(key).strip())
            except ValueError:
                logger.debug("Ignoring non-numeric voice key %r", key)
                continue
            if voice_id not in ranks or not isinstance(value, str):
                continue
            name = value.strip()
            if not name or _PLACEHOLDER.match(name):
                continue
            candidates.append(NameCandidate(voice_id, name, Provenance.INFERENCE))
        return InferenceOutcome(candidates=candidates)


class TurnLabelingStrategy(InferenceStrategy):
    """One voice id for a multi-party conversation: label each utterance instead."""

    name = "turn_labeling"
    shape = ResponseShape.ARRAY

    def applies(self, utterances: Sequence[Utterance], ranks: Mapping[int, int]) -> bool:
        return len(ranks) == 1 and len(utterances) >= 2 and has_address_cues(utterances)

    def build_prompt(self, utterances: Sequence[Utterance], known_names: Mapping[int, str]) -> str:
        return f"""The following meeting transcript was recorded with several people talking, but the recognizer could not tell the voices apart.
Decide who is speaking in each utterance. Each line is: [utterance index] (start-end): text.

Use these cues:
- An utterance that addresses someone by name ("Jason, can you take minutes?") is followed by that person's answer.
- A reply that names someone ("Yes, Tony.") answers the person who spoke just before.
- Self-introductions ("I'm Dana") name the current speaker.
- When the same person resumes speaking, reuse exactly the same label.
- Use real names when the cues support them, otherwise "Speaker A", "Speaker B", ...
- Never use collective terms such as "everyone" or "team" as a label.

Transcript:
{_utterance_lines(utterances, include_voice=False)}

Return a JSON array with exactly {len(utterances)} strings: the speaker label of each utterance, in order."""

    def interpret(self, payload: Any, utterances: Sequence[Utterance], ranks: Mapping[int, int]) -> InferenceOutcome:
        if isinstance(payload, dict):
            payload = payload.get("speakers", payload.get("labels"))
        if not isinstance(payload, list):
            raise InferenceError("Turn labeling expects a JSON array")

        labels: list[str] = []
        for item in payload:
            if isinstance(item, dict):
                item = item.get("speaker", item.get("label"))
            if not isinstance(item, str) or not item.strip():
                raise InferenceError("Turn labeling returned an empty or non-string label")
            labels.append(item.strip())

        if len(labels) != len(utterances):
            raise InferenceError(f"Turn labeling returned {len(labels)} labels for {len(utterances)} utterances")
        if len(set(labels)) < 2:
            raise InferenceError("Turn labeling returned a single speaker")
        return InferenceOutcome(turn_labels=labels)


DEFAULT_STRATEGIES: tuple[InferenceStrategy, ...] = (VoiceNamingStrategy(), TurnLabelingStrategy())
