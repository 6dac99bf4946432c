"""Tests for the multi-voice naming and collapsed-diarization labeling strategies."""

import pytest

from conftest import utt
from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import ResponseShape
from meeting_scribe.speakers.models import Provenance
from meeting_scribe.speakers.normalizer import rank_voices
from meeting_scribe.speakers.strategies import (
    TurnLabelingStrategy,
    VoiceNamingStrategy,
    has_address_cues,
)

MULTI = [
    utt(3, "Alice, can you update us?", start=0.0, end=2.5),
    utt(5, "Sure, Bob.", start=2.6, end=3.4),
]

COLLAPSED = [
    utt(0, "Jason, can you take minutes?", start=0.0, end=2.0),
    utt(0, "Yes, Tony.", start=2.1, end=3.0),
    utt(0, "Great, let's begin.", start=3.1, end=4.0),
]


class TestAddressCues:
    def test_leading_address(self):
        assert has_address_cues([utt(0, "Jason, can you take minutes?")])

    def test_trailing_address(self):
        assert has_address_cues([utt(0, "Yes, Tony.")])

    def test_interjections_are_not_names(self):
        assert not has_address_cues([utt(0, "Yes, that works."), utt(0, "Okay, moving on."), utt(0, "Well, sure.")])

    def test_sentence_adverbs_are_not_names(self):
        assert not has_address_cues([utt(0, "Basically, we are done."), utt(0, "Seriously, that is it.")])
        assert not has_address_cues([utt(0, "However, the budget is tight."), utt(0, "We ship on Friday, Hopefully.")])

    def test_no_commas(self):
        assert not has_address_cues([utt(0, "The quarterly numbers look fine")])


class TestVoiceNamingStrategy:
    strategy = VoiceNamingStrategy()

    def test_applies_to_two_or_more_voices(self):
        assert self.strategy.applies(MULTI, rank_voices(MULTI))
        assert not self.strategy.applies(COLLAPSED, rank_voices(COLLAPSED))
        assert self.strategy.shape == ResponseShape.OBJECT

    def test_prompt_contents(self):
        prompt = self.strategy.build_prompt(MULTI, {5: "Dana"})
        assert "[0] voice 3 (00:00-00:02): Alice, can you update us?" in prompt
        assert "[1] voice 5 (00:02-00:03): Sure, Bob." in prompt
        assert "voice 5 = Dana" in prompt
        assert '"everyone"' in prompt
        assert "Speaker <voice id>" in prompt

    def test_interpret_maps_voice_ids(self):
        outcome = self.strategy.interpret({"3": "Bob", "5": "Alice"}, MULTI, rank_voices(MULTI))
        assert {c.voice_id: c.name for c in outcome.candidates} == {3: "Bob", 5: "Alice"}
        assert all(c.provenance == Provenance.INFERENCE for c in outcome.candidates)
        assert outcome.turn_labels is None

    def test_interpret_skips_placeholders_and_unknown_voices(self):
        payload = {"3": "Speaker 3", "5": " Alice ", "9": "Zed", "x": "Nope", "4": 7}
        outcome = self.strategy.interpret(payload, MULTI, rank_voices(MULTI))
        assert [(c.voice_id, c.name) for c in outcome.candidates] == [(5, "Alice")]

    def test_interpret_rejects_non_object(self):
        with pytest.raises(InferenceError):
            self.strategy.interpret(["Bob", "Alice"], MULTI, rank_voices(MULTI))


class TestTurnLabelingStrategy:
    strategy = TurnLabelingStrategy()

    def test_applies_only_to_collapsed_conversation(self):
        assert self.strategy.applies(COLLAPSED, rank_voices(COLLAPSED))
        assert not self.strategy.applies(MULTI, rank_voices(MULTI))
        single = [utt(0, "Jason, hi.")]
        assert not self.strategy.applies(single, rank_voices(single))
        monologue = [utt(0, "Today we cover the budget."), utt(0, "Then hiring.")]
        assert not self.strategy.applies(monologue, rank_voices(monologue))
        assert self.strategy.shape == ResponseShape.ARRAY

    def test_prompt_has_no_voice_ids(self):
        prompt = self.strategy.build_prompt(COLLAPSED, {})
        assert "[0] (00:00-00:02): Jason, can you take minutes?" in prompt
        assert "voice 0" not in prompt
        assert "exactly 3 strings" in prompt

    def test_interpret_accepts_labels(self):
        outcome = self.strategy.interpret(["Tony", "Jason", "Tony"], COLLAPSED, {0: 1})
        assert outcome.turn_labels == ["Tony", "Jason", "Tony"]
        assert outcome.candidates == []

    def test_interpret_accepts_object_items_and_wrapper(self):
        payload = {"speakers": [{"speaker": "Tony"}, {"speaker": "Jason"}, {"label": "Tony"}]}
        outcome = self.strategy.interpret(payload, COLLAPSED, {0: 1})
        assert outcome.turn_labels == ["Tony", "Jason", "Tony"]

    @pytest.mark.parametrize(
        "payload",
        [
            ["Tony", "Jason"],
            ["Tony", "Tony", "Tony"],
            ["Tony", "", "Jason"],
            ["Tony", 2, "Jason"],
            {"0": "Tony"},
        ],
    )
    def test_interpret_rejects_unusable_labels(self, payload):
        with pytest.raises(InferenceError):
            self.strategy.interpret(payload, COLLAPSED, {0: 1})
