"""
Contextual inference engine: one best-effort inference call per transcript.

Picks the first strategy that applies, sends one prompt, extracts the JSON
payload and lets the strategy interpret it. Every failure (HTTP error,
timeout, unparsable text, wrong shape) is logged and yields an empty
outcome; labeling then continues with introductions and default labels.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional, Sequence

from meeting_scribe.asr.base import Utterance
from meeting_scribe.errors import InferenceError
from meeting_scribe.inference.base import InferenceClient
from meeting_scribe.inference.parsing import extract_json
from meeting_scribe.speakers.models import InferenceOutcome
from meeting_scribe.speakers.strategies import DEFAULT_STRATEGIES, InferenceStrategy

logger = logging.getLogger(__name__)


class ContextualInferenceEngine:
    def __init__(
        self,
        client: Optional[InferenceClient],
        strategies: Sequence[InferenceStrategy] = DEFAULT_STRATEGIES,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._strategies = tuple(strategies)
        self._timeout = timeout

    def select_strategy(
        self, utterances: Sequence[Utterance], ranks: Mapping[int, int]
    ) -> Optional[InferenceStrategy]:
        for strategy in self._strategies:
            if strategy.applies(utterances, ranks):
                return strategy
        return None

    async def infer(
        self,
        utterances: Sequence[Utterance],
        ranks: Mapping[int, int],
        known_names: Mapping[int, str],
    ) -> InferenceOutcome:
        if self._client is None:
            return InferenceOutcome()
        strategy = self.select_strategy(utterances, ranks)
        if strategy is None:
            logger.info("No inference strategy applies (%s voices, %s utterances)", len(ranks), len(utterances))
            return InferenceOutcome()

        prompt = strategy.build_prompt(utterances, known_names)
        logger.info("Speaker inference: strategy=%s, %s utterances", strategy.name, len(utterances))
        logger.debug("Speaker inference prompt:\n%s", prompt)

        try:
            raw = await asyncio.wait_for(self._client.generate(prompt, strategy.shape), timeout=self._timeout)
            payload = extract_json(raw, strategy.shape)
            outcome = strategy.interpret(payload, utterances, ranks)
        except asyncio.TimeoutError:
            logger.warning("Speaker inference timed out after %.1fs; using fallback labels", self._timeout)
            return InferenceOutcome()
        except InferenceError as e:
            logger.warning("Speaker inference unusable (%s): %s", strategy.name, e)
            return InferenceOutcome()
        except Exception as e:
            logger.exception("Speaker inference failed unexpectedly (%s): %s", strategy.name, e)
            return InferenceOutcome()

        logger.info(
            "Speaker inference (%s): %s voice names, %s turn labels",
            strategy.name,
            len(outcome.candidates),
            len(outcome.turn_labels) if outcome.turn_labels is not None else 0,
        )
        return outcome
