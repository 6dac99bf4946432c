"""
Consistency validator: one name per voice, one voice per name.

Two phases so the outcome never depends on candidate order:
1. collect - drop collective names, keep the best candidate per voice
   (introduction beats inference), group voices by case-folded name;
2. commit - a name held by exactly one voice is committed. A contested name
   goes to its single introduction claimant if there is one; otherwise every
   claimant is dropped and falls back to its default label.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from meeting_scribe.speakers.models import NameCandidate, Provenance

logger = logging.getLogger(__name__)

COLLECTIVE_TERMS = frozenset({
    "all", "everybody", "everyone", "folks", "group", "guys", "team", "participants", "y'all",
})

_COLLECTIVE = re.compile(
    r"\b(?:" + "|".join(re.escape(t) for t in sorted(COLLECTIVE_TERMS)) + r")\b",
    re.IGNORECASE,
)


def is_collective(name: str) -> bool:
    return bool(_COLLECTIVE.search(name or ""))


@dataclass
class ValidationResult:
    """assignment: voice_id -> committed name. conflicts: dropped name -> voice ids that claimed it."""

    assignment: dict[int, str] = field(default_factory=dict)
    conflicts: dict[str, list[int]] = field(default_factory=dict)


def validate_candidates(candidates: Iterable[NameCandidate]) -> ValidationResult:
    # Phase 1: collect
    best: dict[int, NameCandidate] = {}
    for candidate in candidates:
        if candidate.provenance == Provenance.DEFAULT:
            continue
        if is_collective(candidate.name):
            logger.info("Dropping collective name %r for voice %s", candidate.name, candidate.voice_id)
            continue
        current = best.get(candidate.voice_id)
        if current is None or candidate.provenance.rank < current.provenance.rank:
            best[candidate.voice_id] = candidate

    claims: dict[str, list[NameCandidate]] = {}
    for candidate in best.values():
        claims.setdefault(candidate.name.casefold(), []).append(candidate)

    # Phase 2: commit
    result = ValidationResult()
    for claimants in claims.values():
        if len(claimants) == 1:
            winner = claimants[0]
        else:
            introduced = [c for c in claimants if c.provenance == Provenance.INTRODUCTION]
            winner = introduced[0] if len(introduced) == 1 else None
            dropped = sorted(c.voice_id for c in claimants if c is not winner)
            result.conflicts[claimants[0].name] = dropped
            logger.info("Name %r claimed by voices %s; reverting %s to default labels",
                        claimants[0].name, sorted(c.voice_id for c in claimants), dropped)
        if winner is not None:
            result.assignment[winner.voice_id] = winner.name

    return result
