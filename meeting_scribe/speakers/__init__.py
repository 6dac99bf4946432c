"""
Speaker naming for diarized transcripts.

- Default labels ("Speaker 1", "Speaker 2") ranked by voice id.
- Self-introductions seed names that later stages never override.
- One best-effort inference call names voices from address/response cues,
  or relabels turns when diarization collapsed everyone into one voice.
- No two voices may end up with the same name.
"""
from __future__ import annotations

from meeting_scribe.speakers.models import NameCandidate, Provenance, TranscriptSegment
from meeting_scribe.speakers.pipeline import LabelingOptions, label_speakers

__all__ = ["LabelingOptions", "NameCandidate", "Provenance", "TranscriptSegment", "label_speakers"]
