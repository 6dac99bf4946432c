"""Application services (transcription with speaker labeling, meeting summary)."""
from meeting_scribe.services.summary_service import analyze_meeting
from meeting_scribe.services.transcription_service import transcribe_and_label, transcribe_audio

__all__ = ["analyze_meeting", "transcribe_and_label", "transcribe_audio"]
