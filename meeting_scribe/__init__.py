"""Meeting Scribe: diarized transcription with consistent speaker names."""
