"""ASR: diarizing speech recognizers."""
from .base import RecognitionResult, SpeechRecognizer, Utterance
from .deepgram import DeepgramRecognizer

__all__ = [
    "RecognitionResult",
    "SpeechRecognizer",
    "Utterance",
    "DeepgramRecognizer",
]
