"""
FastAPI app: speaker-labeled transcription and meeting summaries.

POST /api/transcribe-audio  multipart "audio" -> { "transcription": [Segment], "fullText": str }
POST /api/analyze-meeting   { "text": str }   -> MeetingSummary (fallback summary on failure)
GET  /health

Errors are returned as { "error": "..." }: 400 for bad input, 500 for missing
configuration, 502 when the speech recognizer fails. Speaker inference
failures are never errors; they only make labels less specific.
"""
from __future__ import annotations

import logging
from typing import Annotated, Optional

import uvicorn
from fastapi import Depends, FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meeting_scribe.asr.base import SpeechRecognizer
from meeting_scribe.config import Settings, get_settings
from meeting_scribe.errors import ConfigurationError, InputError, UpstreamServiceError
from meeting_scribe.inference import get_inference_client
from meeting_scribe.inference.base import InferenceClient
from meeting_scribe.schemas.summary import MeetingSummary, SummaryRequest
from meeting_scribe.schemas.transcription import ErrorResponse, TranscriptionResponse
from meeting_scribe.services.summary_service import analyze_meeting
from meeting_scribe.services.transcription_service import get_speech_recognizer, transcribe_and_label
from meeting_scribe.speakers.pipeline import LabelingOptions

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure root logging from LOG_LEVEL / LOG_FILE."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=_LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def recognizer_dependency() -> SpeechRecognizer:
    return get_speech_recognizer()


def inference_dependency() -> Optional[InferenceClient]:
    return get_inference_client()


def labeling_options_dependency() -> LabelingOptions:
    return LabelingOptions.from_settings(get_settings())


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Meeting Scribe",
        description="Diarized transcription with consistent, inferred speaker names",
    )
    origins = [o.strip() for o in settings.CORS_ALLOW_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.post(
        "/api/transcribe-audio",
        response_model=TranscriptionResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    )
    async def transcribe_audio(
        recognizer: Annotated[SpeechRecognizer, Depends(recognizer_dependency)],
        inference: Annotated[Optional[InferenceClient], Depends(inference_dependency)],
        options: Annotated[LabelingOptions, Depends(labeling_options_dependency)],
        audio: Annotated[Optional[UploadFile], File()] = None,
    ):
        """
        Transcribe an uploaded recording and label every utterance with a speaker.
        Falls back to "Speaker N" labels whenever names cannot be inferred.
        """
        if audio is None:
            return _error(400, "No audio file provided")
        try:
            content = await audio.read()
            return await transcribe_and_label(
                content,
                audio.content_type or "",
                recognizer=recognizer,
                inference=inference,
                options=options,
            )
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            return _error(500, str(e))
        except InputError as e:
            return _error(400, str(e))
        except UpstreamServiceError as e:
            logger.error("Speech recognizer failed: %s", e)
            return _error(502, str(e))
        except Exception as e:
            logger.exception("Transcription failed: %s", e)
            return _error(500, str(e) or "Transcription failed")

    @app.post("/api/analyze-meeting", response_model=MeetingSummary)
    async def analyze(
        request: SummaryRequest,
        inference: Annotated[Optional[InferenceClient], Depends(inference_dependency)],
    ) -> MeetingSummary:
        """Structured meeting summary. Always 200; a fixed fallback is returned on inference failure."""
        return await analyze_meeting(request.text, inference)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("Starting Meeting Scribe on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
