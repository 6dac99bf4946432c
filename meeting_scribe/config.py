"""Application configuration. Loads from env vars."""
from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings. Override via environment variables."""

    # Speech recognizer: Deepgram pre-recorded API (diarize + utterances)
    DEEPGRAM_API_KEY: str = ""
    DEEPGRAM_URL: str = "https://api.deepgram.com/v1/listen"
    DEEPGRAM_MODEL: str = "nova-2"
    DEEPGRAM_LANGUAGE: str = "en"
    RECOGNIZER_TIMEOUT_SECONDS: float = 120.0

    # Contextual inference backend: "gemini" | "cloudflare" | "none"
    INFERENCE_BACKEND: Literal["gemini", "cloudflare", "none"] = "gemini"
    INFERENCE_TIMEOUT_SECONDS: float = 30.0

    # Gemini generateContent; models are tried in order until one answers
    GEMINI_API_KEY: str = ""
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODELS: str = "gemini-1.5-flash,gemini-1.5-pro,gemini-pro"  # comma-separated
    GEMINI_TEMPERATURE: float = 0.1
    GEMINI_MAX_OUTPUT_TOKENS: int = 2048

    # Cloudflare Workers AI (when INFERENCE_BACKEND=cloudflare)
    CLOUDFLARE_ACCOUNT_ID: str = ""
    CLOUDFLARE_API_TOKEN: str = ""
    CLOUDFLARE_MODEL: str = "@cf/meta/llama-3.1-8b-instruct"
    CLOUDFLARE_MAX_TOKENS: int = 2048

    # Speaker labeling
    SPEAKER_INFERENCE_ENABLED: bool = True  # false = introductions + default labels only
    INTRODUCTION_MIN_CONFIDENCE: float = 0.9  # utterance confidence needed to trust "I'm X"
    MERGE_CONTINUATIONS: bool = False  # join "...," + "lowercase..." turns of one voice before inference

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ALLOW_ORIGINS: str = "*"  # comma-separated

    # Logging: level (DEBUG, INFO, WARNING, ERROR); file path = also write log to file (empty = console only).
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    class Config:
        env_file = ".env"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
