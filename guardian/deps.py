"""
Provider client factories exposed as FastAPI dependencies.

Clients are built on first use from guardian.config. Tests replace them with
app.dependency_overrides.
"""

from __future__ import annotations

from typing import Optional

from guardian import config
from guardian.model_client import GeminiModelClient, ModelClient
from guardian.speech_client import ElevenLabsClient, ElevenLabsConfig

_MODEL_CLIENT: Optional[ModelClient] = None
_SPEECH_CLIENT: Optional[ElevenLabsClient] = None


def create_model_client() -> GeminiModelClient:
    return GeminiModelClient(
        api_key=config.GEMINI_API_KEY,
        text_model=config.GEMINI_TEXT_MODEL,
        tts_model=config.GEMINI_TTS_MODEL,
        timeout=config.PROVIDER_TIMEOUT,
        api_base=config.GEMINI_API_BASE,
    )


def create_speech_client() -> ElevenLabsClient:
    return ElevenLabsClient(
        ElevenLabsConfig(
            api_key=config.ELEVENLABS_API_KEY,
            base_url=config.ELEVENLABS_API_BASE,
            model_id=config.ELEVENLABS_MODEL_ID,
            timeout=config.PROVIDER_TIMEOUT,
        )
    )


def get_model_client() -> ModelClient:
    global _MODEL_CLIENT
    if _MODEL_CLIENT is None:
        _MODEL_CLIENT = create_model_client()
    return _MODEL_CLIENT


def get_speech_client() -> ElevenLabsClient:
    global _SPEECH_CLIENT
    if _SPEECH_CLIENT is None:
        _SPEECH_CLIENT = create_speech_client()
    return _SPEECH_CLIENT


def close_clients() -> None:
    global _MODEL_CLIENT, _SPEECH_CLIENT
    if _SPEECH_CLIENT is not None:
        _SPEECH_CLIENT.close()
    _MODEL_CLIENT = None
    _SPEECH_CLIENT = None
