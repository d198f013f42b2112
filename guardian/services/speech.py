from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from guardian import config
from guardian.characters import resolve_character
from guardian.deps import get_model_client, get_speech_client
from guardian.model_client import ModelClient
from guardian.speech_client import (
    ElevenLabsClient,
    SpeechClientError,
    SpeechNotConfiguredError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["speech"])

# Used when the provider does not say what it returned.
AUDIO_MEDIA_TYPE = "audio/mpeg"


class SpeakRequest(BaseModel):
    text: str = ""


class SpeakAsRequest(BaseModel):
    text: str = ""
    voiceId: Optional[str] = None
    character: Optional[str] = None


def _error(message: str, detail: Optional[str] = None) -> JSONResponse:
    content: Dict[str, Any] = {"error": message}
    if detail:
        content["detail"] = detail
    return JSONResponse(status_code=500, content=content)


@router.post("/tts")
async def speak(
    body: SpeakRequest,
    client: ModelClient = Depends(get_model_client),
) -> Response:
    """
    Primary voice: Gemini TTS with the fixed prebuilt voice.
    """
    try:
        audio, mime_type = await client.generate_speech_part(body.text, config.GEMINI_TTS_VOICE)
    except Exception as exc:  # noqa: BLE001
        logger.error("TTS Error: %s", exc, exc_info=True)
        return _error("Failed to generate voice.")
    return Response(content=audio, media_type=mime_type or AUDIO_MEDIA_TYPE)


@router.post("/api/tts/elevenlabs")
async def speak_as(
    body: SpeakAsRequest,
    client: ElevenLabsClient = Depends(get_speech_client),
) -> Response:
    """
    Persona voice via ElevenLabs. An explicit voiceId wins; otherwise the
    voice of the named (or default) character is used.
    """
    voice_id = body.voiceId or resolve_character(body.character).voice_id

    try:
        audio = await client.synthesize(body.text, voice_id)
    except SpeechNotConfiguredError as exc:
        logger.error("ElevenLabs Error: %s", exc)
        return _error("ElevenLabs API Key not configured.")
    except SpeechClientError as exc:
        logger.error("ElevenLabs Error: %s", exc)
        return _error("Failed to generate ElevenLabs voice.", exc.detail)
    return Response(content=audio, media_type=AUDIO_MEDIA_TYPE)
