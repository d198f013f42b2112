from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


class SpeechClientError(Exception):
    """
    Error from the ElevenLabs API. `detail` holds the provider's own message
    when the error body carried one.
    """

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.detail = detail
        self.status_code = status_code


class SpeechNotConfiguredError(SpeechClientError):
    pass


# Fixed synthesis parameters used for every persona voice.
VOICE_SETTINGS: Dict[str, float] = {
    "stability": 0.5,
    "similarity_boost": 0.5,
}


@dataclass
class ElevenLabsConfig:
    api_key: str
    base_url: str = "https://api.elevenlabs.io/v1"
    model_id: str = "eleven_monolingual_v1"
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


def _extract_detail(resp: requests.Response) -> Optional[str]:
    """
    ElevenLabs errors look like {"detail": {"message": "..."}} or
    {"detail": "..."}. Anything else yields None.
    """
    try:
        body: Any = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    detail = body.get("detail")
    if isinstance(detail, dict):
        msg = detail.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    if isinstance(detail, str) and detail.strip():
        return detail.strip()
    return None


class ElevenLabsClient:
    """
    ElevenLabs text-to-speech client.

    NOTE ON ASYNC:
    This client uses `requests` internally (sync). For FastAPI usage we expose
    an async wrapper that runs the sync call in a thread via `asyncio.to_thread`.
    """

    def __init__(self, config: ElevenLabsConfig) -> None:
        self.config = config
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "audio/mpeg",
            }
        )

    def _build_url(self, voice_id: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/text-to-speech/{voice_id}"

    def synthesize_sync(self, text: str, voice_id: str) -> bytes:
        if not self.config.is_configured:
            raise SpeechNotConfiguredError("ElevenLabs API Key not configured.")

        url = self._build_url(voice_id)
        payload = {
            "text": text,
            "model_id": self.config.model_id,
            "voice_settings": dict(VOICE_SETTINGS),
        }

        try:
            resp = self._session.post(
                url,
                json=payload,
                headers={"xi-api-key": self.config.api_key},
                timeout=self.config.timeout,
            )
        except requests.Timeout as exc:
            raise SpeechClientError(
                f"ElevenLabs request timed out after {self.config.timeout} seconds"
            ) from exc
        except requests.RequestException as exc:
            raise SpeechClientError(f"Error communicating with ElevenLabs: {exc}") from exc

        if not resp.ok:
            detail = _extract_detail(resp)
            raise SpeechClientError(
                detail or "ElevenLabs API error",
                detail=detail,
                status_code=resp.status_code,
            )

        return resp.content

    async def synthesize(self, text: str, voice_id: str) -> bytes:
        return await asyncio.to_thread(self.synthesize_sync, text, voice_id)

    def close(self) -> None:
        self._session.close()
