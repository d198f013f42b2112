from __future__ import annotations

import base64
import binascii
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import httpx


class ModelClientError(Exception):
    """Generic error from a model backend."""
    pass


class ModelNotConfiguredError(ModelClientError):
    """Raised when the provider API key is missing."""
    pass


def build_contents(
    instruction: str,
    history: List[Dict[str, Any]],
    message: str,
) -> List[Dict[str, Any]]:
    """
    Flatten a persona instruction, prior turns and the new user message into
    Gemini's multi-turn `contents` list.

    The instruction goes first as a user turn. History roles other than
    "user" are treated as the companion ("model").
    """
    contents: List[Dict[str, Any]] = [
        {"role": "user", "parts": [{"text": f"System Instruction: {instruction}"}]},
    ]
    for turn in history:
        role = "user" if turn.get("role") == "user" else "model"
        contents.append({"role": role, "parts": [{"text": str(turn.get("text") or "")}]})
    contents.append({"role": "user", "parts": [{"text": message}]})
    return contents


def _first_parts(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    return [p for p in parts if isinstance(p, dict)] if isinstance(parts, list) else []


class ModelClient(ABC):
    """
    Abstract base for the generative-AI backend.
    Handlers talk to THIS instead of httpx directly.
    """

    def __init__(self, text_model: str, tts_model: str) -> None:
        self.text_model = text_model
        self.tts_model = tts_model

    @abstractmethod
    async def generate_content(
        self,
        contents: Any,
        *,
        model: str,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send a generateContent request and return the raw response dict.

        - contents: a plain string or a list of {"role", "parts"} turns
        - model: provider model name
        - generation_config: passed through as `generationConfig`
        """
        raise NotImplementedError

    async def generate_text(self, contents: Any, model: Optional[str] = None) -> str:
        data = await self.generate_content(contents, model=model or self.text_model)
        texts = [p["text"] for p in _first_parts(data) if isinstance(p.get("text"), str)]
        if not texts:
            raise ModelClientError("Model returned no text")
        return "".join(texts)

    async def generate_json(self, prompt: str, model: Optional[str] = None) -> Any:
        data = await self.generate_content(
            prompt,
            model=model or self.text_model,
            generation_config={"responseMimeType": "application/json"},
        )
        texts = [p["text"] for p in _first_parts(data) if isinstance(p.get("text"), str)]
        if not texts:
            raise ModelClientError("Model returned no text")
        try:
            return json.loads("".join(texts))
        except ValueError as exc:
            raise ModelClientError(f"Model returned invalid JSON: {exc}") from exc

    async def generate_speech(self, text: str, voice_name: str) -> bytes:
        audio, _ = await self.generate_speech_part(text, voice_name)
        return audio

    async def generate_speech_part(self, text: str, voice_name: str) -> Tuple[bytes, Optional[str]]:
        """
        Return (audio bytes, provider mime type). Gemini TTS usually answers
        with raw PCM such as "audio/L16;codec=pcm;rate=24000".
        """
        data = await self.generate_content(
            [{"parts": [{"text": text}]}],
            model=self.tts_model,
            generation_config={
                "responseModalities": ["AUDIO"],
                "speechConfig": {
                    "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice_name}},
                },
            },
        )
        parts = _first_parts(data)
        inline = (parts[0].get("inlineData") or {}) if parts else {}
        payload = inline.get("data") if isinstance(inline, dict) else None
        if not isinstance(payload, str) or not payload:
            raise ModelClientError("Audio generation failed")
        mime_type = inline.get("mimeType")
        try:
            audio = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ModelClientError("Audio generation failed") from exc
        return audio, mime_type if isinstance(mime_type, str) and mime_type else None


# ======================================================================
# Gemini client
# ======================================================================

class GeminiModelClient(ModelClient):
    """
    Gemini REST client (generateContent).

    It expects:
      - api_key sent as x-goog-api-key
      - api_base like "https://generativelanguage.googleapis.com/v1beta"
    """

    def __init__(
        self,
        api_key: Optional[str],
        text_model: str,
        tts_model: str,
        timeout: float = 30.0,
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(text_model=text_model, tts_model=tts_model)
        self.api_key = api_key
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate_content(
        self,
        contents: Any,
        *,
        model: str,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if not self.api_key:
            raise ModelNotConfiguredError("GEMINI_API_KEY not configured.")

        if isinstance(contents, str):
            contents = [{"role": "user", "parts": [{"text": contents}]}]

        payload: Dict[str, Any] = {"contents": contents}
        if generation_config:
            payload["generationConfig"] = generation_config

        url = f"{self.api_base}/models/{model}:generateContent"
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                resp = await client.post(url, json=payload, headers=headers)
            except httpx.RequestError as exc:
                raise ModelClientError(f"Error contacting Gemini: {exc}") from exc

        if resp.status_code != 200:
            raise ModelClientError(
                f"Gemini returned {resp.status_code}: {resp.text[:500]}"
            )

        try:
            data: Any = resp.json()
        except ValueError as exc:
            raise ModelClientError(f"Invalid JSON from Gemini: {exc}") from exc

        if not isinstance(data, dict):
            raise ModelClientError("Unexpected Gemini response shape")

        return data
