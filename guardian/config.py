from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


# ----------------------------
# Environment & configuration
# ----------------------------

def _env(name: str, default: str = "") -> str:
    return (os.getenv(name, default) or "").strip()


def _float_env(name: str, default: float) -> float:
    try:
        raw = _env(name)
        return float(raw) if raw else float(default)
    except ValueError:
        return float(default)


def _int_env(name: str, default: int) -> int:
    try:
        raw = _env(name)
        return int(raw) if raw else int(default)
    except ValueError:
        return int(default)


def _csv_env(name: str, default: str) -> List[str]:
    raw = _env(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


# Keys left at their .env.example placeholder are treated as missing.
PLACEHOLDER_KEYS = {"YOUR_GEMINI_API_KEY", "YOUR_ELEVENLABS_API_KEY"}


def key_or_empty(value: str) -> str:
    return "" if value in PLACEHOLDER_KEYS else value


DB_PATH = _env("GUARDIAN_DB_PATH", "safety.db")

GEMINI_API_KEY = key_or_empty(_env("GEMINI_API_KEY"))
GEMINI_API_BASE = _env("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta").rstrip("/")
GEMINI_TEXT_MODEL = _env("GEMINI_TEXT_MODEL", "gemini-3-flash-preview")
GEMINI_TTS_MODEL = _env("GEMINI_TTS_MODEL", "gemini-2.5-flash-preview-tts")
GEMINI_TTS_VOICE = _env("GEMINI_TTS_VOICE", "Kore")

ELEVENLABS_API_KEY = key_or_empty(_env("ELEVENLABS_API_KEY"))
ELEVENLABS_API_BASE = _env("ELEVENLABS_API_BASE", "https://api.elevenlabs.io/v1").rstrip("/")
ELEVENLABS_MODEL_ID = _env("ELEVENLABS_MODEL_ID", "eleven_monolingual_v1")

PROVIDER_TIMEOUT = _float_env("GUARDIAN_PROVIDER_TIMEOUT", 30.0)

LOG_LEVEL = _env("GUARDIAN_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = _csv_env("GUARDIAN_CORS_ORIGINS", "*")

HOST = _env("GUARDIAN_HOST", "0.0.0.0")
PORT = _int_env("GUARDIAN_PORT", 3000)
