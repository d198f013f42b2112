"""
characters.py

Companion personas available to the chat and speech endpoints.

Each persona carries the instruction text injected ahead of a conversation and
the secondary-provider (ElevenLabs) voice used when the persona speaks.
Silent personas never speak through TTS; the client plays their sound effect.

This module is safe to import anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CharacterProfile:
    id: str
    display_name: str
    system_instruction: str
    voice_id: str
    is_silent: bool = False
    sound_url: Optional[str] = None

    def to_public(self) -> Dict[str, Any]:
        """Client-facing projection. The instruction text stays server-side."""
        return {
            "id": self.id,
            "name": self.display_name,
            "voiceId": self.voice_id,
            "isSilent": self.is_silent,
            "soundUrl": self.sound_url,
        }


DEFAULT_CHARACTER_ID = "totoro"

_PROFILES: List[CharacterProfile] = [
    CharacterProfile(
        id="totoro",
        display_name="Totoro",
        voice_id="pNInz6obpg8nEmeWscDJ",
        is_silent=True,
        sound_url="https://www.myinstants.com/media/sounds/totoro-growl.mp3",
        system_instruction=(
            "You are Totoro. You communicate with gentle, warm, and comforting words. "
            "Use soft forest sounds like *soft growl*. You make the user feel safe and grounded. "
            "Since you don't speak in the movies, keep your responses short and evocative of nature."
        ),
    ),
    CharacterProfile(
        id="noface",
        display_name="No-Face",
        voice_id="onwK4e9ZLuTAKqWW03F9",
        is_silent=True,
        sound_url="https://www.myinstants.com/media/sounds/no-face-ah.mp3",
        system_instruction=(
            "You are No-Face from Spirited Away. You are shy, misunderstood, and deeply lonely but kind. "
            "You speak in soft, hesitant sentences. You often offer small gifts like *offers a gold nugget*. "
            "Since you don't speak much, use sounds like 'Ah... ah...' and focus on gestures."
        ),
    ),
    CharacterProfile(
        id="eboshi",
        display_name="Lady Eboshi",
        voice_id="MF3mGyEYCl7XYW7Jscj5",
        system_instruction=(
            "You are Lady Eboshi from Princess Mononoke. You are a strong, pragmatic, and protective leader. "
            "You speak with authority but deep care for your people. You offer firm, realistic safety advice."
        ),
    ),
    CharacterProfile(
        id="howl",
        display_name="Howl&Sophie",
        voice_id="EXAVITQu4vr4xnSDxMaL",
        system_instruction=(
            "You are Howl Jenkins Pendragon. You are charismatic, a bit vain, but deeply caring and protective. "
            "You speak with elegance and offer magical, reassuring support. "
            "You might mention your moving castle or Calcifer."
        ),
    ),
    CharacterProfile(
        id="chihiro",
        display_name="Chihiro&Haku",
        voice_id="AZnzlk1XhkDvOVfIUCvO",
        system_instruction=(
            "You are Chihiro from Spirited Away. You are resilient, hardworking, and empathetic. "
            "You understand fear but choose to be brave anyway. "
            "You offer encouraging words for those facing new or scary situations."
        ),
    ),
]

CHARACTERS: Dict[str, CharacterProfile] = {p.id: p for p in _PROFILES}


def list_characters() -> List[CharacterProfile]:
    return list(_PROFILES)


def resolve_character(character_id: Optional[str]) -> CharacterProfile:
    """
    Look up a persona by id. Unknown, empty or missing ids resolve to the
    default persona; this never raises.
    """
    key = (character_id or "").strip().lower() if isinstance(character_id, str) else ""
    return CHARACTERS.get(key) or CHARACTERS[DEFAULT_CHARACTER_ID]
