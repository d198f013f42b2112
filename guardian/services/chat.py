from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from guardian.characters import list_characters, resolve_character
from guardian.deps import get_model_client
from guardian.model_client import ModelClient, build_contents

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


class ChatTurn(BaseModel):
    # Client sends "user" and "bot"; anything but "user" is the companion.
    role: Optional[Any] = "user"
    text: Optional[Any] = ""


class ChatRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    # Non-string ids resolve to the default persona.
    character: Optional[Any] = None
    message: Optional[str] = ""
    history: Optional[List[ChatTurn]] = Field(default_factory=list)


class ChatResponse(BaseModel):
    text: str


async def chat_with_character(
    client: ModelClient,
    character_id: Any,
    message: str,
    history: List[ChatTurn],
) -> str:
    profile = resolve_character(character_id)
    contents = build_contents(
        profile.system_instruction,
        [turn.model_dump() for turn in history],
        message,
    )
    return await client.generate_text(contents)


@router.post("/api/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    client: ModelClient = Depends(get_model_client),
) -> Any:
    try:
        text = await chat_with_character(
            client, body.character, body.message or "", body.history or []
        )
    except Exception as exc:  # noqa: BLE001
        logger.error("Chat Error: %s", exc, exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Chat failed."})
    return {"text": text}


@router.get("/api/characters")
def characters() -> List[Dict[str, Any]]:
    return [p.to_public() for p in list_characters()]
