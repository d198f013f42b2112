from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from guardian.deps import get_model_client
from guardian.model_client import ModelClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assessment"])

RiskLevel = Literal["Low", "Medium", "High"]

RISK_LEVELS = ("Low", "Medium", "High")

FALLBACK_ASSESSMENT: Dict[str, str] = {
    "riskLevel": "Low",
    "guardianMessage": "I am here with you. Walk mindfully and trust your heart.",
}

SCENARIOS: List[Dict[str, str]] = [
    {"id": "late-night-walk", "label": "Late Night Walk"},
    {"id": "rideshare", "label": "Rideshare Trip"},
    {"id": "party", "label": "Social Event / Party"},
    {"id": "campus", "label": "Campus Navigation"},
]


class AssessRequest(BaseModel):
    scenario: Optional[str] = None


class AssessResponse(BaseModel):
    riskLevel: RiskLevel
    guardianMessage: str


def build_assessment_prompt(scenario: str) -> str:
    return (
        f'Assess the safety risk for a woman in this scenario: "{scenario}". \n'
        "Return a JSON object with:\n"
        '- "riskLevel": "Low", "Medium", or "High"\n'
        '- "guardianMessage": A short, comforting, Ghibli-style message (max 2 sentences) '
        "offering specific advice for this scenario."
    )


def normalize_assessment(raw: Any) -> Optional[Dict[str, str]]:
    """
    Return a clean {riskLevel, guardianMessage} dict, or None when the model
    output doesn't fit that shape.
    """
    if not isinstance(raw, dict):
        return None
    level = raw.get("riskLevel")
    message = raw.get("guardianMessage")
    if level not in RISK_LEVELS:
        return None
    if not isinstance(message, str) or not message.strip():
        return None
    return {"riskLevel": level, "guardianMessage": message.strip()}


async def assess_scenario(client: ModelClient, scenario: str) -> Dict[str, str]:
    """
    Ask the model for a risk note. Never raises: provider errors and malformed
    output both degrade to FALLBACK_ASSESSMENT.
    """
    try:
        raw = await client.generate_json(build_assessment_prompt(scenario))
    except Exception as exc:  # noqa: BLE001
        logger.warning("Assessment fell back after provider error: %s", exc)
        return dict(FALLBACK_ASSESSMENT)

    result = normalize_assessment(raw)
    if result is None:
        logger.warning("Assessment fell back after malformed model output: %r", raw)
        return dict(FALLBACK_ASSESSMENT)
    return result


@router.post("/assess", response_model=AssessResponse)
async def assess(
    body: AssessRequest,
    client: ModelClient = Depends(get_model_client),
) -> Dict[str, str]:
    return await assess_scenario(client, body.scenario or "")


@router.get("/api/scenarios")
def list_scenarios() -> List[Dict[str, str]]:
    return [dict(s) for s in SCENARIOS]
