from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/alert", tags=["alert"])

ALERT_ACK_MESSAGE = "Alerts sent to your guardians."


class AlertLocation(BaseModel):
    # A failed geolocation can arrive as a partial or empty object.
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.lat is not None and self.lng is not None


class AlertContact(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[int] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    relation: Optional[str] = None


class AlertRequest(BaseModel):
    location: Optional[AlertLocation] = None
    contacts: Optional[List[AlertContact]] = None
    message: Optional[str] = ""


class AlertResponse(BaseModel):
    success: bool
    message: str


def maps_link(location: AlertLocation) -> str:
    return f"https://www.google.com/maps?q={location.lat},{location.lng}"


def record_alert(body: AlertRequest) -> Dict[str, Any]:
    """
    Log an SOS request. Nothing is delivered: there is no SMS/email provider
    behind this, so the acknowledgement only means "logged".
    """
    contacts = body.contacts or []
    logger.warning("[ALERT] Sending to %d contacts: %s", len(contacts), body.message or "")
    if body.location is not None and body.location.is_complete:
        logger.warning("[LOCATION] %s", maps_link(body.location))
    else:
        logger.warning("[LOCATION] unavailable")
    return {"success": True, "message": ALERT_ACK_MESSAGE}


@router.post("", response_model=AlertResponse)
async def send_alert(body: AlertRequest) -> Dict[str, Any]:
    return record_alert(body)
