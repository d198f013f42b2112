from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(prefix="/api/music", tags=["music"])


class Track(BaseModel):
    id: int
    title: str
    movie: str
    url: str


# Playlist order is what the client loops through.
TRACKS: List[Dict[str, Any]] = [
    {"id": 1, "title": "Path of the Wind", "movie": "My Neighbor Totoro", "url": "/music/path_of_the_wind.mp3"},
    {"id": 2, "title": "A Town with an Ocean View", "movie": "Kiki's Delivery Service", "url": "/music/ocean_view.mp3"},
    {"id": 3, "title": "Merry-Go-Round of Life", "movie": "Howl's Moving Castle", "url": "/music/merry_go_round.mp3"},
    {"id": 4, "title": "One Summer's Day", "movie": "Spirited Away", "url": "/music/one_summers_day.mp3"},
    {"id": 5, "title": "The Legend of Ashitaka", "movie": "Princess Mononoke", "url": "/music/legend_of_ashitaka.mp3"},
    {"id": 6, "title": "Always with Me", "movie": "Spirited Away", "url": "/music/always_with_me.mp3"},
]


@router.get("", response_model=List[Track])
def list_tracks() -> List[Dict[str, Any]]:
    return [dict(t) for t in TRACKS]
