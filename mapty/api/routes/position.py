"""User position reported by the browser's positioning service."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from mapty.api.state import AppState, get_state
from mapty.config import MAP_ZOOM_LEVEL

router = APIRouter()


class PositionBody(BaseModel):
    lat: float
    lng: float


@router.get("/")
def get_position(state: AppState = Depends(get_state)):
    """Map centre and zoom for the renderer."""
    coords = list(state.position) if state.position else None
    return {"coords": coords, "zoom": MAP_ZOOM_LEVEL}


@router.post("/")
def position_resolved(body: PositionBody, state: AppState = Depends(get_state)):
    coords = state.position_resolved((body.lat, body.lng))
    return {"coords": list(coords), "zoom": MAP_ZOOM_LEVEL}


@router.post("/error")
def position_failed(state: AppState = Depends(get_state)):
    """Positioning denied or unavailable; not retried."""
    state.position_failed()
    return {"ok": True}
