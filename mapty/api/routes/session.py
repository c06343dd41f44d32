"""Create-form session: location selection and cancel."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from mapty.api.state import AppState, get_state

router = APIRouter()


class LocationBody(BaseModel):
    lat: float
    lng: float


def session_to_dict(session) -> dict:
    """API shape of the open form; shared with the workout edit routes."""
    return {
        "state": session.state.value,
        "workoutId": session.workout_id,
        "coords": list(session.coords) if session.coords else None,
    }


@router.get("/")
def get_session(state: AppState = Depends(get_state)):
    """Return the open form (creation or edit), if any."""
    return session_to_dict(state.session())


@router.post("/location")
def select_location(body: LocationBody, state: AppState = Depends(get_state)):
    """Map clicked: open the create form at lat/lng."""
    return session_to_dict(state.select_location((body.lat, body.lng)))


@router.post("/cancel")
def cancel_creation(state: AppState = Depends(get_state)):
    """Close the create form without adding a workout."""
    state.cancel_creation()
    return session_to_dict(state.session())
