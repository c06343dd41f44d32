"""Workout CRUD, edit sessions, sorting and activation."""
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field

from mapty.api.routes.session import session_to_dict
from mapty.api.state import AppState, get_state
from mapty.core.workout_codec import workout_to_dict

router = APIRouter()


class CreateWorkoutBody(BaseModel):
    """Create form. Missing numbers are rejected by workout validation, not here."""
    model_config = ConfigDict(populate_by_name=True)

    type: str
    distance: Optional[float] = None
    duration: Optional[float] = None
    cadence: Optional[float] = None
    elevation_gain: Optional[float] = Field(default=None, alias="elevationGain")

    def extra_for(self, type_: str) -> Optional[float]:
        return self.cadence if type_ == "running" else self.elevation_gain


class EditWorkoutBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    distance: Optional[float] = None
    duration: Optional[float] = None
    cadence: Optional[float] = None
    elevation_gain: Optional[float] = Field(default=None, alias="elevationGain")


@router.get("/")
def list_workouts(
    sort: Optional[str] = None,
    state: AppState = Depends(get_state),
):
    """List workouts in creation order, or by distance/duration (largest first)."""
    if sort is None:
        workouts = state.list_workouts()
    else:
        workouts = state.sorted_workouts(sort)
    return [workout_to_dict(w) for w in workouts]


@router.post("/", status_code=201)
def create_workout(body: CreateWorkoutBody, state: AppState = Depends(get_state)):
    """Submit the create form for the selected location."""
    workout = state.submit_workout(
        body.type, body.distance, body.duration, body.extra_for(body.type)
    )
    return workout_to_dict(workout)


@router.delete("/", status_code=200)
def delete_all_workouts(confirmed: bool = False, state: AppState = Depends(get_state)):
    """Delete every workout; requires confirmed=true from the UI prompt."""
    deleted = state.delete_all(confirmed)
    return {"ok": deleted}


@router.post("/reset", status_code=204)
def reset_workouts(state: AppState = Depends(get_state)):
    """Drop stored workouts entirely."""
    state.reset()
    return Response(status_code=204)


@router.get("/{workout_id}")
def get_workout(workout_id: str, state: AppState = Depends(get_state)):
    return workout_to_dict(state.get_workout(workout_id))


@router.delete("/{workout_id}", status_code=204)
def delete_workout(workout_id: str, state: AppState = Depends(get_state)):
    state.delete_workout(workout_id)
    return Response(status_code=204)


@router.post("/{workout_id}/activate")
def activate_workout(workout_id: str, state: AppState = Depends(get_state)):
    """Marker or list item clicked: count it and return the workout to pan to."""
    return workout_to_dict(state.activate_workout(workout_id))


@router.post("/{workout_id}/edit")
def start_edit(workout_id: str, state: AppState = Depends(get_state)):
    """Open the inline edit form (only one form may be open at a time)."""
    return session_to_dict(state.request_edit(workout_id))


@router.patch("/{workout_id}")
def submit_edit(workout_id: str, body: EditWorkoutBody, state: AppState = Depends(get_state)):
    """Confirm the open edit form."""
    workout = state.submit_edit(
        workout_id,
        body.distance,
        body.duration,
        cadence=body.cadence,
        elevation_gain=body.elevation_gain,
    )
    return workout_to_dict(workout)


@router.post("/{workout_id}/edit/cancel")
def cancel_edit(workout_id: str, state: AppState = Depends(get_state)):
    state.cancel_edit(workout_id)
    return session_to_dict(state.session())
