"""Current status message for the UI message area."""
from fastapi import APIRouter, Depends

from mapty.api.state import AppState, get_state

router = APIRouter()


@router.get("/current")
def get_current(state: AppState = Depends(get_state)):
    n = state.notifications.current()
    return {"message": n.message, "severity": n.severity, "visible": n.visible}
