"""Single-flight lock over workout creation and editing.

At most one session is open at a time for the whole collection:

    IDLE --begin_creation(coords)--> AWAITING_CREATION_INPUT --end_creation()--> IDLE
    IDLE --begin_edit(id)----------> EDITING(id) ------------end_edit(id)------> IDLE

Any begin while a session is open raises ConcurrentEditError and changes
nothing.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from mapty.core.errors import ConcurrentEditError, EditSessionError

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_CREATION_INPUT = "awaiting_creation_input"
    EDITING = "editing"


@dataclass(frozen=True)
class EditSession:
    state: SessionState
    workout_id: Optional[str] = None
    coords: Optional[Tuple[float, float]] = None


IDLE_SESSION = EditSession(SessionState.IDLE)


class EditCoordinator:
    def __init__(self) -> None:
        self._session = IDLE_SESSION

    @property
    def session(self) -> EditSession:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    def is_idle(self) -> bool:
        return self._session.state is SessionState.IDLE

    def acquire(self, session: EditSession) -> EditSession:
        """Open session if no other session is open."""
        if not self.is_idle():
            logger.warning(
                "Rejected %s: %s already open", session.state.value, self._session.state.value
            )
            raise ConcurrentEditError()
        self._session = session
        logger.debug("Session opened: %s", session)
        return session

    def release(self) -> None:
        if not self.is_idle():
            logger.debug("Session closed: %s", self._session)
        self._session = IDLE_SESSION

    def begin_creation(self, coords: Tuple[float, float]) -> EditSession:
        return self.acquire(EditSession(SessionState.AWAITING_CREATION_INPUT, coords=coords))

    def end_creation(self) -> Tuple[float, float]:
        """Close the creation form; returns the chosen coords."""
        session = self._session
        if session.state is not SessionState.AWAITING_CREATION_INPUT:
            raise EditSessionError("No workout form is open")
        self.release()
        return session.coords

    def begin_edit(self, workout_id: str) -> EditSession:
        return self.acquire(EditSession(SessionState.EDITING, workout_id=workout_id))

    def require_editing(self, workout_id: str) -> None:
        if self._session.state is not SessionState.EDITING or self._session.workout_id != workout_id:
            raise EditSessionError(f"Workout {workout_id} is not being edited")

    def end_edit(self, workout_id: str) -> None:
        self.require_editing(workout_id)
        self.release()
