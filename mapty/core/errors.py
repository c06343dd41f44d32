"""Error types raised by the workout core.

Every error carries a user-facing message; AppState sends it to the
notification area before handing the error to the API layer.
"""
from typing import List, Optional


class MaptyError(Exception):
    """Base class for workout core errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(MaptyError):
    """Non-finite or non-positive input. Attributes: fields (offending input names)."""

    def __init__(self, message: str, fields: Optional[List[str]] = None) -> None:
        self.fields = list(fields or [])
        super().__init__(message)


class ConcurrentEditError(MaptyError):
    """A creation or edit session was requested while another one is open."""

    def __init__(self, message: str = "Editing in progress...") -> None:
        super().__init__(message)


class EditSessionError(MaptyError):
    """Submit or cancel for a session that is not the active one."""


class WorkoutNotFoundError(MaptyError):
    def __init__(self, workout_id: str) -> None:
        self.workout_id = workout_id
        super().__init__(f"Workout not found: {workout_id}")


class DecodeError(MaptyError):
    """Stored workout data is present but cannot be parsed."""


class StorageError(MaptyError):
    """The key-value medium could not be read or written."""
