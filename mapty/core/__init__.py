"""Core services: workout factory, codec, store, edit lock, notifications."""
from mapty.core.edit_coordinator import EditCoordinator
from mapty.core.notifications import NotificationScheduler
from mapty.core.workout_store import WorkoutStore

__all__ = ["EditCoordinator", "NotificationScheduler", "WorkoutStore"]
