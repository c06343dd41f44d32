"""Data models for workouts and notifications."""
from mapty.models.notification import Notification, Severity
from mapty.models.workout import Cycling, Running, Workout

__all__ = [
    "Workout",
    "Running",
    "Cycling",
    "Notification",
    "Severity",
]
