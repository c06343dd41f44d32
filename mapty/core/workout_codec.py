"""Serialize workouts to a JSON string and rebuild them by type tag."""
import json
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List

from mapty.core.errors import DecodeError, ValidationError
from mapty.core.workout_factory import WORKOUT_TYPES, create_workout
from mapty.models.workout import Workout

logger = logging.getLogger(__name__)

# Python attribute -> stored key, for the type-specific fields
_STORED_NAMES = {
    "cadence": "cadence",
    "pace": "pace",
    "elevation_gain": "elevationGain",
    "speed": "speed",
}


def workout_to_dict(w: Workout) -> Dict[str, Any]:
    """Stored/API shape of a workout (camelCase keys)."""
    return {
        "id": w.id,
        "type": w.type,
        "coords": [w.coords[0], w.coords[1]],
        "distance": w.distance,
        "duration": w.duration,
        "createdAt": w.created_at.isoformat(),
        "clicks": w.clicks,
        _STORED_NAMES[w.extra_name]: w.extra,
        _STORED_NAMES[w.metric_name]: w.metric,
        "description": w.description,
    }


def _parse_created_at(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise DecodeError("createdAt must be an ISO 8601 string")
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as e:
        raise DecodeError(f"Invalid createdAt: {raw!r}") from e


def workout_from_dict(item: Any) -> Workout:
    """Rebuild a Running or Cycling from its stored dict.

    Inputs are re-validated and the derived metric and description are
    recomputed, so stored derived values are never trusted.
    """
    if not isinstance(item, dict):
        raise DecodeError("Workout entry must be an object")
    type_ = item.get("type")
    cls = WORKOUT_TYPES.get(type_) if isinstance(type_, str) else None
    if cls is None:
        raise DecodeError(f"Unknown workout type: {type_!r}")
    extra_key = _STORED_NAMES[cls.extra_name]
    try:
        workout_id = item["id"]
        coords = item["coords"]
        distance = item["distance"]
        duration = item["duration"]
        extra = item[extra_key]
        created_at = _parse_created_at(item["createdAt"])
        clicks = item.get("clicks", 0)
    except KeyError as e:
        raise DecodeError(f"Workout entry missing field {e.args[0]!r}") from e
    if not isinstance(workout_id, str) or not workout_id:
        raise DecodeError("Workout id must be a non-empty string")
    if isinstance(clicks, bool) or not isinstance(clicks, int) or clicks < 0:
        raise DecodeError(f"Invalid clicks for workout {workout_id}: {clicks!r}")
    try:
        workout = create_workout(
            type_, coords, distance, duration, extra,
            created_at=created_at, workout_id=workout_id,
        )
    except ValidationError as e:
        raise DecodeError(f"Invalid workout {workout_id}: {', '.join(e.fields)}") from e
    workout.clicks = clicks
    return workout


def encode(workouts: Iterable[Workout]) -> str:
    """Serialize every workout (full field set) to a JSON array string."""
    return json.dumps([workout_to_dict(w) for w in workouts])


def decode(raw: str) -> List[Workout]:
    """Parse a JSON array string back into Running/Cycling objects. DecodeError if corrupt."""
    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        raise DecodeError(f"Stored workouts are not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise DecodeError("Stored workouts must be a JSON array")
    out = [workout_from_dict(item) for item in data]
    ids = [w.id for w in out]
    if len(set(ids)) != len(ids):
        raise DecodeError("Stored workouts contain duplicate ids")
    logger.debug("Decoded %d workouts", len(out))
    return out
