"""Build validated workouts from raw form input."""
import logging
import math
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Type

from mapty.core.errors import ValidationError
from mapty.models.workout import Cycling, Running, Workout

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Inputs have to be positive numbers"

# Type tag -> class; used for creation and for decoding stored workouts
WORKOUT_TYPES: Dict[str, Type[Workout]] = {
    Running.type: Running,
    Cycling.type: Cycling,
}


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def workout_class(type_: str) -> Type[Workout]:
    """Return the workout class for a type tag; ValidationError if unknown."""
    cls = WORKOUT_TYPES.get(type_)
    if cls is None:
        raise ValidationError(f"Unknown workout type: {type_!r}", fields=["type"])
    return cls


def validate_coords(coords: Sequence[Any]) -> tuple:
    if (
        not isinstance(coords, (list, tuple))
        or len(coords) != 2
        or not all(_is_finite_number(c) for c in coords)
    ):
        raise ValidationError("Coordinates have to be two finite numbers", fields=["coords"])
    return (float(coords[0]), float(coords[1]))


def validate_inputs(type_: str, distance: Any, duration: Any, extra: Any) -> None:
    """Check raw inputs for a workout type.

    distance, duration and the type-specific extra must all be finite;
    distance and duration must be positive. Cadence must be positive too,
    elevation gain may be zero or negative.
    """
    cls = workout_class(type_)
    inputs = {"distance": distance, "duration": duration, cls.extra_name: extra}
    bad: List[str] = [name for name, value in inputs.items() if not _is_finite_number(value)]
    positive = ["distance", "duration"]
    if cls is Running:
        positive.append("cadence")
    bad.extend(name for name in positive if name not in bad and inputs[name] <= 0)
    if bad:
        raise ValidationError(INVALID_INPUT_MESSAGE, fields=bad)


def new_workout_id() -> str:
    return str(uuid.uuid4())


def create_workout(
    type_: str,
    coords: Sequence[float],
    distance: float,
    duration: float,
    extra: float,
    *,
    created_at: Optional[datetime] = None,
    workout_id: Optional[str] = None,
) -> Workout:
    """Validate input and return a new Running or Cycling with metric and description set."""
    cls = workout_class(type_)
    validate_inputs(type_, distance, duration, extra)
    lat_lng = validate_coords(coords)
    workout = cls(
        workout_id or new_workout_id(),
        lat_lng,
        float(distance),
        float(duration),
        created_at or datetime.now().astimezone(),
        float(extra),
    )
    logger.debug("Created %s %s (%s=%.2f)", workout.type, workout.id, cls.metric_name, workout.metric)
    return workout
