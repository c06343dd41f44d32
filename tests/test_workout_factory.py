"""Tests for workout creation, validation and derived metrics."""
import math

import pytest

from mapty.core.errors import ValidationError
from mapty.core.workout_factory import create_workout, validate_inputs
from mapty.models.workout import Cycling, Running, Workout


def test_running_pace_and_description(created_at):
    w = create_workout("running", [10, 10], 5, 25, 150, created_at=created_at)

    assert isinstance(w, Running)
    assert w.pace == pytest.approx(5.0)
    assert w.cadence == 150
    assert w.coords == (10.0, 10.0)
    assert w.description == "Running on April 14"
    assert w.clicks == 0
    assert w.id


def test_cycling_speed_and_description(created_at):
    w = create_workout("cycling", [51.5, -0.1], 20, 40, 120, created_at=created_at)

    assert isinstance(w, Cycling)
    assert w.speed == pytest.approx(30.0)
    assert w.elevation_gain == 120
    assert w.description == "Cycling on April 14"


def test_ids_are_unique_for_rapid_creation():
    ids = {create_workout("running", [0, 0], 1, 1, 1).id for _ in range(200)}
    assert len(ids) == 200


@pytest.mark.parametrize(
    "distance,duration,cadence,bad",
    [
        (0, 25, 150, ["distance"]),
        (5, 0, 150, ["duration"]),
        (-1, -1, 150, ["distance", "duration"]),
        (5, 25, math.nan, ["cadence"]),
        (5, 25, math.inf, ["cadence"]),
        (5, 25, 0, ["cadence"]),
        (None, 25, 150, ["distance"]),
        ("5", 25, 150, ["distance"]),
        (True, 25, 150, ["distance"]),
    ],
)
def test_running_validation_rejects(distance, duration, cadence, bad):
    with pytest.raises(ValidationError) as exc:
        create_workout("running", [0, 0], distance, duration, cadence)
    assert exc.value.fields == bad
    assert exc.value.message == "Inputs have to be positive numbers"


def test_cycling_allows_negative_and_zero_elevation():
    assert create_workout("cycling", [0, 0], 10, 30, -5).elevation_gain == -5
    assert create_workout("cycling", [0, 0], 10, 30, 0).elevation_gain == 0


def test_cycling_rejects_non_finite_elevation():
    with pytest.raises(ValidationError) as exc:
        validate_inputs("cycling", 10, 30, math.nan)
    assert exc.value.fields == ["elevation_gain"]


def test_unknown_type_rejected():
    with pytest.raises(ValidationError) as exc:
        create_workout("swimming", [0, 0], 1, 1, 1)
    assert exc.value.fields == ["type"]


@pytest.mark.parametrize("coords", [[0], [0, math.nan], "10,10", [0, 0, 0]])
def test_bad_coords_rejected(coords):
    with pytest.raises(ValidationError) as exc:
        create_workout("running", coords, 1, 1, 1)
    assert exc.value.fields == ["coords"]


def test_update_recomputes_metric(created_at):
    run = create_workout("running", [0, 0], 5, 25, 150, created_at=created_at)
    run.update(10.0, 45.0, 160.0)
    assert run.pace == pytest.approx(4.5)
    assert run.cadence == 160.0

    ride = create_workout("cycling", [0, 0], 20, 40, 10, created_at=created_at)
    ride.update(30.0, 60.0, -3.0)
    assert ride.speed == pytest.approx(30.0)
    assert ride.elevation_gain == -3.0


def test_click_counts():
    w = create_workout("running", [0, 0], 1, 1, 1)
    w.click()
    assert w.click() == 2


@pytest.mark.parametrize("field", ["distance", "duration", "cadence"])
def test_huge_integers_are_rejected_not_crashing(field):
    values = {"distance": 5, "duration": 25, "cadence": 150}
    values[field] = 10**400
    with pytest.raises(ValidationError) as exc:
        create_workout("running", [0, 0], values["distance"], values["duration"], values["cadence"])
    assert exc.value.fields == [field]


def test_huge_integer_coords_rejected():
    with pytest.raises(ValidationError) as exc:
        create_workout("cycling", [10**400, 0], 5, 25, 10)
    assert exc.value.fields == ["coords"]


def test_base_workout_cannot_be_instantiated(created_at):
    with pytest.raises(TypeError, match="abstract"):
        Workout("x", (0.0, 0.0), 5.0, 25.0, created_at)
