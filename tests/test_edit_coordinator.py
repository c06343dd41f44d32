"""Tests for the single-flight creation/edit lock."""
import pytest

from mapty.core.edit_coordinator import EditCoordinator, SessionState
from mapty.core.errors import ConcurrentEditError, EditSessionError


@pytest.fixture
def coordinator():
    return EditCoordinator()


def test_starts_idle(coordinator):
    assert coordinator.state is SessionState.IDLE
    assert coordinator.session.workout_id is None


def test_creation_cycle(coordinator):
    session = coordinator.begin_creation((10.0, 20.0))
    assert session.state is SessionState.AWAITING_CREATION_INPUT
    assert coordinator.end_creation() == (10.0, 20.0)
    assert coordinator.is_idle()


def test_edit_blocks_other_sessions(coordinator):
    coordinator.begin_edit("a")

    with pytest.raises(ConcurrentEditError) as exc:
        coordinator.begin_edit("b")
    assert exc.value.message == "Editing in progress..."
    with pytest.raises(ConcurrentEditError):
        coordinator.begin_creation((0.0, 0.0))
    with pytest.raises(ConcurrentEditError):
        coordinator.begin_edit("a")

    assert coordinator.state is SessionState.EDITING
    assert coordinator.session.workout_id == "a"


def test_creation_blocks_edit_and_second_creation(coordinator):
    coordinator.begin_creation((1.0, 1.0))
    with pytest.raises(ConcurrentEditError):
        coordinator.begin_edit("a")
    with pytest.raises(ConcurrentEditError):
        coordinator.begin_creation((2.0, 2.0))
    assert coordinator.session.coords == (1.0, 1.0)


def test_new_session_allowed_after_end(coordinator):
    coordinator.begin_edit("a")
    coordinator.end_edit("a")
    assert coordinator.begin_edit("b").workout_id == "b"
    coordinator.release()
    assert coordinator.begin_creation((0.0, 0.0)).state is SessionState.AWAITING_CREATION_INPUT


def test_end_without_matching_session(coordinator):
    with pytest.raises(EditSessionError):
        coordinator.end_creation()
    with pytest.raises(EditSessionError):
        coordinator.end_edit("a")

    coordinator.begin_edit("a")
    with pytest.raises(EditSessionError):
        coordinator.end_edit("b")
    with pytest.raises(EditSessionError):
        coordinator.end_creation()
    assert coordinator.session.workout_id == "a"
