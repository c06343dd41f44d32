"""Shared fixtures: in-memory storage, hand-driven timers, isolated app state."""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from mapty.api.app import app
from mapty.api.state import AppState, get_state
from mapty.core.kv_store import MemoryKeyValueStore
from mapty.core.notifications import NotificationScheduler
from mapty.core.workout_store import WorkoutStore


class ManualTimer:
    def __init__(self, delay_sec, callback):
        self.delay_sec = delay_sec
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Run the callback as a timer thread would, unless cancelled."""
        if not self.cancelled:
            self.fired = True
            self.callback()


class ManualTimers:
    """Timer factory that records timers instead of starting threads."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay_sec, callback):
        timer = ManualTimer(delay_sec, callback)
        self.timers.append(timer)
        return timer

    def pending(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def run_all(self):
        for t in sorted(self.pending(), key=lambda t: t.delay_sec):
            t.fire()


@pytest.fixture
def created_at():
    return datetime(2024, 4, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def timers():
    return ManualTimers()


@pytest.fixture
def notifier(timers):
    return NotificationScheduler(visible_sec=4.0, transition_sec=0.5, timer_factory=timers)


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def store(kv):
    return WorkoutStore(kv, key="workouts")


@pytest.fixture
def state(kv, notifier):
    return AppState(kv=kv, notifications=notifier)


@pytest.fixture
def client(state):
    """Test client bound to an isolated AppState (lifespan not run)."""
    app.dependency_overrides[get_state] = lambda: state
    yield TestClient(app)
    app.dependency_overrides.clear()
