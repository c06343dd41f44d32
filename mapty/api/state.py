"""Shared application state (injected into routes).

Each UI event is one method. Events run one at a time under a re-entrant
lock so a mutation, including its storage write, completes before the
next event starts. Core errors are shown in the notification area and
then re-raised for the API layer.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

from mapty.config import STORAGE_PATH
from mapty.core.edit_coordinator import EditCoordinator, EditSession, SessionState
from mapty.core.errors import DecodeError, MaptyError, StorageError, WorkoutNotFoundError
from mapty.core.kv_store import JsonFileKeyValueStore, KeyValueStore
from mapty.core.notifications import NotificationScheduler
from mapty.core.workout_factory import create_workout, validate_coords
from mapty.core.workout_store import WorkoutStore
from mapty.models.workout import Workout

logger = logging.getLogger(__name__)

POSITION_FAILED_MESSAGE = "Could not get your position"
LOAD_FAILED_MESSAGE = "Could not load saved workouts"
EDITED_MESSAGE = "Successfully Edited"


class AppState:
    def __init__(
        self,
        kv: Optional[KeyValueStore] = None,
        notifications: Optional[NotificationScheduler] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._kv = kv if kv is not None else JsonFileKeyValueStore(STORAGE_PATH)
        self.store = WorkoutStore(self._kv)
        self.coordinator = EditCoordinator()
        self.notifications = notifications or NotificationScheduler()
        self.position: Optional[Tuple[float, float]] = None
        self.load_error: Optional[MaptyError] = None

    @contextmanager
    def _event(self) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except MaptyError as e:
                self.notifications.show(e.message, "error")
                raise

    # Startup / shutdown

    def load(self) -> List[Workout]:
        """Hydrate the store. Corrupt data is kept under '<key>.corrupt' and the log starts empty."""
        with self._lock:
            self.load_error = None
            try:
                return self.store.load()
            except DecodeError as e:
                logger.warning("Stored workouts are corrupt, starting empty: %s", e)
                self.load_error = e
                self._backup_corrupt()
            except StorageError as e:
                logger.warning("Cannot read workout storage: %s", e)
                self.load_error = e
            self.notifications.show(LOAD_FAILED_MESSAGE, "error")
            return []

    def _backup_corrupt(self) -> None:
        raw = self._kv.get(self.store.key)
        if raw is None:
            return
        backup_key = f"{self.store.key}.corrupt"
        try:
            self._kv.set(backup_key, raw)
        except StorageError as e:
            logger.warning("Could not back up corrupt workouts: %s", e)
            return
        logger.info("Corrupt workouts copied to %r", backup_key)

    def shutdown(self) -> None:
        self.notifications.cancel()

    # Position

    def position_resolved(self, coords: Sequence[float]) -> Tuple[float, float]:
        with self._event():
            self.position = validate_coords(coords)
            return self.position

    def position_failed(self) -> None:
        with self._lock:
            logger.warning("Position unavailable")
            self.notifications.show(POSITION_FAILED_MESSAGE, "error")

    # Creation

    def session(self) -> EditSession:
        with self._lock:
            return self.coordinator.session

    def select_location(self, coords: Sequence[float]) -> EditSession:
        with self._event():
            return self.coordinator.begin_creation(validate_coords(coords))

    def cancel_creation(self) -> None:
        with self._event():
            self.coordinator.end_creation()

    def submit_workout(self, type_: str, distance: float, duration: float, extra: float) -> Workout:
        """Close the form (success or not) and add the workout at the chosen location."""
        with self._event():
            coords = self.coordinator.end_creation()
            workout = create_workout(type_, coords, distance, duration, extra)
            self.store.add(workout)
            return workout

    # Reading

    def list_workouts(self) -> List[Workout]:
        with self._lock:
            return self.store.all()

    def get_workout(self, workout_id: str) -> Workout:
        with self._event():
            return self.store.get(workout_id)

    def sorted_workouts(self, key: Optional[str]) -> List[Workout]:
        with self._event():
            return self.store.apply_sort(key or "")

    def activate_workout(self, workout_id: str) -> Workout:
        """Marker/list item activated: count the click; the UI pans to the coords."""
        with self._event():
            return self.store.click(workout_id)

    # Editing

    def request_edit(self, workout_id: str) -> EditSession:
        with self._event():
            self.store.get(workout_id)
            return self.coordinator.begin_edit(workout_id)

    def submit_edit(
        self,
        workout_id: str,
        distance: float,
        duration: float,
        cadence: Optional[float] = None,
        elevation_gain: Optional[float] = None,
    ) -> Workout:
        """Commit an edit; the workout's own type picks cadence or elevation_gain.

        Invalid input leaves the edit session open.
        """
        with self._event():
            self.coordinator.require_editing(workout_id)
            existing = self.store.get(workout_id)
            extra = cadence if existing.extra_name == "cadence" else elevation_gain
            workout = self.store.edit(workout_id, distance, duration, extra)
            self.coordinator.end_edit(workout_id)
            self.notifications.show(EDITED_MESSAGE, "success")
            return workout

    def cancel_edit(self, workout_id: str) -> None:
        with self._event():
            self.coordinator.end_edit(workout_id)

    # Deleting

    def _release_if_editing(self, workout_id: Optional[str] = None) -> None:
        session = self.coordinator.session
        if session.state is SessionState.EDITING and workout_id in (None, session.workout_id):
            self.coordinator.release()

    def delete_workout(self, workout_id: str) -> None:
        with self._event():
            if not self.store.remove(workout_id):
                raise WorkoutNotFoundError(workout_id)
            self._release_if_editing(workout_id)

    def delete_all(self, confirmed: bool) -> bool:
        """Delete every workout if the user confirmed. Returns whether anything was done."""
        with self._event():
            if not confirmed:
                logger.info("Delete all not confirmed")
                return False
            self.store.remove_all()
            self._release_if_editing()
            return True

    def reset(self) -> None:
        with self._event():
            self.store.reset()
            self.coordinator.release()
            self.load_error = None


_state = AppState()


def get_state() -> AppState:
    return _state
