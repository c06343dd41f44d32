"""Ordered workout collection; every change is written through to the key-value store."""
import logging
from operator import attrgetter
from typing import Iterator, List, Optional

from mapty.config import STORAGE_KEY
from mapty.core import workout_codec
from mapty.core.errors import StorageError, ValidationError, WorkoutNotFoundError
from mapty.core.kv_store import KeyValueStore
from mapty.core.workout_factory import validate_inputs
from mapty.models.workout import Workout

logger = logging.getLogger(__name__)

SORT_KEYS = ("distance", "duration")


class WorkoutStore:
    """Workouts in creation order.

    Mutations re-encode the whole collection and store it under one key.
    If the write fails the in-memory change is undone before the
    StorageError propagates.
    """

    def __init__(self, kv: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key
        self._workouts: List[Workout] = []

    @property
    def key(self) -> str:
        return self._key

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(list(self._workouts))

    def all(self) -> List[Workout]:
        return list(self._workouts)

    def load(self) -> List[Workout]:
        """Hydrate from storage. Missing key means empty; corrupt data raises DecodeError."""
        self._workouts = []
        raw = self._kv.get(self._key)
        if raw is None:
            logger.info("No stored workouts under %r", self._key)
            return []
        self._workouts = workout_codec.decode(raw)
        logger.info("Loaded %d workouts", len(self._workouts))
        return self.all()

    def _save(self) -> None:
        self._kv.set(self._key, workout_codec.encode(self._workouts))

    def find_by_id(self, workout_id: str) -> Optional[Workout]:
        for w in self._workouts:
            if w.id == workout_id:
                return w
        return None

    def get(self, workout_id: str) -> Workout:
        w = self.find_by_id(workout_id)
        if w is None:
            raise WorkoutNotFoundError(workout_id)
        return w

    def add(self, workout: Workout) -> None:
        if self.find_by_id(workout.id) is not None:
            raise ValueError(f"Duplicate workout id {workout.id}")
        self._workouts.append(workout)
        try:
            self._save()
        except StorageError:
            self._workouts.pop()
            raise
        logger.info("Added %s", workout.description)

    def remove(self, workout_id: str) -> bool:
        """Remove by id and save. Returns False (nothing written) if absent."""
        for i, w in enumerate(self._workouts):
            if w.id == workout_id:
                self._workouts.pop(i)
                try:
                    self._save()
                except StorageError:
                    self._workouts.insert(i, w)
                    raise
                logger.info("Deleted workout %s", workout_id)
                return True
        return False

    def remove_all(self) -> None:
        """Clear and save. Confirmation is the caller's job."""
        previous = self._workouts
        self._workouts = []
        try:
            self._save()
        except StorageError:
            self._workouts = previous
            raise
        logger.info("Deleted all %d workouts", len(previous))

    def reset(self) -> None:
        """Drop the storage key entirely and clear memory."""
        self._kv.remove(self._key)
        self._workouts = []
        logger.info("Reset workout storage %r", self._key)

    def edit(self, workout_id: str, distance: float, duration: float, extra: float) -> Workout:
        """Validate with the workout's own type rules, update, recompute and save."""
        w = self.get(workout_id)
        validate_inputs(w.type, distance, duration, extra)
        old = (w.distance, w.duration, w.extra)
        w.update(float(distance), float(duration), float(extra))
        try:
            self._save()
        except StorageError:
            w.update(*old)
            raise
        logger.info("Edited %s (%s=%.2f)", workout_id, w.metric_name, w.metric)
        return w

    def click(self, workout_id: str) -> Workout:
        w = self.get(workout_id)
        w.click()
        try:
            self._save()
        except StorageError:
            w.clicks -= 1
            raise
        return w

    def apply_sort(self, key: str) -> List[Workout]:
        """New list ordered by key, largest first; ties keep creation order. Read-only."""
        if key not in SORT_KEYS:
            raise ValidationError("Pick a valid sorting option", fields=["sort"])
        # sorted() is stable with reverse=True too
        return sorted(self._workouts, key=attrgetter(key), reverse=True)
