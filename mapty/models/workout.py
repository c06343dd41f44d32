"""Workout records: running and cycling sessions with derived metrics."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Tuple

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass
class Workout:
    """One logged session anchored at coords. Subclasses add the type-specific input."""
    id: str
    coords: Tuple[float, float]  # (lat, lng)
    distance: float  # km
    duration: float  # min
    created_at: datetime
    clicks: int = field(default=0, init=False)
    description: str = field(default="", init=False)

    type: ClassVar[str] = ""
    extra_name: ClassVar[str] = ""  # raw type-specific input
    metric_name: ClassVar[str] = ""  # derived metric

    def __post_init__(self) -> None:
        if not self.type:
            raise TypeError("Workout is abstract; create a Running or Cycling")
        self.compute_metric()
        self.describe()

    def compute_metric(self) -> float:
        """Recompute and return the derived metric (pace or speed)."""
        raise NotImplementedError

    def describe(self) -> str:
        """Set description, e.g. 'Running on April 14'."""
        self.description = (
            f"{self.type.capitalize()} on "
            f"{MONTHS[self.created_at.month - 1]} {self.created_at.day}"
        )
        return self.description

    @property
    def extra(self) -> float:
        return getattr(self, self.extra_name)

    @property
    def metric(self) -> float:
        return getattr(self, self.metric_name)

    def update(self, distance: float, duration: float, extra: float) -> None:
        """Replace raw inputs and recompute the derived metric. Inputs must be validated."""
        self.distance = distance
        self.duration = duration
        setattr(self, self.extra_name, extra)
        self.compute_metric()

    def click(self) -> int:
        self.clicks += 1
        return self.clicks


@dataclass
class Running(Workout):
    cadence: float  # steps/min
    pace: float = field(default=0.0, init=False)  # min/km

    type: ClassVar[str] = "running"
    extra_name: ClassVar[str] = "cadence"
    metric_name: ClassVar[str] = "pace"

    def calc_pace(self) -> float:
        self.pace = self.duration / self.distance
        return self.pace

    def compute_metric(self) -> float:
        return self.calc_pace()


@dataclass
class Cycling(Workout):
    elevation_gain: float  # m, may be zero or negative
    speed: float = field(default=0.0, init=False)  # km/h

    type: ClassVar[str] = "cycling"
    extra_name: ClassVar[str] = "elevation_gain"
    metric_name: ClassVar[str] = "speed"

    def calc_speed(self) -> float:
        self.speed = self.distance / (self.duration / 60)
        return self.speed

    def compute_metric(self) -> float:
        return self.calc_speed()
