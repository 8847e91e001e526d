"""Domain models for body metrics and user goals."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class MetricKind(StrEnum):
    """Kinds of per-day body metric logs."""

    WEIGHT = "weight"
    WATER = "water"


class UnitSystem(StrEnum):
    """Measurement system used for labels and default goals."""

    METRIC = "metric"
    IMPERIAL = "imperial"


DEFAULT_UNIT_SYSTEM = UnitSystem.IMPERIAL
DEFAULT_CALORIE_GOAL = 2200
DEFAULT_WATER_GOALS = {UnitSystem.IMPERIAL: 64, UnitSystem.METRIC: 2000}
WEIGHT_UNITS = {UnitSystem.IMPERIAL: "lbs", UnitSystem.METRIC: "kg"}
WATER_UNITS = {UnitSystem.IMPERIAL: "oz", UnitSystem.METRIC: "ml"}


@dataclass(frozen=True)
class BodyMetricLog:
    """One weight or water record for a user and day."""

    id: UUID
    kind: MetricKind
    date: date
    amount: float
    logged_at: datetime


@dataclass(frozen=True)
class Profile:
    """User goals and measurement preferences."""

    units: UnitSystem
    calorie_goal: int
    weight_goal: float | None
    water_goal: int | None

    @property
    def weight_unit(self) -> str:
        return WEIGHT_UNITS[self.units]

    @property
    def water_unit(self) -> str:
        return WATER_UNITS[self.units]

    @property
    def effective_water_goal(self) -> int:
        """Return the stored water goal or the unit system default."""
        return self.water_goal or DEFAULT_WATER_GOALS[self.units]


DEFAULT_PROFILE = Profile(
    units=DEFAULT_UNIT_SYSTEM,
    calorie_goal=DEFAULT_CALORIE_GOAL,
    weight_goal=None,
    water_goal=None,
)
