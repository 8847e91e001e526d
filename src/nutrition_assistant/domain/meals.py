"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class MealEntry:
    """A logged meal attributed to a calendar day."""

    id: UUID
    name: str
    servings: float
    calories: int
    protein: int | None
    carbs: int | None
    fat: int | None
    date: date
    logged_at: datetime


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macros over a set of meals."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class NewMeal:
    """Meal fields supplied when logging, before persistence."""

    name: str
    calories: int
    date: date
    logged_at: datetime
    servings: float = 1
    protein: int | None = None
    carbs: int | None = None
    fat: int | None = None
