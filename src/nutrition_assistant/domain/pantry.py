"""Domain models for pantry and shopping list items."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ItemCategory(StrEnum):
    """Grocery categories shared by pantry and shopping list items."""

    PROTEIN = "protein"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    DAIRY = "dairy"
    GRAIN = "grain"
    PANTRY = "pantry"
    BEVERAGE = "beverage"
    OTHER = "other"


@dataclass(frozen=True)
class PantryItem:
    """An ingredient the user has at home."""

    id: UUID
    name: str
    category: ItemCategory | None
    quantity: float | None
    unit: str | None
    created_at: datetime


@dataclass(frozen=True)
class NewItem:
    """Item fields supplied by the caller before persistence."""

    name: str
    category: ItemCategory | None = None
    quantity: float | None = None
    unit: str | None = None
