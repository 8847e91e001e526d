"""Domain models for shopping lists."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrition_assistant.domain.pantry import ItemCategory


@dataclass(frozen=True)
class ShoppingList:
    """A named shopping list."""

    id: UUID
    name: str
    updated_at: datetime


@dataclass(frozen=True)
class ShoppingListItem:
    """An entry on a shopping list."""

    id: UUID
    list_id: UUID
    name: str
    category: ItemCategory | None
    quantity: float | None
    unit: str | None
    checked: bool
    created_at: datetime
