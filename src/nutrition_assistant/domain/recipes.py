"""Domain models for the saved recipe library."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class RecipeIngredient:
    """One ingredient line, amounts kept as free text ("2 cups")."""

    item: str
    amount: str
    notes: str | None = None


@dataclass(frozen=True)
class NewRecipe:
    """Recipe fields supplied when saving, before persistence."""

    name: str
    servings: int
    ingredients: list[RecipeIngredient]
    instructions: list[str]
    calories: int
    protein: int
    carbs: int
    fat: int
    description: str | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    tips: str | None = None


@dataclass(frozen=True)
class Recipe:
    """A recipe saved to a user's library; macros are per serving."""

    id: UUID
    name: str
    servings: int
    calories: int | None
    protein: int | None
    carbs: int | None
    fat: int | None
    created_at: datetime
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    description: str | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    tips: str | None = None
