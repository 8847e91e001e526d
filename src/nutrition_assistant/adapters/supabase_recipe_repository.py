"""Supabase repository for saved recipes."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_assistant.domain.recipes import NewRecipe, Recipe, RecipeIngredient
from nutrition_assistant.services.recipes import RecipeRepository

RECIPE_COLUMNS = (
    "id, name, description, servings, prep_time, cook_time, ingredients, "
    "instructions, calories, protein, carbs, fat, tips, created_at"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for the recipe library.

    Ingredients and instructions are stored as jsonb arrays on the row.
    """

    client: Client

    def list_recipes(self, user_id: str) -> list[Recipe]:
        """Return the user's recipes, newest first."""
        response = (
            self.client.table("recipes")
            .select(RECIPE_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def create_recipe(self, user_id: str, recipe: NewRecipe) -> Recipe:
        """Save a recipe and return it."""
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "user_id": user_id,
                    "name": recipe.name,
                    "description": recipe.description,
                    "servings": recipe.servings,
                    "prep_time": recipe.prep_time,
                    "cook_time": recipe.cook_time,
                    "ingredients": [
                        {
                            "item": ingredient.item,
                            "amount": ingredient.amount,
                            "notes": ingredient.notes,
                        }
                        for ingredient in recipe.ingredients
                    ],
                    "instructions": list(recipe.instructions),
                    "calories": recipe.calories,
                    "protein": recipe.protein,
                    "carbs": recipe.carbs,
                    "fat": recipe.fat,
                    "tips": recipe.tips,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, user_id: str, recipe_id: UUID) -> Recipe | None:
        """Delete an owned recipe and return what was removed."""
        response = (
            self.client.table("recipes")
            .delete()
            .eq("id", str(recipe_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])


def _parse_recipe(row: dict[str, object]) -> Recipe:
    return Recipe(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        servings=int(row.get("servings") or 1),
        calories=_optional_int(row.get("calories")),
        protein=_optional_int(row.get("protein")),
        carbs=_optional_int(row.get("carbs")),
        fat=_optional_int(row.get("fat")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        ingredients=[
            _parse_ingredient(entry) for entry in row.get("ingredients") or []
        ],
        instructions=[str(step) for step in row.get("instructions") or []],
        description=_optional_text(row.get("description")),
        prep_time=_optional_int(row.get("prep_time")),
        cook_time=_optional_int(row.get("cook_time")),
        tips=_optional_text(row.get("tips")),
    )


def _parse_ingredient(entry: dict[str, object]) -> RecipeIngredient:
    return RecipeIngredient(
        item=str(entry.get("item") or ""),
        amount=str(entry.get("amount") or ""),
        notes=_optional_text(entry.get("notes")),
    )


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)


def _optional_text(value: object) -> str | None:
    return str(value) if value else None
