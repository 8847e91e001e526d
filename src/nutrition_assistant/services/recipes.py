"""Saved recipe library for each user."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.recipes import NewRecipe, Recipe
from nutrition_assistant.services.audit import AuditService
from nutrition_assistant.services.normalize import parse_uuid

RECIPE_NOT_FOUND = "Recipe not found"


class RecipeRepository(Protocol):
    """Persistence interface for saved recipes, scoped by user."""

    def list_recipes(self, user_id: str) -> list[Recipe]:
        """Return the user's recipes, newest first."""

    def create_recipe(self, user_id: str, recipe: NewRecipe) -> Recipe:
        """Save a recipe and return it."""

    def delete_recipe(self, user_id: str, recipe_id: UUID) -> Recipe | None:
        """Delete an owned recipe and return what was removed."""


@dataclass
class RecipeService:
    """Saves, lists and deletes recipes in a user's library."""

    repository: RecipeRepository
    audit_service: AuditService

    def save_recipe(self, ctx: ExecutionContext, recipe: NewRecipe) -> Recipe:
        return self.repository.create_recipe(ctx.user_id, recipe)

    def list_recipes(self, ctx: ExecutionContext) -> list[Recipe]:
        return self.repository.list_recipes(ctx.user_id)

    def delete_recipe(self, ctx: ExecutionContext, recipe_id: str) -> Recipe | None:
        """Delete an owned recipe; unknown, malformed and foreign ids give None."""
        parsed = parse_uuid(recipe_id)
        if parsed is None:
            return None
        deleted = self.repository.delete_recipe(ctx.user_id, parsed)
        if deleted is None:
            return None
        self.audit_service.record_event(
            user_id=ctx.user_id,
            entity_type="recipe",
            entity_id=deleted.id,
            event_type="delete",
            before=recipe_payload(deleted),
            after=None,
        )
        return deleted


def recipe_payload(recipe: Recipe) -> dict[str, object]:
    """Serialize a recipe for API responses."""
    return {
        "id": str(recipe.id),
        "name": recipe.name,
        "description": recipe.description,
        "servings": recipe.servings,
        "prepTime": recipe.prep_time,
        "cookTime": recipe.cook_time,
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
        "createdAt": recipe.created_at.isoformat(),
    }
