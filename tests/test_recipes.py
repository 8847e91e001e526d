"""Tests for the recipe library."""

from uuid import uuid4

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.recipes import NewRecipe, RecipeIngredient
from nutrition_assistant.services.recipes import RecipeService, recipe_payload
from tests.conftest import InMemoryAuditRepository, InMemoryRecipeRepository


def _recipe(name: str) -> NewRecipe:
    return NewRecipe(
        name=name,
        servings=2,
        ingredients=[
            RecipeIngredient(item="rolled oats", amount="1 cup"),
            RecipeIngredient(item="milk", amount="2 cups", notes="any kind"),
        ],
        instructions=["Simmer the oats in milk.", "Rest for two minutes."],
        calories=310,
        protein=12,
        carbs=48,
        fat=7,
        prep_time=2,
        cook_time=8,
    )


def test_saved_recipes_are_listed_newest_first_per_user(
    recipe_service: RecipeService,
    ctx: ExecutionContext,
    other_ctx: ExecutionContext,
) -> None:
    recipe_service.save_recipe(ctx, _recipe("Porridge"))
    recipe_service.save_recipe(ctx, _recipe("Overnight oats"))
    recipe_service.save_recipe(other_ctx, _recipe("Granola"))

    names = [recipe.name for recipe in recipe_service.list_recipes(ctx)]

    assert names == ["Overnight oats", "Porridge"]


def test_recipe_payload_uses_client_field_names(
    recipe_service: RecipeService, ctx: ExecutionContext
) -> None:
    saved = recipe_service.save_recipe(ctx, _recipe("Porridge"))

    payload = recipe_payload(saved)

    assert payload["prepTime"] == 2
    assert payload["cookTime"] == 8
    assert payload["ingredients"][1] == {
        "item": "milk",
        "amount": "2 cups",
        "notes": "any kind",
    }
    assert payload["instructions"] == [
        "Simmer the oats in milk.",
        "Rest for two minutes.",
    ]
    assert payload["createdAt"] == saved.created_at.isoformat()


def test_delete_recipe_records_audit_event(
    recipe_service: RecipeService,
    recipe_repository: InMemoryRecipeRepository,
    audit_repository: InMemoryAuditRepository,
    ctx: ExecutionContext,
) -> None:
    saved = recipe_service.save_recipe(ctx, _recipe("Porridge"))

    deleted = recipe_service.delete_recipe(ctx, str(saved.id))

    assert deleted == saved
    assert recipe_repository.recipes == {}
    assert audit_repository.events[0]["entity_type"] == "recipe"
    assert audit_repository.events[0]["event_type"] == "delete"
    assert audit_repository.events[0]["before"]["name"] == "Porridge"


def test_delete_recipe_hides_foreign_and_unknown_ids(
    recipe_service: RecipeService,
    recipe_repository: InMemoryRecipeRepository,
    audit_repository: InMemoryAuditRepository,
    ctx: ExecutionContext,
    other_ctx: ExecutionContext,
) -> None:
    theirs = recipe_service.save_recipe(other_ctx, _recipe("Granola"))

    assert recipe_service.delete_recipe(ctx, str(theirs.id)) is None
    assert recipe_service.delete_recipe(ctx, str(uuid4())) is None
    assert recipe_service.delete_recipe(ctx, "not-an-id") is None
    assert theirs.id in recipe_repository.recipes
    assert audit_repository.events == []
