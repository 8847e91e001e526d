"""Recipe library endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutrition_assistant.api.dependencies import (
    get_container,
    get_execution_context,
    require_service_token,
)
from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.recipes import NewRecipe, RecipeIngredient
from nutrition_assistant.services.recipes import RECIPE_NOT_FOUND, recipe_payload

router = APIRouter(
    prefix="/recipes", tags=["recipes"], dependencies=[Depends(require_service_token)]
)


class _RecipeModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )


class IngredientRequest(_RecipeModel):
    item: str = Field(min_length=1, max_length=200)
    amount: str = Field(max_length=100)
    notes: str | None = Field(default=None, max_length=200)


class SaveRecipeRequest(_RecipeModel):
    """A recipe to add to the library; macros are per serving."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=500)
    servings: int = Field(ge=1, le=20)
    prep_time: int | None = Field(default=None, ge=0, le=480)
    cook_time: int | None = Field(default=None, ge=0, le=480)
    ingredients: list[IngredientRequest] = Field(min_length=1)
    instructions: list[str] = Field(min_length=1)
    calories: int = Field(ge=0, le=5000)
    protein: int = Field(ge=0, le=500)
    carbs: int = Field(ge=0, le=500)
    fat: int = Field(ge=0, le=500)
    tips: str | None = Field(default=None, max_length=500)

    def to_recipe(self) -> NewRecipe:
        return NewRecipe(
            name=self.name,
            servings=self.servings,
            ingredients=[
                RecipeIngredient(
                    item=ingredient.item,
                    amount=ingredient.amount,
                    notes=ingredient.notes or None,
                )
                for ingredient in self.ingredients
            ],
            instructions=[step for step in self.instructions if step],
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            description=self.description or None,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            tips=self.tips or None,
        )


@router.get("")
def list_recipes(
    request: Request,
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Return the user's saved recipes, newest first."""
    recipes = get_container(request).recipe_service.list_recipes(ctx)
    return {"recipes": [recipe_payload(recipe) for recipe in recipes]}


@router.post("")
def save_recipe(
    body: SaveRecipeRequest,
    request: Request,
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Save a recipe and return it."""
    recipe = get_container(request).recipe_service.save_recipe(ctx, body.to_recipe())
    return {"recipe": recipe_payload(recipe)}


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: str,
    request: Request,
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Delete an owned recipe."""
    deleted = get_container(request).recipe_service.delete_recipe(ctx, recipe_id)
    if deleted is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=RECIPE_NOT_FOUND
        )
    return {"success": True}
