"""Meal endpoints used by the client outside the tool loop."""

import datetime as dt

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutrition_assistant.api.dependencies import (
    get_container,
    get_execution_context,
    require_service_token,
)
from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.services.meals import FREQUENT_LIMIT, meal_payload

router = APIRouter(
    prefix="/meals", tags=["meals"], dependencies=[Depends(require_service_token)]
)


class LogMealRequest(BaseModel):
    """A meal to log directly, e.g. an accepted suggestion."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    name: str = Field(min_length=1, max_length=200)
    calories: int = Field(ge=0, le=50000)
    servings: float = Field(default=1, gt=0, le=100)
    protein: int | None = Field(default=None, ge=0, le=5000)
    carbs: int | None = Field(default=None, ge=0, le=5000)
    fat: int | None = Field(default=None, ge=0, le=5000)
    date: dt.date | None = None
    logged_at: dt.datetime | None = None


@router.post("")
def log_meal(
    body: LogMealRequest,
    request: Request,
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Log a meal and return it."""
    meal = get_container(request).meal_operations.log_meal(
        ctx,
        name=body.name,
        calories=body.calories,
        servings=body.servings,
        protein=body.protein,
        carbs=body.carbs,
        fat=body.fat,
        day=body.date,
        logged_at=body.logged_at,
    )
    return {"meal": meal_payload(meal)}


@router.get("/frequent")
def frequent_meals(
    request: Request,
    limit: int = Query(default=FREQUENT_LIMIT, ge=1, le=20),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Return the user's most often logged meals of the last month."""
    meals = get_container(request).meal_operations.frequent_meals(ctx, limit)
    return {"meals": [meal_payload(meal) for meal in meals]}
