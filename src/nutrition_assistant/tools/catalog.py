"""Tool definitions offered to the assistant model."""

from pydantic import TypeAdapter

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.services.meals import MealOperations
from nutrition_assistant.services.pantry import PantryOperations
from nutrition_assistant.services.preferences import PreferenceOperations
from nutrition_assistant.services.shopping import ShoppingListOperations
from nutrition_assistant.services.tracking import TrackingOperations
from nutrition_assistant.tools.models import (
    MealsArgs,
    PantryArgs,
    PreferencesArgs,
    ShoppingListArgs,
    SuggestFood,
    TrackingArgs,
)
from nutrition_assistant.tools.registry import ToolRegistry, ToolSpec
from nutrition_assistant.tools.results import ToolResult, success

SUGGEST_FOOD_DESCRIPTION = """\
Suggest a meal the user can log to their food diary.

Use when the user asks what to eat, describes a meal they want to log, or
shares a photo you identified. The suggestion is shown as a card with a
"Log this meal" button, so include realistic calorie and macro estimates."""

MEALS_DESCRIPTION = """\
Query, edit, or delete meals in the user's food diary.

Operations:
- "query": read meal history. Set queryType to "recent" (latest meals,
  default limit 10), "by_date" (needs date), "search" (needs searchTerm) or
  "date_range" (needs startDate and endDate). Totals cover only the meals
  returned.
- "edit": change name, calories, macros or servings. Needs mealId.
- "delete": remove a meal. Needs mealId.

Query first to find a meal's id before editing or deleting it."""

TRACKING_DESCRIPTION = """\
Log or query weight and water intake.

Operations:
- "log_weight": record today's (or date's) weight. A second entry for the
  same day replaces the first.
- "query_weight": weightQueryType "recent", "progress" (current, total,
  weekly and monthly change, goal progress) or "date_range".
- "log_water": add waterAmount (oz or ml per the user's units; negative to
  correct a mistake) to the day's total.

Common amounts: glass 8oz/240ml, bottle 16-20oz/500ml, large bottle
32oz/1000ml."""

PREFERENCES_DESCRIPTION = """\
Remember food preferences and change nutrition goals.

Operations:
- "set_preference": save a preference (category + value, optional notes).
- "remove_preference": forget a preference that no longer applies.
- "update_goals": change calorieGoal (1000-5000) and/or weightGoal.

Categories: like, dislike, allergy, dietary, cuisine, timing, portion, other.
Values are case-insensitive; saving an existing one only updates its notes."""

PANTRY_DESCRIPTION = """\
Query and manage the user's pantry and fridge inventory.

Operations:
- "query": list items, optionally filtered by category and/or search.
- "add": add an item (name required).
- "update": change an item's name, category, quantity or unit (itemId).
- "delete": remove an item by itemId, or by name (removes the newest match).

Categories: protein, vegetable, fruit, dairy, grain, pantry, beverage, other."""

SHOPPING_LIST_DESCRIPTION = """\
Manage shopping lists and their items.

Operations:
- "query": show lists with their items (optional listName filter).
- "create_list" (listName), "rename_list" (listId, listName),
  "delete_list" (listId, removes its items too).
- "add_items": add items; without listName they go to "Shopping List",
  created if needed.
- "remove_items": remove by itemIds and/or itemNames.
- "mark_bought": check off itemIds and add them to the pantry unless
  addToPantry is false."""


def suggest_food(ctx: ExecutionContext, args: SuggestFood) -> ToolResult:
    """Echo a validated suggestion for the client to render."""
    return success(
        "suggest_food",
        suggestion=args.model_dump(),
    )


def build_tool_registry(  # noqa: PLR0913
    meals: MealOperations,
    tracking: TrackingOperations,
    preferences: PreferenceOperations,
    pantry: PantryOperations,
    shopping: ShoppingListOperations,
    default_timezone: str = "UTC",
) -> ToolRegistry:
    """Register every tool group against its dispatcher."""
    registry = ToolRegistry(default_timezone=default_timezone)
    registry.register(
        ToolSpec("suggest_food", SUGGEST_FOOD_DESCRIPTION, TypeAdapter(SuggestFood)),
        suggest_food,
    )
    registry.register(
        ToolSpec("meals", MEALS_DESCRIPTION, TypeAdapter(MealsArgs)),
        meals.handle,
    )
    registry.register(
        ToolSpec("tracking", TRACKING_DESCRIPTION, TypeAdapter(TrackingArgs)),
        tracking.handle,
    )
    registry.register(
        ToolSpec("preferences", PREFERENCES_DESCRIPTION, TypeAdapter(PreferencesArgs)),
        preferences.handle,
    )
    registry.register(
        ToolSpec("pantry", PANTRY_DESCRIPTION, TypeAdapter(PantryArgs)),
        pantry.handle,
    )
    registry.register(
        ToolSpec(
            "shopping_list", SHOPPING_LIST_DESCRIPTION, TypeAdapter(ShoppingListArgs)
        ),
        shopping.handle,
    )
    return registry
