"""Argument models for each tool group, one tagged variant per operation."""

import datetime as dt
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from nutrition_assistant.domain.pantry import ItemCategory
from nutrition_assistant.domain.preferences import PreferenceCategory

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class ToolArgs(BaseModel):
    """Base for argument objects emitted by the model as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    def _require(self, label: str, *fields: str) -> None:
        missing = [name for name in fields if not getattr(self, name)]
        if missing:
            names = " and ".join(to_camel(name) for name in fields)
            verb = "is" if len(fields) == 1 else "are"
            raise ValueError(f"{names} {verb} required for {label}")


# Meals


class MealQuery(ToolArgs):
    """Look up logged meals."""

    operation: Literal["query"]
    query_type: Literal["recent", "by_date", "search", "date_range"]
    date: dt.date | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    search_term: str | None = Field(default=None, max_length=200)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @model_validator(mode="after")
    def _check_query_fields(self) -> "MealQuery":
        if self.query_type == "by_date":
            self._require("by_date query", "date")
        elif self.query_type == "search":
            self._require("search query", "search_term")
        elif self.query_type == "date_range":
            self._require("date_range query", "start_date", "end_date")
        return self


class MealEdit(ToolArgs):
    """Change fields of a logged meal."""

    operation: Literal["edit"]
    meal_id: str = Field(min_length=1)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    calories: int | None = Field(default=None, ge=0, le=50000)
    protein: int | None = Field(default=None, ge=0, le=5000)
    carbs: int | None = Field(default=None, ge=0, le=5000)
    fat: int | None = Field(default=None, ge=0, le=5000)
    servings: float | None = Field(default=None, gt=0, le=100)

    def changes(self) -> dict[str, object]:
        """Return only the fields the caller supplied."""
        return self.model_dump(
            include={"name", "calories", "protein", "carbs", "fat", "servings"},
            exclude_none=True,
        )


class MealDelete(ToolArgs):
    """Remove a logged meal."""

    operation: Literal["delete"]
    meal_id: str = Field(min_length=1)


MealsArgs = Annotated[
    MealQuery | MealEdit | MealDelete, Field(discriminator="operation")
]


# Tracking


class LogWeight(ToolArgs):
    """Record the day's weight."""

    operation: Literal["log_weight"]
    weight: float = Field(gt=0, le=1500)
    date: dt.date | None = None


class LogWater(ToolArgs):
    """Add (or subtract) water for the day."""

    operation: Literal["log_water"]
    water_amount: int = Field(ge=-5000, le=5000)
    date: dt.date | None = None

    @model_validator(mode="after")
    def _check_amount(self) -> "LogWater":
        if self.water_amount == 0:
            raise ValueError("waterAmount must not be zero")
        return self


class QueryWeight(ToolArgs):
    """Read weight history or progress."""

    operation: Literal["query_weight"]
    weight_query_type: Literal["recent", "progress", "date_range"]
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @model_validator(mode="after")
    def _check_range(self) -> "QueryWeight":
        if self.weight_query_type == "date_range":
            self._require("date_range query", "start_date", "end_date")
        return self


TrackingArgs = Annotated[
    LogWeight | LogWater | QueryWeight, Field(discriminator="operation")
]


# Preferences


class SetPreference(ToolArgs):
    """Remember a food preference."""

    operation: Literal["set_preference"]
    category: PreferenceCategory
    value: str = Field(min_length=1, max_length=200)
    notes: str | None = Field(default=None, max_length=500)


class RemovePreference(ToolArgs):
    """Forget a food preference."""

    operation: Literal["remove_preference"]
    category: PreferenceCategory
    value: str = Field(min_length=1, max_length=200)


class UpdateGoals(ToolArgs):
    """Change calorie or weight goals."""

    operation: Literal["update_goals"]
    calorie_goal: int | None = Field(default=None, ge=1000, le=5000)
    weight_goal: float | None = Field(default=None, gt=0, le=1500)

    @model_validator(mode="after")
    def _check_goals(self) -> "UpdateGoals":
        if self.calorie_goal is None and self.weight_goal is None:
            raise ValueError(
                "At least one goal (calorieGoal or weightGoal) must be provided"
            )
        return self


PreferencesArgs = Annotated[
    SetPreference | RemovePreference | UpdateGoals,
    Field(discriminator="operation"),
]


# Pantry


class PantryQuery(ToolArgs):
    """List pantry items."""

    operation: Literal["query"]
    category: ItemCategory | None = None
    search: str | None = Field(default=None, max_length=200)


class PantryAdd(ToolArgs):
    """Add an item to the pantry."""

    operation: Literal["add"]
    name: str = Field(min_length=1, max_length=200)
    category: ItemCategory | None = None
    quantity: float | None = Field(default=None, ge=0, le=10000)
    unit: str | None = Field(default=None, max_length=50)


class PantryUpdate(ToolArgs):
    """Patch a pantry item."""

    operation: Literal["update"]
    item_id: str = Field(min_length=1)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    category: ItemCategory | None = None
    quantity: float | None = Field(default=None, ge=0, le=10000)
    unit: str | None = Field(default=None, max_length=50)

    def changes(self) -> dict[str, object]:
        """Return only the fields the caller supplied."""
        return self.model_dump(
            include={"name", "category", "quantity", "unit"}, exclude_none=True
        )


class PantryDelete(ToolArgs):
    """Remove a pantry item by id or by name."""

    operation: Literal["delete"]
    item_id: str | None = None
    name: str | None = Field(default=None, max_length=200)

    @model_validator(mode="after")
    def _check_target(self) -> "PantryDelete":
        if not self.item_id and not self.name:
            raise ValueError("Either itemId or name is required for delete")
        return self


PantryArgs = Annotated[
    PantryQuery | PantryAdd | PantryUpdate | PantryDelete,
    Field(discriminator="operation"),
]


# Shopping lists


class ItemInput(ToolArgs):
    """An item to put on a shopping list."""

    name: str = Field(min_length=1, max_length=200)
    category: ItemCategory | None = None
    quantity: float | None = Field(default=None, gt=0, le=10000)
    unit: str | None = Field(default=None, max_length=50)


class ShoppingQuery(ToolArgs):
    """List shopping lists with their items."""

    operation: Literal["query"]
    list_name: str | None = Field(default=None, max_length=100)


class CreateList(ToolArgs):
    """Create a shopping list."""

    operation: Literal["create_list"]
    list_name: str | None = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def _check_name(self) -> "CreateList":
        self._require("create_list", "list_name")
        return self


class RenameList(ToolArgs):
    """Rename a shopping list."""

    operation: Literal["rename_list"]
    list_id: str | None = None
    list_name: str | None = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def _check_fields(self) -> "RenameList":
        self._require("rename_list", "list_id", "list_name")
        return self


class DeleteList(ToolArgs):
    """Delete a shopping list and its items."""

    operation: Literal["delete_list"]
    list_id: str | None = None

    @model_validator(mode="after")
    def _check_id(self) -> "DeleteList":
        self._require("delete_list", "list_id")
        return self


class AddItems(ToolArgs):
    """Add items to a list, creating the default list on first use."""

    operation: Literal["add_items"]
    list_name: str | None = Field(default=None, max_length=100)
    items: list[ItemInput] | None = None

    @model_validator(mode="after")
    def _check_items(self) -> "AddItems":
        if not self.items:
            raise ValueError("items array is required for add_items")
        return self


class RemoveItems(ToolArgs):
    """Remove list items by id and/or by name."""

    operation: Literal["remove_items"]
    item_ids: list[str] | None = None
    item_names: list[str] | None = None
    list_name: str | None = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def _check_targets(self) -> "RemoveItems":
        if not self.item_ids and not self.item_names:
            raise ValueError("Must provide itemIds or itemNames")
        return self


class MarkBought(ToolArgs):
    """Check off bought items and optionally stock the pantry."""

    operation: Literal["mark_bought"]
    item_ids: list[str] | None = None
    add_to_pantry: bool | None = True

    @model_validator(mode="after")
    def _check_ids(self) -> "MarkBought":
        self._require("mark_bought", "item_ids")
        return self


ShoppingListArgs = Annotated[
    ShoppingQuery
    | CreateList
    | RenameList
    | DeleteList
    | AddItems
    | RemoveItems
    | MarkBought,
    Field(discriminator="operation"),
]


# Suggestions


class SuggestFood(ToolArgs):
    """A meal suggestion the user can log with one tap."""

    name: str = Field(min_length=1, max_length=200)
    calories: int = Field(ge=0, le=50000)
    protein: int = Field(ge=0, le=5000)
    carbs: int = Field(ge=0, le=5000)
    fat: int = Field(ge=0, le=5000)
