"""Meal diary operations exposed to the assistant."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.meals import MacroTotals, MealEntry, NewMeal
from nutrition_assistant.services.aggregation import frequent_meals, sum_macros
from nutrition_assistant.services.audit import AuditService
from nutrition_assistant.services.normalize import parse_uuid, resolve_date
from nutrition_assistant.tools.models import (
    MealDelete,
    MealEdit,
    MealQuery,
    MealsArgs,
)
from nutrition_assistant.tools.results import ToolResult, failure, success

FREQUENT_WINDOW_DAYS = 30
FREQUENT_LIMIT = 5
MEAL_NOT_FOUND = "Meal not found"


class MealRepository(Protocol):
    """Persistence interface for meal entries, scoped by user."""

    def list_recent(self, user_id: str, limit: int) -> list[MealEntry]:
        """Return the newest meals by logged time."""

    def list_by_date(self, user_id: str, day: date) -> list[MealEntry]:
        """Return all meals attributed to a day, newest first."""

    def search(self, user_id: str, term: str, limit: int) -> list[MealEntry]:
        """Return meals whose name contains the term, newest first."""

    def list_between(
        self, user_id: str, start: date, end: date, limit: int
    ) -> list[MealEntry]:
        """Return meals dated within [start, end], newest first."""

    def list_logged_since(self, user_id: str, since: datetime) -> list[MealEntry]:
        """Return meals logged at or after an instant, newest first."""

    def get_meal(self, user_id: str, meal_id: UUID) -> MealEntry | None:
        """Return an owned meal by id."""

    def create_meal(self, user_id: str, meal: NewMeal) -> MealEntry:
        """Create a meal entry and return it."""

    def update_meal(
        self, user_id: str, meal_id: UUID, changes: dict[str, object]
    ) -> MealEntry | None:
        """Patch an owned meal and return the stored result."""

    def delete_meal(self, user_id: str, meal_id: UUID) -> MealEntry | None:
        """Delete an owned meal and return what was removed."""


@dataclass
class MealOperations:
    """Dispatcher for the ``meals`` tool group."""

    repository: MealRepository
    audit_service: AuditService

    def handle(self, ctx: ExecutionContext, args: MealsArgs) -> ToolResult:
        """Run the meal operation selected by the argument variant."""
        if isinstance(args, MealEdit):
            return self._edit(ctx, args)
        if isinstance(args, MealDelete):
            return self._delete(ctx, args)
        return self._query(ctx, args)

    def log_meal(  # noqa: PLR0913
        self,
        ctx: ExecutionContext,
        name: str,
        calories: int,
        servings: float = 1,
        protein: int | None = None,
        carbs: int | None = None,
        fat: int | None = None,
        day: date | None = None,
        logged_at: datetime | None = None,
    ) -> MealEntry:
        """Log a meal directly or from an accepted suggestion."""
        return self.repository.create_meal(
            ctx.user_id,
            NewMeal(
                name=name.strip(),
                calories=calories,
                servings=servings,
                protein=protein,
                carbs=carbs,
                fat=fat,
                date=resolve_date(day, ctx.timezone),
                logged_at=logged_at or datetime.now(tz=UTC),
            ),
        )

    def frequent_meals(
        self, ctx: ExecutionContext, limit: int = FREQUENT_LIMIT
    ) -> list[MealEntry]:
        """Return the meals the user logged most often in the last month."""
        since = datetime.now(tz=UTC) - timedelta(days=FREQUENT_WINDOW_DAYS)
        meals = self.repository.list_logged_since(ctx.user_id, since)
        return frequent_meals(meals, limit)

    def _query(self, ctx: ExecutionContext, args: MealQuery) -> ToolResult:
        user_id = ctx.user_id
        if args.query_type == "by_date" and args.date:
            meals = self.repository.list_by_date(user_id, args.date)
        elif args.query_type == "search" and args.search_term:
            meals = self.repository.search(user_id, args.search_term, args.limit)
        elif args.query_type == "date_range" and args.start_date and args.end_date:
            meals = self.repository.list_between(
                user_id, args.start_date, args.end_date, args.limit
            )
        else:
            meals = self.repository.list_recent(user_id, args.limit)

        return success(
            "query",
            queryType=args.query_type,
            count=len(meals),
            meals=[meal_payload(meal) for meal in meals],
            totals=totals_payload(sum_macros(meals)),
        )

    def _edit(self, ctx: ExecutionContext, args: MealEdit) -> ToolResult:
        meal_id = parse_uuid(args.meal_id)
        if meal_id is None:
            return failure(MEAL_NOT_FOUND)
        previous = self.repository.get_meal(ctx.user_id, meal_id)
        if previous is None:
            return failure(MEAL_NOT_FOUND)

        updated = self.repository.update_meal(ctx.user_id, meal_id, args.changes())
        if updated is None:
            return failure(MEAL_NOT_FOUND)
        self.audit_service.record_event(
            user_id=ctx.user_id,
            entity_type="meal",
            entity_id=meal_id,
            event_type="edit",
            before=meal_payload(previous),
            after=meal_payload(updated),
        )
        return success(
            "edit",
            previous=meal_payload(previous),
            updated=meal_payload(updated),
        )

    def _delete(self, ctx: ExecutionContext, args: MealDelete) -> ToolResult:
        meal_id = parse_uuid(args.meal_id)
        if meal_id is None:
            return failure(MEAL_NOT_FOUND)
        deleted = self.repository.delete_meal(ctx.user_id, meal_id)
        if deleted is None:
            return failure(MEAL_NOT_FOUND)
        self.audit_service.record_event(
            user_id=ctx.user_id,
            entity_type="meal",
            entity_id=meal_id,
            event_type="delete",
            before=meal_payload(deleted),
            after=None,
        )
        return success("delete", deleted=meal_payload(deleted))


def meal_payload(meal: MealEntry) -> dict[str, object]:
    """Serialize a meal for tool results."""
    return {
        "id": str(meal.id),
        "name": meal.name,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fat": meal.fat,
        "servings": meal.servings,
        "date": meal.date.isoformat(),
        "loggedAt": meal.logged_at.isoformat(),
    }


def totals_payload(totals: MacroTotals) -> dict[str, int]:
    return {
        "calories": totals.calories,
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fat": totals.fat,
    }
