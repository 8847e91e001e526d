"""Supabase repository for the meal diary."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_assistant.adapters.postgrest_filters import contains_pattern
from nutrition_assistant.domain.meals import MealEntry, NewMeal
from nutrition_assistant.services.meals import MealRepository

MEAL_COLUMNS = "id, name, servings, calories, protein, carbs, fat, date, logged_at"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal entries."""

    client: Client

    def list_recent(self, user_id: str, limit: int) -> list[MealEntry]:
        """Return the newest meals by logged time."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_by_date(self, user_id: str, day: date) -> list[MealEntry]:
        """Return all meals attributed to a day, newest first."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def search(self, user_id: str, term: str, limit: int) -> list[MealEntry]:
        """Return meals whose name contains the term, newest first."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .ilike("name", contains_pattern(term))
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_between(
        self, user_id: str, start: date, end: date, limit: int
    ) -> list[MealEntry]:
        """Return meals dated within [start, end], newest first."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_logged_since(self, user_id: str, since: datetime) -> list[MealEntry]:
        """Return meals logged at or after an instant, newest first."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_COLUMNS)
            .eq("user_id", user_id)
            .gte("logged_at", since.isoformat())
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, user_id: str, meal_id: UUID) -> MealEntry | None:
        """Return an owned meal by id."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal(self, user_id: str, meal: NewMeal) -> MealEntry:
        """Create a meal entry and return it."""
        response = (
            self.client.table("meal_logs")
            .insert(
                {
                    "user_id": user_id,
                    "name": meal.name,
                    "servings": meal.servings,
                    "calories": meal.calories,
                    "protein": meal.protein,
                    "carbs": meal.carbs,
                    "fat": meal.fat,
                    "date": meal.date.isoformat(),
                    "logged_at": meal.logged_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return _parse_meal(response.data[0])

    def update_meal(
        self, user_id: str, meal_id: UUID, changes: dict[str, object]
    ) -> MealEntry | None:
        """Patch an owned meal and return the stored result."""
        response = (
            self.client.table("meal_logs")
            .update({**changes, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(meal_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def delete_meal(self, user_id: str, meal_id: UUID) -> MealEntry | None:
        """Delete an owned meal and return what was removed."""
        response = (
            self.client.table("meal_logs")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])


def _parse_meal(row: dict[str, object]) -> MealEntry:
    return MealEntry(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        servings=float(row.get("servings") or 1),
        calories=int(row.get("calories") or 0),
        protein=_optional_int(row.get("protein")),
        carbs=_optional_int(row.get("carbs")),
        fat=_optional_int(row.get("fat")),
        date=date.fromisoformat(str(row["date"])),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
    )


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)
