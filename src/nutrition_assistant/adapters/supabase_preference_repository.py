"""Supabase repository for food preferences."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_assistant.domain.preferences import Preference, PreferenceCategory
from nutrition_assistant.services.preferences import PreferenceRepository

PREFERENCE_COLUMNS = "id, category, value, notes"


@dataclass
class SupabasePreferenceRepository(PreferenceRepository):
    """Supabase implementation keyed by (user_id, category, value)."""

    client: Client

    def save_preference(
        self,
        user_id: str,
        category: PreferenceCategory,
        value_key: str,
        notes: str | None,
    ) -> tuple[Preference, bool]:
        """Insert unless the key exists, then refresh notes when given.

        The insert relies on the table's unique key, so two concurrent saves
        of the same preference produce one row.
        """
        inserted = (
            self.client.table("food_preferences")
            .upsert(
                {
                    "user_id": user_id,
                    "category": str(category),
                    "value": value_key,
                    "notes": notes,
                },
                on_conflict="user_id,category,value",
                ignore_duplicates=True,
            )
            .execute()
        )
        if inserted.data:
            return _parse_preference(inserted.data[0]), True

        if notes:
            response = (
                self.client.table("food_preferences")
                .update(
                    {"notes": notes, "updated_at": datetime.now(tz=UTC).isoformat()}
                )
                .eq("user_id", user_id)
                .eq("category", str(category))
                .eq("value", value_key)
                .execute()
            )
        else:
            response = (
                self.client.table("food_preferences")
                .select(PREFERENCE_COLUMNS)
                .eq("user_id", user_id)
                .eq("category", str(category))
                .eq("value", value_key)
                .limit(1)
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to save preference")
        return _parse_preference(response.data[0]), False

    def delete_preference(
        self, user_id: str, category: PreferenceCategory, value_key: str
    ) -> Preference | None:
        """Delete a preference by natural key and return it."""
        response = (
            self.client.table("food_preferences")
            .delete()
            .eq("user_id", user_id)
            .eq("category", str(category))
            .eq("value", value_key)
            .execute()
        )
        if not response.data:
            return None
        return _parse_preference(response.data[0])


def _parse_preference(row: dict[str, object]) -> Preference:
    notes = row.get("notes")
    return Preference(
        id=UUID(str(row["id"])),
        category=PreferenceCategory(str(row["category"])),
        value=str(row["value"]),
        notes=str(notes) if notes is not None else None,
    )
