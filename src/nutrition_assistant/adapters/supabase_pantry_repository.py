"""Supabase repository for pantry items."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_assistant.adapters.postgrest_filters import contains_pattern
from nutrition_assistant.domain.pantry import ItemCategory, NewItem, PantryItem
from nutrition_assistant.services.pantry import PantryRepository

PANTRY_COLUMNS = "id, name, category, quantity, unit, created_at"


@dataclass
class SupabasePantryRepository(PantryRepository):
    """Supabase implementation for pantry items."""

    client: Client

    def list_items(self, user_id: str) -> list[PantryItem]:
        """Return all pantry items, most recently created first."""
        response = (
            self.client.table("pantry_items")
            .select(PANTRY_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [parse_item_row(row) for row in response.data or []]

    def create_item(self, user_id: str, item: NewItem) -> PantryItem:
        """Create a pantry item and return it."""
        response = (
            self.client.table("pantry_items")
            .insert(
                {
                    "user_id": user_id,
                    "name": item.name,
                    "category": str(item.category) if item.category else None,
                    "quantity": item.quantity,
                    "unit": item.unit,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create pantry item")
        return parse_item_row(response.data[0])

    def update_item(
        self, user_id: str, item_id: UUID, changes: dict[str, object]
    ) -> PantryItem | None:
        """Patch an owned item and return the stored result."""
        response = (
            self.client.table("pantry_items")
            .update({**changes, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(item_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return parse_item_row(response.data[0])

    def delete_item(self, user_id: str, item_id: UUID) -> PantryItem | None:
        """Delete an owned item and return it."""
        response = (
            self.client.table("pantry_items")
            .delete()
            .eq("id", str(item_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return parse_item_row(response.data[0])

    def find_latest_by_name(self, user_id: str, term: str) -> PantryItem | None:
        """Return the most recently created item whose name contains term."""
        response = (
            self.client.table("pantry_items")
            .select(PANTRY_COLUMNS)
            .eq("user_id", user_id)
            .ilike("name", contains_pattern(term))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_item_row(response.data[0])


def parse_item_row(row: dict[str, object]) -> PantryItem:
    """Build a pantry item from a stored row."""
    return PantryItem(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        category=parse_category(row.get("category")),
        quantity=parse_quantity(row.get("quantity")),
        unit=str(row["unit"]) if row.get("unit") else None,
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def parse_category(value: object) -> ItemCategory | None:
    """Read a stored category, tolerating values outside the known set."""
    if not value:
        return None
    try:
        return ItemCategory(str(value))
    except ValueError:
        return ItemCategory.OTHER


def parse_quantity(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
