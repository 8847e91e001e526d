"""Supabase repository for shopping lists and their items."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_assistant.adapters.supabase_pantry_repository import (
    parse_category,
    parse_quantity,
)
from nutrition_assistant.domain.pantry import NewItem
from nutrition_assistant.domain.shopping import ShoppingList, ShoppingListItem
from nutrition_assistant.services.shopping import ShoppingListRepository

LIST_COLUMNS = "id, name, updated_at"
ITEM_COLUMNS = "id, list_id, name, category, quantity, unit, checked, created_at"


@dataclass
class SupabaseShoppingListRepository(ShoppingListRepository):
    """Supabase implementation for shopping lists.

    Items carry no user column; ownership is checked through the list they
    belong to, so every item query is restricted to the user's list ids.
    """

    client: Client

    def list_lists(self, user_id: str) -> list[ShoppingList]:
        """Return the user's lists, most recently updated first."""
        response = (
            self.client.table("shopping_lists")
            .select(LIST_COLUMNS)
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .execute()
        )
        return [_parse_list(row) for row in response.data or []]

    def get_list_by_name(self, user_id: str, name: str) -> ShoppingList | None:
        """Return the user's oldest list with exactly this name."""
        response = (
            self.client.table("shopping_lists")
            .select(LIST_COLUMNS)
            .eq("user_id", user_id)
            .eq("name", name)
            .order("created_at")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_list(response.data[0])

    def create_list(self, user_id: str, name: str) -> ShoppingList:
        """Create a list and return it."""
        response = (
            self.client.table("shopping_lists")
            .insert({"user_id": user_id, "name": name})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create shopping list")
        return _parse_list(response.data[0])

    def rename_list(
        self, user_id: str, list_id: UUID, name: str
    ) -> ShoppingList | None:
        """Rename an owned list and return it."""
        response = (
            self.client.table("shopping_lists")
            .update({"name": name, "updated_at": _now()})
            .eq("id", str(list_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_list(response.data[0])

    def delete_list(self, user_id: str, list_id: UUID) -> ShoppingList | None:
        """Delete an owned list; its items go with it via the foreign key."""
        response = (
            self.client.table("shopping_lists")
            .delete()
            .eq("id", str(list_id))
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_list(response.data[0])

    def touch_list(self, user_id: str, list_id: UUID) -> None:
        """Refresh the updated timestamp of an owned list."""
        self.client.table("shopping_lists").update({"updated_at": _now()}).eq(
            "id", str(list_id)
        ).eq("user_id", user_id).execute()

    def list_items(
        self, user_id: str, list_id: UUID | None = None
    ) -> list[ShoppingListItem]:
        """Return items on the user's lists, optionally one list only."""
        list_ids = self._owned_list_ids(user_id)
        if list_id is not None:
            list_ids = [owned for owned in list_ids if owned == str(list_id)]
        if not list_ids:
            return []
        response = (
            self.client.table("shopping_list_items")
            .select(ITEM_COLUMNS)
            .in_("list_id", list_ids)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def create_items(
        self, list_id: UUID, items: list[NewItem]
    ) -> list[ShoppingListItem]:
        """Insert items onto a list in one batch; the list must be owned."""
        if not items:
            return []
        payload = [
            {
                "list_id": str(list_id),
                "name": item.name,
                "category": str(item.category) if item.category else None,
                "quantity": item.quantity,
                "unit": item.unit,
            }
            for item in items
        ]
        response = self.client.table("shopping_list_items").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to add shopping list items")
        return [_parse_item(row) for row in response.data]

    def find_items_by_ids(
        self, user_id: str, item_ids: list[UUID]
    ) -> list[ShoppingListItem]:
        """Return the items among ids that sit on lists the user owns."""
        list_ids = self._owned_list_ids(user_id)
        if not list_ids or not item_ids:
            return []
        response = (
            self.client.table("shopping_list_items")
            .select(ITEM_COLUMNS)
            .in_("id", [str(item_id) for item_id in item_ids])
            .in_("list_id", list_ids)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def delete_items(self, user_id: str, item_ids: list[UUID]) -> None:
        """Delete owned items by id."""
        list_ids = self._owned_list_ids(user_id)
        if not list_ids or not item_ids:
            return
        self.client.table("shopping_list_items").delete().in_(
            "id", [str(item_id) for item_id in item_ids]
        ).in_("list_id", list_ids).execute()

    def mark_checked(self, user_id: str, item_id: UUID) -> ShoppingListItem | None:
        """Flag an owned item as checked and return it."""
        list_ids = self._owned_list_ids(user_id)
        if not list_ids:
            return None
        response = (
            self.client.table("shopping_list_items")
            .update({"checked": True, "updated_at": _now()})
            .eq("id", str(item_id))
            .in_("list_id", list_ids)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def _owned_list_ids(self, user_id: str) -> list[str]:
        response = (
            self.client.table("shopping_lists")
            .select("id")
            .eq("user_id", user_id)
            .execute()
        )
        return [str(row["id"]) for row in response.data or []]


def _parse_list(row: dict[str, object]) -> ShoppingList:
    return ShoppingList(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )


def _parse_item(row: dict[str, object]) -> ShoppingListItem:
    return ShoppingListItem(
        id=UUID(str(row["id"])),
        list_id=UUID(str(row["list_id"])),
        name=str(row["name"]),
        category=parse_category(row.get("category")),
        quantity=parse_quantity(row.get("quantity")),
        unit=str(row["unit"]) if row.get("unit") else None,
        checked=bool(row.get("checked")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()
