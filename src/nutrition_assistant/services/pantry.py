"""Pantry inventory operations exposed to the assistant."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.pantry import NewItem, PantryItem
from nutrition_assistant.services.aggregation import group_by_category
from nutrition_assistant.services.normalize import clean_text, contains, parse_uuid
from nutrition_assistant.tools.models import (
    PantryAdd,
    PantryArgs,
    PantryDelete,
    PantryQuery,
    PantryUpdate,
)
from nutrition_assistant.tools.results import ToolResult, failure, success

ITEM_NOT_FOUND = "Item not found"


class PantryRepository(Protocol):
    """Persistence interface for pantry items, scoped by user."""

    def list_items(self, user_id: str) -> list[PantryItem]:
        """Return all pantry items, most recently created first."""

    def create_item(self, user_id: str, item: NewItem) -> PantryItem:
        """Create a pantry item and return it."""

    def update_item(
        self, user_id: str, item_id: UUID, changes: dict[str, object]
    ) -> PantryItem | None:
        """Patch an owned item and return the stored result."""

    def delete_item(self, user_id: str, item_id: UUID) -> PantryItem | None:
        """Delete an owned item and return it."""

    def find_latest_by_name(self, user_id: str, term: str) -> PantryItem | None:
        """Return the most recently created item whose name contains term."""


@dataclass
class PantryOperations:
    """Dispatcher for the ``pantry`` tool group."""

    repository: PantryRepository

    def handle(self, ctx: ExecutionContext, args: PantryArgs) -> ToolResult:
        """Run the pantry operation selected by the argument variant."""
        if isinstance(args, PantryAdd):
            return self._add(ctx, args)
        if isinstance(args, PantryUpdate):
            return self._update(ctx, args)
        if isinstance(args, PantryDelete):
            return self._delete(ctx, args)
        return self._query(ctx, args)

    def _query(self, ctx: ExecutionContext, args: PantryQuery) -> ToolResult:
        items = self.repository.list_items(ctx.user_id)
        if args.category:
            items = [item for item in items if item.category == args.category]
        if args.search:
            search = args.search
            items = [item for item in items if contains(item.name, search)]

        grouped = group_by_category(items)
        return success(
            "query",
            totalItems=len(items),
            byCategory={
                category: [_item_summary(item) for item in category_items]
                for category, category_items in grouped.items()
            },
        )

    def _add(self, ctx: ExecutionContext, args: PantryAdd) -> ToolResult:
        item = self.repository.create_item(
            ctx.user_id,
            NewItem(
                name=args.name,
                category=args.category,
                quantity=args.quantity,
                unit=clean_text(args.unit),
            ),
        )
        return success("add", added=pantry_payload(item))

    def _update(self, ctx: ExecutionContext, args: PantryUpdate) -> ToolResult:
        item_id = parse_uuid(args.item_id)
        if item_id is None:
            return failure(ITEM_NOT_FOUND)
        updated = self.repository.update_item(ctx.user_id, item_id, args.changes())
        if updated is None:
            return failure(ITEM_NOT_FOUND)
        return success("update", updated=pantry_payload(updated))

    def _delete(self, ctx: ExecutionContext, args: PantryDelete) -> ToolResult:
        if args.item_id:
            item_id = parse_uuid(args.item_id)
            deleted = (
                self.repository.delete_item(ctx.user_id, item_id) if item_id else None
            )
            if deleted is None:
                return failure(ITEM_NOT_FOUND)
        else:
            name = args.name or ""
            match = self.repository.find_latest_by_name(ctx.user_id, name)
            if match is None:
                return failure(f'Item "{name}" not found in pantry')
            deleted = self.repository.delete_item(ctx.user_id, match.id)
            if deleted is None:
                return failure(f'Item "{name}" not found in pantry')
        return success("delete", deleted={"id": str(deleted.id), "name": deleted.name})


def pantry_payload(item: PantryItem) -> dict[str, object]:
    """Serialize a pantry item for tool results."""
    return {
        "id": str(item.id),
        "name": item.name,
        "category": str(item.category) if item.category else None,
        "quantity": item.quantity,
        "unit": item.unit,
    }


def _item_summary(item: PantryItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit,
    }
